"""Report installed extensions grouped by the project that ships them."""

from .extension_filter import filter_extensions
from .grouping import find_project_path
from .grouping import group_extensions
from .models import ExtensionRecord
from .models import Project
from .models import Row
from .models import Solo
from .report import ReportOptions
from .report import build_rows
from .report import extension_status

__all__ = [
    "ExtensionRecord",
    "Project",
    "ReportOptions",
    "Row",
    "Solo",
    "build_rows",
    "extension_status",
    "filter_extensions",
    "find_project_path",
    "group_extensions",
]
