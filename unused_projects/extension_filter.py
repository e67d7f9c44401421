"""Filter out extensions that never belong in a project report.

Drops:
- core-provided extensions
- anything that is not a module (themes, install profiles)
- test-only extensions (``tests`` anywhere in the path)
"""

from __future__ import annotations

from collections.abc import Iterable
from collections.abc import Mapping

from .models import ExtensionRecord

CORE_ORIGIN = "core"
MODULE_KIND = "module"


def is_reportable(record: ExtensionRecord) -> bool:
    """Return True if the extension should take part in grouping."""
    return record.origin != CORE_ORIGIN and record.kind == MODULE_KIND and "tests" not in record.subpath


def filter_extensions(
    records: Iterable[ExtensionRecord] | Mapping[str, ExtensionRecord],
) -> list[ExtensionRecord]:
    """Keep reportable extensions, preserving input order."""
    if isinstance(records, Mapping):
        records = records.values()
    return [record for record in records if is_reportable(record)]
