"""Turn project groups into report rows."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from dataclasses import field
from typing import Literal

from .models import ExtensionRecord
from .models import Group
from .models import Project
from .models import Row
from .models import Solo

logger = logging.getLogger(__name__)

Status = Literal["enabled", "disabled"]
STATUSES: tuple[str, ...] = ("enabled", "disabled")


@dataclass
class ReportOptions:
    """Which groups and rows to include in the report."""

    status_filter: set[str] = field(default_factory=lambda: {"disabled"})
    show_subs: bool = False
    hide_modules: bool = False


@dataclass
class ReportSummary:
    """Counts shown under the report table."""

    projects: int = 0
    solo_modules: int = 0
    enabled: int = 0
    disabled: int = 0


def extension_status(item: ExtensionRecord | Group) -> Status:
    """Status of an extension or a group.

    A project is enabled if any of its members is enabled.
    """
    if isinstance(item, ExtensionRecord):
        return "enabled" if item.enabled else "disabled"
    if isinstance(item, Solo):
        return extension_status(item.record)
    return "enabled" if any(member.enabled for member in item.members.values()) else "disabled"


def parse_status_filter(text: str) -> set[str]:
    """Parse a comma-separated, case-insensitive list of statuses.

    Raises:
        ValueError: If a status other than enabled/disabled is named.
    """
    statuses = {part.strip() for part in text.lower().split(",") if part.strip()}
    unknown = sorted(statuses - set(STATUSES))
    if unknown:
        raise ValueError(f"Unknown status: {', '.join(unknown)}. Choices: {', '.join(STATUSES)}")
    return statuses


def build_rows(groups: dict[str, Group], options: ReportOptions | None = None) -> dict[str, Row]:
    """Build report rows keyed by group key (and ``key:member`` for sub-modules)."""
    options = options or ReportOptions()
    rows: dict[str, Row] = {}

    for key, group in groups.items():
        is_project = isinstance(group, Project)
        main = group.main(key) if isinstance(group, Project) else group.record

        if not is_project and options.hide_modules:
            logger.debug(f"Skipping solo module '{key}'")
            continue

        status = extension_status(group)
        if status not in options.status_filter:
            continue

        row_is_module = not options.show_subs or main.name == key
        rows[key] = Row(
            project=key,
            display_name=main.label + (f" ({main.name})" if row_is_module else ""),
            name=main.name,
            status=status.capitalize() if row_is_module else "",
            version=(main.version or "") if row_is_module else "",
            path=main.subpath if row_is_module else "",
        )

        if isinstance(group, Project) and options.show_subs:
            # Without a member named after the project every member is listed here.
            for sub in group.subs(key):
                rows[f"{key}:{sub.name}"] = Row(
                    project="",
                    display_name=f"- {sub.label} ({sub.name})",
                    name=sub.name,
                    status=extension_status(sub).capitalize(),
                    version=sub.version or "",
                    path=sub.subpath,
                )

    logger.debug(f"Built {len(rows)} rows from {len(groups)} groups")
    return rows


def summarize(groups: dict[str, Group]) -> ReportSummary:
    """Count projects, solo modules and group statuses."""
    summary = ReportSummary()
    for group in groups.values():
        if isinstance(group, Project):
            summary.projects += 1
        else:
            summary.solo_modules += 1
        if extension_status(group) == "enabled":
            summary.enabled += 1
        else:
            summary.disabled += 1
    return summary
