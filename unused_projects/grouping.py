"""Group extensions by the project they belong to.

Extensions declaring a project are grouped directly. The rest ("orphans") are
resolved by walking their install path from leaf to root and joining the first
enclosing group whose project path contains them. Orphans nobody claims become
solo modules named after their directory.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .models import ExtensionRecord
from .models import Group
from .models import Project
from .models import Solo
from .path_walk import basename
from .path_walk import is_within
from .path_walk import split_segments
from .path_walk import walk_leaf_to_root

logger = logging.getLogger(__name__)


def find_project_path(group: Group, key: str) -> str:
    """Return the path that stands for the whole group.

    A solo module's own path; else the main member's path; else the shortest
    member path (first one wins on ties).
    """
    if isinstance(group, Solo):
        return group.record.subpath

    if key in group.members:
        return group.members[key].subpath

    path: str | None = None
    for record in group.members.values():
        if path is None or len(record.subpath) < len(path):
            path = record.subpath
    return path or ""


def group_extensions(records: Iterable[ExtensionRecord]) -> dict[str, Group]:
    """Partition extensions into project groups, sorted by group key."""
    groups: dict[str, Group] = {}
    orphans: dict[str, ExtensionRecord] = {}

    for record in records:
        if record.declared_project:
            project = groups.setdefault(record.declared_project, Project())
            assert isinstance(project, Project)
            project.add(record)
        else:
            orphans[record.subpath] = record

    for subpath in sorted(orphans):
        orphan = orphans[subpath]
        key = _resolve_owner(groups, orphan)
        if key is None:
            key = _free_key(groups, orphan)
            groups[key] = Solo(orphan)
            logger.debug(f"Orphan '{orphan.name}' at '{subpath}' is a solo module '{key}'")
            continue

        group = groups[key]
        if isinstance(group, Solo):
            group = group.promote()
            groups[key] = group
        group.add(orphan)
        logger.debug(f"Orphan '{orphan.name}' at '{subpath}' joined project '{key}'")

    return dict(sorted(groups.items()))


def _resolve_owner(groups: dict[str, Group], orphan: ExtensionRecord) -> str | None:
    """Find the nearest enclosing group for an orphan, or None."""
    for segment in walk_leaf_to_root(split_segments(orphan.subpath)):
        group = groups.get(segment)
        if group is None:
            continue
        project_path = find_project_path(group, segment)
        if is_within(orphan.subpath, project_path):
            return segment
        # Name matched but the path is elsewhere; keep walking toward the root.
        logger.debug(f"Group '{segment}' at '{project_path}' does not contain '{orphan.subpath}'")
    return None


def _free_key(groups: dict[str, Group], orphan: ExtensionRecord) -> str:
    """Key for a new solo module: its directory name unless already taken."""
    key = basename(orphan.subpath)
    if key not in groups:
        return key

    candidates = [orphan.name, orphan.subpath]
    suffix = 2
    while all(candidate in groups for candidate in candidates):
        candidates.append(f"{orphan.subpath}#{suffix}")
        suffix += 1
    fallback = next(candidate for candidate in candidates if candidate not in groups)
    logger.warning(f"Group '{key}' already exists elsewhere; keying solo module '{orphan.name}' as '{fallback}'")
    return fallback
