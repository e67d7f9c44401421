"""Path segment helpers for inferring project ownership from install paths.

Extensions without project metadata are assumed to live below a directory
named after their project, e.g. ``contrib/webform/modules/webform_ui``.
"""

from __future__ import annotations

from collections.abc import Iterator

SEPARATOR = "/"


def split_segments(subpath: str) -> list[str]:
    """Split a slash-separated path into its components.

    An empty path is a single empty component.
    """
    return subpath.split(SEPARATOR)


def walk_leaf_to_root(segments: list[str]) -> Iterator[str]:
    """Yield segments from the most specific directory to the least specific."""
    yield from reversed(segments)


def basename(subpath: str) -> str:
    """Last component of the path."""
    return split_segments(subpath)[-1]


def is_within(subpath: str, project_path: str) -> bool:
    """Return True if ``subpath`` is ``project_path`` or lies below it.

    Both sides get a trailing separator so ``foo_bar`` is not inside ``foo``.
    """
    return (subpath + SEPARATOR).startswith(project_path + SEPARATOR)
