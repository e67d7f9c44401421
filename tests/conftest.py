"""Pytest configuration for unused-projects tests."""

import pytest

from unused_projects.models import ExtensionRecord


def make_record(name: str, subpath: str, project: str | None = None, enabled: bool = False, **kwargs) -> ExtensionRecord:
    """Build an extension record with test-friendly defaults."""
    return ExtensionRecord(
        name=name,
        subpath=subpath,
        declared_project=project,
        display_name=kwargs.pop("display_name", name.replace("_", " ").title()),
        enabled=enabled,
        **kwargs,
    )


@pytest.fixture
def record():
    return make_record
