"""Tests for the extension filter."""

from unused_projects.extension_filter import filter_extensions
from unused_projects.extension_filter import is_reportable


def test_keeps_contributed_modules(record):
    webform = record("webform", "modules/contrib/webform")
    assert filter_extensions([webform]) == [webform]


def test_drops_core_modules(record):
    node = record("node", "core/modules/node", origin="core")
    assert filter_extensions([node]) == []


def test_drops_themes(record):
    olivero = record("olivero", "themes/contrib/olivero", kind="theme")
    assert not is_reportable(olivero)


def test_drops_test_modules(record):
    """Anything with 'tests' in the path is a test fixture module."""
    fixture = record("webform_test", "modules/contrib/webform/tests/modules/webform_test")
    assert not is_reportable(fixture)


def test_tests_substring_anywhere_in_path(record):
    # Substring match, not a path component match
    assert not is_reportable(record("x", "modules/contrib/mytests/x"))


def test_preserves_order(record):
    records = [
        record("b", "modules/b"),
        record("core_thing", "core/modules/core_thing", origin="core"),
        record("a", "modules/a"),
    ]
    assert [r.name for r in filter_extensions(records)] == ["b", "a"]


def test_accepts_mapping(record):
    records = {"a": record("a", "modules/a"), "olivero": record("olivero", "themes/olivero", kind="theme")}
    assert [r.name for r in filter_extensions(records)] == ["a"]
