"""Tests for path segment helpers."""

from unused_projects.path_walk import basename
from unused_projects.path_walk import is_within
from unused_projects.path_walk import split_segments
from unused_projects.path_walk import walk_leaf_to_root


class TestSplitSegments:
    def test_nested_path(self) -> None:
        assert split_segments("contrib/foo/foo_sub") == ["contrib", "foo", "foo_sub"]

    def test_single_component(self) -> None:
        assert split_segments("lone") == ["lone"]

    def test_empty_path_is_one_empty_component(self) -> None:
        assert split_segments("") == [""]


class TestWalkLeafToRoot:
    def test_most_specific_first(self) -> None:
        assert list(walk_leaf_to_root(["contrib", "foo", "foo_sub"])) == ["foo_sub", "foo", "contrib"]

    def test_does_not_mutate_input(self) -> None:
        segments = ["a", "b"]
        list(walk_leaf_to_root(segments))
        assert segments == ["a", "b"]


def test_basename() -> None:
    assert basename("contrib/foo/foo_sub") == "foo_sub"
    assert basename("foo") == "foo"
    assert basename("") == ""


class TestIsWithin:
    def test_same_path(self) -> None:
        assert is_within("contrib/foo", "contrib/foo")

    def test_child_path(self) -> None:
        assert is_within("contrib/foo/sub", "contrib/foo")

    def test_sibling_with_common_prefix(self) -> None:
        """foo_bar is not inside foo."""
        assert not is_within("foo_bar/x", "foo")

    def test_unrelated_path(self) -> None:
        assert not is_within("custom/foo/sub", "contrib/foo")

    def test_parent_is_not_within_child(self) -> None:
        assert not is_within("contrib", "contrib/foo")
