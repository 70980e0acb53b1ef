"""Tests for waypoint.urls — path splitting and joining."""

from waypoint.urls import join_paths, split_path


class TestSplitPath:
    def test_segments(self) -> None:
        assert split_path("/blog/posts/") == ["blog", "posts"]

    def test_root(self) -> None:
        assert split_path("/") == []

    def test_collapses_double_slashes(self) -> None:
        assert split_path("//a//b") == ["a", "b"]


class TestJoinPaths:
    def test_absolute(self) -> None:
        assert join_paths("/blog", "/posts/") == "/blog/posts"

    def test_relative(self) -> None:
        assert join_paths("a", "b") == "a/b"

    def test_root_and_empty(self) -> None:
        assert join_paths("/", "") == "/"

    def test_root_and_root(self) -> None:
        assert join_paths("/", "/") == "/"

    def test_skips_empty_parts(self) -> None:
        assert join_paths("", "/a", "", "b") == "/a/b"

    def test_no_parts(self) -> None:
        assert join_paths() == ""
