"""Tests for waypost.state — RouterState snapshots."""

import pytest

from waypost.state import RouterState, split_path


class TestSplitPath:
    def test_strips_slashes(self) -> None:
        assert split_path("/crises/1/") == ("crises", "1")

    def test_root(self) -> None:
        assert split_path("/") == ()

    def test_collapses_empty_parts(self) -> None:
        assert split_path("//crises//1") == ("crises", "1")


class TestRouterState:
    def test_from_path(self) -> None:
        state = RouterState.from_path("/crises/1?tab=notes&q=")
        assert state.segments == ("crises", "1")
        assert state.query == {"tab": "notes", "q": ""}
        assert state.params == {}

    def test_explicit_query_wins(self) -> None:
        state = RouterState.from_path("/crises?tab=a", query={"tab": "b"})
        assert state.query == {"tab": "b"}

    def test_path(self) -> None:
        assert RouterState.from_path("crises/1").path == "/crises/1"
        assert RouterState().path == "/"

    def test_equality_ignores_query(self) -> None:
        a = RouterState.from_path("/crises/1?tab=notes")
        b = RouterState.from_path("/crises/1")
        assert a == b
        assert hash(a) == hash(b)
        assert not a.same_location(b)

    def test_equality_includes_params(self) -> None:
        a = RouterState.from_path("/crises/1", params={"id": "1"})
        b = RouterState.from_path("/crises/1")
        assert a != b

    def test_str_includes_query(self) -> None:
        assert str(RouterState.from_path("/crises/1?tab=notes")) == "/crises/1?tab=notes"
        assert str(RouterState.from_path("/crises/1")) == "/crises/1"

    def test_with_query_copies(self) -> None:
        state = RouterState.from_path("/crises/1")
        updated = state.with_query(tab="notes")
        assert updated.query == {"tab": "notes"}
        assert state.query == {}

    def test_with_params(self) -> None:
        state = RouterState.from_path("/crises/1").with_params({"id": "1"})
        assert state.params == {"id": "1"}

    def test_frozen(self) -> None:
        state = RouterState()
        with pytest.raises(AttributeError):
            state.segments = ("x",)  # type: ignore[misc]
