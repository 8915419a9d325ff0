"""Tests for waypost.context — the in-flight navigation ContextVar."""

import pytest

from waypost.context import get_navigation, in_navigation
from waypost.navigator import Navigator
from waypost.request import NavigationRequest


class TestNavigationContext:
    def test_outside_navigation(self) -> None:
        assert in_navigation() is False
        with pytest.raises(LookupError):
            get_navigation()

    @pytest.mark.anyio
    async def test_visible_to_hooks(self, crisis_tree) -> None:
        seen: list[NavigationRequest] = []

        def on_activate(previous, current) -> None:
            assert in_navigation() is True
            seen.append(get_navigation())

        navigator = Navigator(crisis_tree(on_activate=on_activate))
        await navigator.navigate("/crises/4")

        assert len(seen) == 1
        assert seen[0].to_state.path == "/crises/4"
        assert in_navigation() is False

    @pytest.mark.anyio
    async def test_reset_after_fault(self, crisis_tree) -> None:
        def on_activate(previous, current) -> None:
            raise RuntimeError("boom")

        navigator = Navigator(crisis_tree(on_activate=on_activate))
        with pytest.raises(Exception, match="boom"):
            await navigator.navigate("/crises/4")

        assert in_navigation() is False
