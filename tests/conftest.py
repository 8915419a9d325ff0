"""Shared fixtures for waypost tests."""

from collections.abc import Callable

import pytest

from waypost.routing import RouteConfig, RouteTree
from waypost.testing import HookRecorder


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def recorder() -> HookRecorder:
    return HookRecorder()


@pytest.fixture
def crisis_tree(recorder: HookRecorder) -> Callable[..., RouteTree]:
    """Build ``/crises`` (list) with a ``{id}`` detail child, plus ``/heroes``.

    Keyword arguments script the detail component's capabilities.
    """

    def build(**detail_hooks: object) -> RouteTree:
        return RouteTree(
            [
                RouteConfig(
                    "crises",
                    recorder.component("list"),
                    children=(
                        RouteConfig("{id}", recorder.component("detail", **detail_hooks)),
                    ),
                ),
                RouteConfig("heroes", recorder.component("heroes")),
            ]
        )

    return build
