"""NavigationRequest — one navigation attempt, planned against the tree.

Built by ``RouteTree.plan()`` and consumed by ``attempt_navigation()``.
Only nodes whose state actually changes appear in it:

- ``leaving``  — occupied nodes that change, root to leaf.
- ``entering`` — target nodes (with their local params), root to leaf.

A node whose params change (``/crises/1`` -> ``/crises/2``) is in both.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from waypost.state import RouterState

if TYPE_CHECKING:
    from waypost.routing.tree import RouteNode


@dataclass(frozen=True, slots=True, eq=False)
class Placement:
    """A target node and the params it matched locally."""

    node: RouteNode
    params: dict[str, str]


@dataclass(frozen=True, slots=True)
class NavigationRequest:
    """A single planned navigation from ``from_state`` to ``to_state``."""

    from_state: RouterState
    to_state: RouterState
    leaving: tuple[RouteNode, ...] = ()
    entering: tuple[Placement, ...] = ()

    @property
    def affected_nodes(self) -> tuple[RouteNode, ...]:
        """Every node whose state changes, root to leaf.

        At equal depth a leaving node sorts before the node replacing it.
        Reverse the result for deactivation order.
        """
        seen: set[int] = set()
        ordered: list[RouteNode] = []
        for node in (*self.leaving, *(p.node for p in self.entering)):
            if id(node) not in seen:
                seen.add(id(node))
                ordered.append(node)
        ordered.sort(key=lambda n: n.depth)
        return tuple(ordered)

    @property
    def is_empty(self) -> bool:
        """True when nothing changes (navigating to the current location)."""
        return not self.leaving and not self.entering
