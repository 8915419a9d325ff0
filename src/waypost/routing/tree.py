"""Route tree — the static route configuration compiled into an arena.

Routes are declared as nested ``RouteConfig`` records and compiled once
into ``RouteNode`` objects indexed by their full pattern
(``"/crises/{id}"``). The configuration is read-only after compilation;
only node occupancy (the live component instance) changes, and only the
sequencer changes it.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from waypost.errors import ConfigurationError, RouteNotFound
from waypost.hooks import Hooks
from waypost.request import NavigationRequest, Placement
from waypost.routing.params import CONVERTERS, accepts
from waypost.routing.route import PathSegment, RouteConfig
from waypost.state import RouterState, split_path


def parse_pattern(path: str) -> tuple[PathSegment, ...]:
    """Parse a relative route pattern into segments.

    Examples::

        "crises"           -> (PathSegment("crises"),)
        "crises/{id}"      -> (PathSegment("crises"), PathSegment("{id}", is_param=True, ...))
        "{id:int}"         -> (PathSegment("{id:int}", is_param=True, param_type="int"),)
        ""                 -> ()
    """
    segments: list[PathSegment] = []
    for part in split_path(path):
        if part.startswith("<") and part.endswith(">"):
            msg = (
                f"Route pattern {path!r} uses <param> syntax. "
                f"Use {{param}} instead, e.g. {{{part[1:-1]}}}."
            )
            raise ConfigurationError(msg)
        if part.startswith("{") and part.endswith("}"):
            inner = part[1:-1]
            if ":" in inner:
                param_name, param_type = inner.split(":", 1)
            else:
                param_name = inner
                param_type = "str"
            if not param_name:
                msg = f"Route pattern {path!r} has an unnamed parameter."
                raise ConfigurationError(msg)
            if param_type not in CONVERTERS:
                known = ", ".join(sorted(CONVERTERS))
                msg = f"Unknown converter {param_type!r} in {path!r}. Known: {known}."
                raise ConfigurationError(msg)
            segments.append(
                PathSegment(
                    value=part,
                    is_param=True,
                    param_name=param_name,
                    param_type=param_type,
                )
            )
        else:
            segments.append(PathSegment(value=part))
    return tuple(segments)


class RouteNode:
    """A node in the route tree. Owns at most one live component instance.

    ``params`` and ``state`` describe what the live instance currently
    represents; both are cleared when the instance is detached.
    """

    __slots__ = (
        "children",
        "config",
        "depth",
        "hooks",
        "instance",
        "key",
        "params",
        "parent",
        "pattern",
        "state",
    )

    def __init__(
        self,
        config: RouteConfig,
        key: str,
        parent: RouteNode | None,
        pattern: tuple[PathSegment, ...],
    ) -> None:
        self.config = config
        self.key = key
        self.parent = parent
        self.pattern = pattern
        self.depth: int = 0 if parent is None else parent.depth + 1
        self.children: list[RouteNode] = []
        self.instance: Any = None
        self.hooks: Hooks = Hooks()
        self.params: dict[str, str] = {}
        self.state: RouterState | None = None

    @property
    def occupied(self) -> bool:
        return self.instance is not None

    @property
    def is_dynamic(self) -> bool:
        return any(seg.is_param for seg in self.pattern)

    def match(self, parts: tuple[str, ...], index: int) -> dict[str, str] | None:
        """Match this node's pattern against ``parts[index:]``.

        Returns the locally captured params, or ``None`` on mismatch.
        """
        end = index + len(self.pattern)
        if end > len(parts):
            return None
        local: dict[str, str] = {}
        for seg, part in zip(self.pattern, parts[index:end], strict=True):
            if seg.is_param:
                if not accepts(part, seg.param_type):
                    return None
                local[seg.param_name or ""] = part
            elif seg.value != part:
                return None
        return local

    def attach(self, instance: Any, params: dict[str, str], state: RouterState) -> None:
        """Make *instance* the live component of this node."""
        self.hooks = Hooks.of(instance)
        self.instance = instance
        self.params = dict(params)
        self.state = state

    def retarget(self, params: dict[str, str], state: RouterState) -> None:
        """Point the live (reused) instance at a new state."""
        self.params = dict(params)
        self.state = state

    def detach(self) -> Any:
        """Drop the live instance and return it."""
        instance = self.instance
        self.instance = None
        self.hooks = Hooks()
        self.params = {}
        self.state = None
        return instance

    def __repr__(self) -> str:
        status = "occupied" if self.occupied else "empty"
        return f"<RouteNode {self.key!r} {status}>"


@dataclass(frozen=True, slots=True)
class Resolution:
    """A target state matched against the tree.

    ``state`` carries the merged params of every placement.
    """

    state: RouterState
    placements: tuple[Placement, ...]

    @property
    def chain(self) -> tuple[RouteNode, ...]:
        return tuple(p.node for p in self.placements)


class RouteTree:
    """Compiled route tree with segment-walk resolution.

    Usage::

        tree = RouteTree([
            RouteConfig("crises", CrisisList, children=(
                RouteConfig("{id}", CrisisDetail),
            )),
        ])
        resolution = tree.resolve(RouterState.from_path("/crises/1"))
        request = tree.plan(current_state, resolution)
    """

    __slots__ = ("_nodes", "root")

    def __init__(self, routes: Sequence[RouteConfig]) -> None:
        self.root = RouteNode(RouteConfig(""), key="", parent=None, pattern=())
        self._nodes: dict[str, RouteNode] = {}
        for config in routes:
            self._add(config, self.root, frozenset())

    def _add(self, config: RouteConfig, parent: RouteNode, inherited: frozenset[str]) -> None:
        if config.component is None:
            msg = f"Route {config.path!r} has no component factory."
            raise ConfigurationError(msg)

        pattern = parse_pattern(config.path)
        key = parent.key + "/" + "/".join(seg.value for seg in pattern)
        if key in self._nodes:
            msg = f"Duplicate route {key!r}."
            raise ConfigurationError(msg)

        names = [seg.param_name for seg in pattern if seg.is_param]
        clashes = sorted(n for n in names if n in inherited or names.count(n) > 1)
        if clashes:
            msg = f"Route {key!r} redeclares parameter(s): {', '.join(clashes)}."
            raise ConfigurationError(msg)

        node = RouteNode(config, key=key, parent=parent, pattern=pattern)
        parent.children.append(node)
        self._nodes[key] = node

        scope = inherited | {n for n in names if n}
        for child in config.children:
            self._add(child, node, scope)

    def node(self, key: str) -> RouteNode:
        """Look up a node by its full pattern, e.g. ``"/crises/{id}"``."""
        try:
            return self._nodes[key]
        except KeyError:
            msg = f"No route node {key!r}"
            raise KeyError(msg) from None

    @property
    def nodes(self) -> list[RouteNode]:
        """All nodes in declaration order (depth-first)."""
        return list(self._nodes.values())

    def active_chain(self) -> list[RouteNode]:
        """Occupied nodes from the root down, following the live branch."""
        chain: list[RouteNode] = []
        node: RouteNode | None = self.root
        while node is not None:
            node = next((c for c in node.children if c.occupied), None)
            if node is not None:
                chain.append(node)
        return chain

    def live_state(self) -> RouterState:
        """A state describing the occupied branch, without a query.

        Equal to the last target after a completed navigation; after an
        activation fault it names only the nodes that are still live.
        """
        segments: list[str] = []
        params: dict[str, str] = {}
        for node in self.active_chain():
            for seg in node.pattern:
                if seg.is_param:
                    segments.append(node.params[seg.param_name or ""])
                else:
                    segments.append(seg.value)
            params.update(node.params)
        return RouterState(segments=tuple(segments), params=params)

    # -- Resolution --

    def resolve(self, state: RouterState) -> Resolution:
        """Match *state* against the tree.

        Raises ``RouteNotFound`` if no chain of routes consumes every
        path segment.
        """
        trail = self._match(self.root, state.segments, 0, [])
        if trail is None:
            raise RouteNotFound(state.path)
        params: dict[str, str] = {}
        for placement in trail:
            params.update(placement.params)
        return Resolution(state=state.with_params(params), placements=tuple(trail))

    def _match(
        self,
        node: RouteNode,
        parts: tuple[str, ...],
        index: int,
        trail: list[Placement],
    ) -> list[Placement] | None:
        """Recursively match path parts against the tree."""
        if index == len(parts):
            # All parts consumed: descend into an index child if one exists
            for child in node.children:
                if not child.pattern:
                    return self._match(child, parts, index, [*trail, Placement(child, {})])
            return trail

        # Static children first, then params, then pass-through index children
        ordered = sorted(
            node.children,
            key=lambda c: 2 if not c.pattern else int(c.is_dynamic),
        )
        for child in ordered:
            local = child.match(parts, index)
            if local is None:
                continue
            result = self._match(
                child, parts, index + len(child.pattern), [*trail, Placement(child, local)]
            )
            if result is not None:
                return result
        return None

    # -- Planning --

    def plan(self, from_state: RouterState, target: Resolution) -> NavigationRequest:
        """Build the minimal request taking the live tree to *target*.

        Nodes above the first change stay untouched. When only the query
        string differs the deepest node is still treated as changing, so
        its guards get to see the new query.
        """
        current = self.active_chain()
        entering = target.placements
        shared = 0
        while (
            shared < len(current)
            and shared < len(entering)
            and current[shared] is entering[shared].node
            and current[shared].params == entering[shared].params
        ):
            shared += 1

        if (
            shared == len(current) == len(entering)
            and shared > 0
            and not from_state.same_location(target.state)
        ):
            shared -= 1

        return NavigationRequest(
            from_state=from_state,
            to_state=target.state,
            leaving=tuple(current[shared:]),
            entering=tuple(entering[shared:]),
        )
