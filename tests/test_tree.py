"""Tests for waypost.routing — pattern parsing, tree compilation, resolution, planning."""

import pytest

from waypost.errors import ConfigurationError, RouteNotFound
from waypost.routing import RouteConfig, RouteTree, parse_pattern
from waypost.state import RouterState


class Component:
    pass


def _state(path: str) -> RouterState:
    return RouterState.from_path(path)


class TestParsePattern:
    def test_static(self) -> None:
        segments = parse_pattern("crises")
        assert len(segments) == 1
        assert segments[0].value == "crises"
        assert segments[0].is_param is False

    def test_multi_static(self) -> None:
        assert [s.value for s in parse_pattern("admin/users")] == ["admin", "users"]

    def test_param(self) -> None:
        segments = parse_pattern("{id}")
        assert segments[0].is_param is True
        assert segments[0].param_name == "id"
        assert segments[0].param_type == "str"

    def test_typed_param(self) -> None:
        assert parse_pattern("{id:int}")[0].param_type == "int"

    def test_index(self) -> None:
        assert parse_pattern("") == ()

    def test_rejects_angle_bracket_param(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            parse_pattern("share/<slug>")
        assert "<param>" in str(exc_info.value)
        assert "{slug}" in str(exc_info.value)

    def test_rejects_unknown_converter(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown converter 'uuid'"):
            parse_pattern("{id:uuid}")

    def test_rejects_unnamed_param(self) -> None:
        with pytest.raises(ConfigurationError, match="unnamed"):
            parse_pattern("{:int}")


class TestRouteTreeCompile:
    def test_keys_are_full_patterns(self) -> None:
        tree = RouteTree(
            [
                RouteConfig(
                    "crises",
                    Component,
                    children=(RouteConfig("", Component), RouteConfig("{id}", Component)),
                )
            ]
        )
        assert [n.key for n in tree.nodes] == ["/crises", "/crises/", "/crises/{id}"]
        assert tree.node("/crises/{id}").depth == 2
        assert tree.node("/crises/{id}").parent is tree.node("/crises")

    def test_missing_component(self) -> None:
        with pytest.raises(ConfigurationError, match="no component"):
            RouteTree([RouteConfig("crises")])

    def test_duplicate_route(self) -> None:
        with pytest.raises(ConfigurationError, match="Duplicate"):
            RouteTree([RouteConfig("crises", Component), RouteConfig("crises/", Component)])

    def test_param_redeclared_by_child(self) -> None:
        with pytest.raises(ConfigurationError, match="redeclares"):
            RouteTree(
                [RouteConfig("{id}", Component, children=(RouteConfig("{id}", Component),))]
            )

    def test_unknown_node(self) -> None:
        tree = RouteTree([RouteConfig("crises", Component)])
        with pytest.raises(KeyError):
            tree.node("/heroes")


class TestResolve:
    @pytest.fixture
    def tree(self) -> RouteTree:
        return RouteTree(
            [
                RouteConfig(
                    "crises",
                    Component,
                    children=(
                        RouteConfig("", Component, name="crisis-list"),
                        RouteConfig("{id:int}", Component, name="crisis"),
                        RouteConfig("new", Component),
                    ),
                ),
                RouteConfig("admin/users", Component),
            ]
        )

    def test_param_is_captured(self, tree: RouteTree) -> None:
        resolution = tree.resolve(_state("/crises/7"))
        assert [n.key for n in resolution.chain] == ["/crises", "/crises/{id:int}"]
        assert resolution.state.params == {"id": "7"}
        assert resolution.placements[1].params == {"id": "7"}

    def test_static_beats_param(self, tree: RouteTree) -> None:
        resolution = tree.resolve(_state("/crises/new"))
        assert resolution.chain[-1].key == "/crises/new"

    def test_index_child(self, tree: RouteTree) -> None:
        resolution = tree.resolve(_state("/crises"))
        assert [n.key for n in resolution.chain] == ["/crises", "/crises/"]

    def test_multi_segment_pattern(self, tree: RouteTree) -> None:
        assert tree.resolve(_state("/admin/users")).chain[0].key == "/admin/users"

    def test_converter_rejects(self, tree: RouteTree) -> None:
        with pytest.raises(RouteNotFound, match="/crises/abc"):
            tree.resolve(_state("/crises/abc"))

    def test_partial_pattern_does_not_match(self, tree: RouteTree) -> None:
        with pytest.raises(RouteNotFound):
            tree.resolve(_state("/admin"))

    def test_root(self, tree: RouteTree) -> None:
        assert tree.resolve(RouterState()).placements == ()

    def test_query_carried(self, tree: RouteTree) -> None:
        assert tree.resolve(_state("/crises/1?tab=notes")).state.query == {"tab": "notes"}


class TestPlan:
    @pytest.fixture
    def tree(self) -> RouteTree:
        return RouteTree(
            [
                RouteConfig("crises", Component, children=(RouteConfig("{id}", Component),)),
                RouteConfig("heroes", Component),
            ]
        )

    def _occupy(self, tree: RouteTree, path: str) -> RouterState:
        resolution = tree.resolve(_state(path))
        for placement in resolution.placements:
            placement.node.attach(Component(), placement.params, resolution.state)
        return resolution.state

    def test_from_empty_tree(self, tree: RouteTree) -> None:
        request = tree.plan(RouterState(), tree.resolve(_state("/crises/1")))
        assert request.leaving == ()
        assert [p.node.key for p in request.entering] == ["/crises", "/crises/{id}"]

    def test_shared_prefix_untouched(self, tree: RouteTree) -> None:
        current = self._occupy(tree, "/crises/1")
        request = tree.plan(current, tree.resolve(_state("/crises/2")))
        assert [n.key for n in request.leaving] == ["/crises/{id}"]
        assert [p.node.key for p in request.entering] == ["/crises/{id}"]
        assert [n.key for n in request.affected_nodes] == ["/crises/{id}"]

    def test_switch_branch(self, tree: RouteTree) -> None:
        current = self._occupy(tree, "/crises/1")
        request = tree.plan(current, tree.resolve(_state("/heroes")))
        assert [n.key for n in request.affected_nodes] == ["/crises", "/heroes", "/crises/{id}"]
        assert [n.key for n in request.leaving] == ["/crises", "/crises/{id}"]

    def test_query_change_affects_leaf(self, tree: RouteTree) -> None:
        current = self._occupy(tree, "/crises/1")
        request = tree.plan(current, tree.resolve(_state("/crises/1?tab=notes")))
        assert [n.key for n in request.leaving] == ["/crises/{id}"]

    def test_same_location_is_empty(self, tree: RouteTree) -> None:
        current = self._occupy(tree, "/crises/1")
        request = tree.plan(current, tree.resolve(_state("/crises/1")))
        assert request.is_empty

    def test_active_chain(self, tree: RouteTree) -> None:
        assert tree.active_chain() == []
        self._occupy(tree, "/crises/1")
        assert [n.key for n in tree.active_chain()] == ["/crises", "/crises/{id}"]

    def test_live_state(self, tree: RouteTree) -> None:
        assert tree.live_state() == RouterState()
        self._occupy(tree, "/crises/7?tab=notes")
        state = tree.live_state()
        assert state.path == "/crises/7"
        assert state.params == {"id": "7"}
        assert state.query == {}
