"""Routing — route configuration compiled into a tree of route nodes.

Routes are declared as nested ``RouteConfig`` records and compiled into
an immutable ``RouteTree``. Only the live component instances attached
to nodes change after compilation.
"""

from waypost.routing.route import PathSegment, RouteConfig
from waypost.routing.tree import Resolution, RouteNode, RouteTree, parse_pattern

__all__ = [
    "PathSegment",
    "Resolution",
    "RouteConfig",
    "RouteNode",
    "RouteTree",
    "parse_pattern",
]
