"""PathSegment and RouteConfig frozen dataclasses."""

from __future__ import annotations

from dataclasses import dataclass

from waypost._internal.types import ComponentFactory


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route pattern.

    Static:  ``crises``     (is_param=False)
    Param:   ``{id}``       (is_param=True, param_name="id")
    Typed:   ``{id:int}``   (is_param=True, param_name="id", param_type="int")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"


@dataclass(frozen=True, slots=True)
class RouteConfig:
    """A frozen route definition.

    ``path`` is relative to the parent route and may span several
    segments (``"crises/{id}"``). An empty ``path`` declares an index
    child, shown when the parent's path is matched exactly.

    ``component`` is the factory the router calls to create an instance
    when the route is entered::

        ROUTES = (
            RouteConfig("crises", CrisisList, children=(
                RouteConfig("{id:int}", CrisisDetail, name="crisis"),
            )),
            RouteConfig("heroes", HeroList),
        )
    """

    path: str
    component: ComponentFactory | None = None
    children: tuple[RouteConfig, ...] = ()
    name: str | None = None
