"""Waypost — lifecycle hooks for component routers.

Sequences guard, reuse, activation, and deactivation hooks on component
instances around each navigation. Built on anyio; hooks may be sync or
async.

Basic usage::

    from waypost import Navigator, RouteConfig, RouteTree

    class CrisisDetail:
        def can_navigate(self):
            return not self.dirty or confirm("Discard changes?")

        async def on_activate(self, previous, current):
            self.crisis = await crises.get(current.params["id"])

    navigator = Navigator(RouteTree([
        RouteConfig("crises", CrisisList, children=(
            RouteConfig("{id:int}", CrisisDetail),
        )),
    ]))

    outcome = await navigator.navigate("/crises/1")
"""

__version__ = "0.1.0-dev"
__all__ = [
    "CancelReason",
    "Cancelled",
    "ConfigurationError",
    "HookFault",
    "Hooks",
    "NavigationError",
    "NavigationEvent",
    "NavigationRequest",
    "Navigator",
    "NavigatorConfig",
    "Proceed",
    "RedirectLoopExceeded",
    "Redirect",
    "RouteConfig",
    "RouteNotFound",
    "RouteTree",
    "RouterState",
    "WaypostError",
    "attempt_navigation",
    "get_navigation",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import waypost`` fast while providing a clean top-level API.
    """
    if name == "Navigator":
        from waypost.navigator import Navigator

        return Navigator

    if name == "NavigatorConfig":
        from waypost.config import NavigatorConfig

        return NavigatorConfig

    if name == "RouterState":
        from waypost.state import RouterState

        return RouterState

    if name in ("Proceed", "Cancelled", "Redirect", "CancelReason"):
        from waypost import outcome as _outcome

        return getattr(_outcome, name)

    if name in ("RouteConfig", "RouteTree"):
        from waypost import routing as _routing

        return getattr(_routing, name)

    if name == "Hooks":
        from waypost.hooks import Hooks

        return Hooks

    if name == "NavigationRequest":
        from waypost.request import NavigationRequest

        return NavigationRequest

    if name == "NavigationEvent":
        from waypost.events import NavigationEvent

        return NavigationEvent

    if name == "attempt_navigation":
        from waypost.sequencer import attempt_navigation

        return attempt_navigation

    if name == "get_navigation":
        from waypost.context import get_navigation

        return get_navigation

    if name in (
        "WaypostError",
        "ConfigurationError",
        "NavigationError",
        "RouteNotFound",
        "RedirectLoopExceeded",
        "HookFault",
    ):
        from waypost import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
