"""Waypost exception hierarchy.

Shared across the route tree, sequencer, and navigator so every module
raises and catches the same types.

A guard that returns ``False`` is *not* an error: it produces a
``Cancelled`` outcome. Exceptions are reserved for configuration
mistakes, unmatched targets, redirect loops, and hooks that raise.
"""


class WaypostError(Exception):
    """Base for all waypost-specific errors."""


class ConfigurationError(WaypostError):
    """Raised when the route configuration or navigator config is invalid.

    Typically raised while compiling a ``RouteTree`` or building a
    ``Navigator``.
    """


class NavigationError(WaypostError):
    """A navigation attempt failed for a reason other than a declined guard."""


class RouteNotFound(NavigationError):  # noqa: N818
    """No configured route matches the target state."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"No route matches {path!r}")


class RedirectLoopExceeded(NavigationError):  # noqa: N818
    """Guards kept redirecting past ``NavigatorConfig.max_redirects``.

    ``chain`` lists every target visited, starting with the original
    request, so the loop is visible in the message.
    """

    def __init__(self, chain: tuple[str, ...], limit: int) -> None:
        self.chain = chain
        self.limit = limit
        hops = " -> ".join(chain)
        super().__init__(f"Redirect loop: more than {limit} redirects ({hops})")


class HookFault(NavigationError):  # noqa: N818
    """A lifecycle hook raised instead of returning a result.

    The original exception is chained as ``__cause__``. ``phase`` is one
    of ``"permission"``, ``"reuse"``, ``"deactivate"``, ``"activate"``.
    """

    def __init__(self, hook: str, node: str, phase: str, detail: str = "") -> None:
        self.hook = hook
        self.node = node
        self.phase = phase
        self.detail = detail
        msg = f"{hook}() on route {node!r} failed during {phase} phase"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)
