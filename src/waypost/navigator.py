"""Navigator — the stateful front door to the sequencer.

Holds the current ``RouterState``, resolves targets against the route
tree, follows guard redirects, and makes sure only one navigation
sequences at a time.

Concurrency:
    With ``concurrency="supersede"`` (the default) a new ``navigate()``
    cancels any navigation that is still waiting on a guard or on the
    lock; the superseded call returns ``Cancelled(reason=SUPERSEDED)``.
    With ``"queue"`` navigations run one after another in arrival order.
    Either way, an attempt that has started discarding instances is
    shielded and always finishes.
"""

import logging

import anyio

from waypost.config import NavigatorConfig
from waypost.context import in_navigation
from waypost.errors import HookFault, NavigationError, RedirectLoopExceeded
from waypost.events import EventSink, NavigationEvent, log_event
from waypost.outcome import Cancelled, CancelReason, Proceed, Redirect
from waypost.routing.tree import RouteTree
from waypost.sequencer import attempt_navigation
from waypost.state import RouterState

logger = logging.getLogger("waypost.navigation")


class Navigator:
    """Drives navigations over a ``RouteTree``.

    Usage::

        navigator = Navigator(RouteTree(ROUTES))
        outcome = await navigator.navigate("/crises/1")
        if isinstance(outcome, Cancelled):
            ...  # a guard said no
    """

    __slots__ = ("_current", "_listeners", "_lock", "_pending", "config", "tree")

    def __init__(self, tree: RouteTree, config: NavigatorConfig | None = None) -> None:
        self.config: NavigatorConfig = config or NavigatorConfig()
        self.config.validate()
        self.tree = tree
        self._current = RouterState()
        self._listeners: list[EventSink] = []
        # Created lazily on first navigate(), inside the event loop
        self._lock: anyio.Lock | None = None
        self._pending: list[anyio.CancelScope] = []
        if self.config.log_events:
            self._listeners.append(log_event)

    @property
    def current(self) -> RouterState:
        """The state of the last navigation that completed.

        After an activation fault this is rebuilt from the nodes still
        occupied, so the next attempt starts from what the tree shows.
        """
        return self._current

    @property
    def busy(self) -> bool:
        """True while a navigation is sequencing or waiting its turn."""
        return bool(self._pending)

    def add_listener(self, sink: EventSink) -> None:
        """Register a callable that receives every ``NavigationEvent``."""
        self._listeners.append(sink)

    def remove_listener(self, sink: EventSink) -> None:
        self._listeners.remove(sink)

    def cancel(self) -> None:
        """Cancel every navigation that is in flight or queued."""
        for scope in self._pending:
            scope.cancel()

    async def navigate(self, target: str | RouterState) -> Proceed | Cancelled:
        """Navigate to *target*, following redirects.

        Returns ``Proceed`` or ``Cancelled``.

        Raises ``RouteNotFound`` if the target (or a redirect) matches no
        route, ``RedirectLoopExceeded`` past ``config.max_redirects``,
        ``HookFault`` if a hook raises, and ``NavigationError`` when
        called from inside a lifecycle hook.
        """
        if in_navigation():
            msg = (
                "navigate() called from inside a lifecycle hook. "
                "Return Redirect(target) from the guard instead."
            )
            raise NavigationError(msg)

        state = target if isinstance(target, RouterState) else RouterState.from_path(target)

        if self.config.concurrency == "supersede":
            self.cancel()

        if self._lock is None:
            self._lock = anyio.Lock()

        outcome: Proceed | Cancelled | None = None
        scope = anyio.CancelScope()
        self._pending.append(scope)
        try:
            with scope:
                async with self._lock:
                    outcome = await self._follow(state)
        finally:
            self._pending.remove(scope)

        if outcome is None:
            logger.debug("navigation to %s cancelled before completion", state)
            return Cancelled(state=state, reason=CancelReason.SUPERSEDED)
        return outcome

    async def _follow(self, state: RouterState) -> Proceed | Cancelled:
        chain = [str(state)]
        redirects = 0
        target = state
        while True:
            resolution = self.tree.resolve(target)
            request = self.tree.plan(self._current, resolution)
            try:
                outcome = await attempt_navigation(
                    request,
                    strict=self.config.strict_results,
                    emit=self._emit,
                )
            except HookFault as fault:
                if fault.phase == "activate":
                    self._current = self.tree.live_state()
                raise
            if not isinstance(outcome, Redirect):
                if isinstance(outcome, Proceed):
                    self._current = outcome.state
                return outcome

            chain.append(str(outcome.state))
            if redirects >= self.config.max_redirects:
                logger.warning("redirect loop: %s", " -> ".join(chain))
                raise RedirectLoopExceeded(tuple(chain), self.config.max_redirects)
            redirects += 1
            target = outcome.state

    def _emit(self, event: NavigationEvent) -> None:
        for sink in list(self._listeners):
            try:
                sink(event)
            except Exception:
                logger.exception("navigation listener %r failed", sink)
