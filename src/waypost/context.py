"""Navigation-scoped context via ContextVar.

Provides ``navigation_var``: the ``NavigationRequest`` currently being
sequenced in this task. Hooks and the services they call (a
confirmation dialog, say) can read it without having it passed in::

    from waypost.context import get_navigation

    async def confirm_discard():
        nav = get_navigation()
        return await dialog.ask(f"Leave for {nav.to_state}?")

Set by the navigator before each attempt and reset afterwards.
Accessing it outside a navigation raises ``LookupError``.
"""

from contextvars import ContextVar

from waypost.request import NavigationRequest

navigation_var: ContextVar[NavigationRequest] = ContextVar("waypost_navigation")
"""The in-flight navigation. Set by the navigator around each attempt."""


def get_navigation() -> NavigationRequest:
    """Return the navigation currently being sequenced.

    Raises ``LookupError`` if called outside a navigation.
    """
    return navigation_var.get()


def in_navigation() -> bool:
    """True while a navigation is being sequenced in this context."""
    return navigation_var.get(None) is not None
