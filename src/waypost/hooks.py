"""Lifecycle capabilities and the ``Hooks`` record.

A component may implement any subset of five capabilities. No base
class required; the router checks the shape, not the lineage::

    class CrisisDetail:
        def can_navigate(self) -> bool:
            return self.edit_name == self.crisis.name

        async def on_activate(self, previous, current) -> None:
            self.crisis = await service.get(current.params["id"])

When an instance is attached to a route node its capabilities are
collected once into a ``Hooks`` record of optional handles. The
sequencer only ever checks whether a handle is present; it never
inspects the component again.

A factory may also return a ``Hooks`` record directly, which is handy
for tests and for components assembled from closures.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, fields
from typing import Any, Protocol, TypeAlias

from waypost.errors import ConfigurationError
from waypost.outcome import Redirect
from waypost.state import RouterState

GuardResult: TypeAlias = bool | Redirect


class CanNavigate(Protocol):
    """Approve leaving the current route using local state only."""

    def can_navigate(self) -> GuardResult | Awaitable[GuardResult]: ...


class CanDeactivate(Protocol):
    """Approve leaving the current route, with the target visible."""

    def can_deactivate(
        self, current: RouterState, next_state: RouterState
    ) -> GuardResult | Awaitable[GuardResult]: ...


class CanReuse(Protocol):
    """Keep this instance for the next state instead of recreating it."""

    def can_reuse(
        self, current: RouterState, next_state: RouterState
    ) -> bool | Awaitable[bool]: ...


class OnActivate(Protocol):
    """Called once the instance represents the new state."""

    def on_activate(
        self, previous: RouterState, current: RouterState
    ) -> None | Awaitable[None]: ...


class OnDeactivate(Protocol):
    """Called before the instance is discarded."""

    def on_deactivate(
        self, current: RouterState, next_state: RouterState
    ) -> None | Awaitable[None]: ...


@dataclass(frozen=True, slots=True)
class Hooks:
    """Optional hook handles for one component instance.

    ``None`` means the capability is absent: permit for guards, not
    reusable for ``can_reuse``, no-op for activation hooks.
    """

    can_navigate: Callable[[], Any] | None = None
    can_deactivate: Callable[[RouterState, RouterState], Any] | None = None
    can_reuse: Callable[[RouterState, RouterState], Any] | None = None
    on_activate: Callable[[RouterState, RouterState], Any] | None = None
    on_deactivate: Callable[[RouterState, RouterState], Any] | None = None

    @classmethod
    def of(cls, instance: Any) -> Hooks:
        """Collect the capabilities *instance* implements.

        Raises ``ConfigurationError`` if a capability name is bound to
        something that is not callable (usually a typo'd attribute).
        """
        if isinstance(instance, Hooks):
            return instance
        handles: dict[str, Any] = {}
        for name in HOOK_NAMES:
            handle = getattr(instance, name, None)
            if handle is None:
                continue
            if not callable(handle):
                msg = (
                    f"{type(instance).__name__}.{name} is {type(handle).__name__}, "
                    f"expected a method"
                )
                raise ConfigurationError(msg)
            handles[name] = handle
        return cls(**handles)

    @property
    def capabilities(self) -> frozenset[str]:
        """Names of the capabilities that are present."""
        return frozenset(name for name in HOOK_NAMES if getattr(self, name) is not None)


HOOK_NAMES: tuple[str, ...] = tuple(f.name for f in fields(Hooks))
