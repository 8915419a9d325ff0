"""Navigation outcomes — what a single attempt resolves to.

``attempt_navigation()`` returns exactly one of:

- ``Proceed``   — every phase ran; the tree now reflects the target.
- ``Cancelled`` — a guard declined (or a newer navigation superseded this
  one) before any side effect.
- ``Redirect``  — a guard asked to go somewhere else instead.

``Redirect`` doubles as a guard return value::

    def can_deactivate(self, current, next_state):
        if not session.logged_in:
            return Redirect("/login")
        return True
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TypeAlias

from waypost.errors import HookFault
from waypost.state import RouterState


class CancelReason(StrEnum):
    """Why a navigation was cancelled."""

    DECLINED = "declined"
    SUPERSEDED = "superseded"


@dataclass(frozen=True, slots=True)
class Redirect:
    """Abandon the pending navigation and navigate to ``target`` instead.

    ``target`` may be a path string or a ``RouterState``.
    """

    target: str | RouterState

    @property
    def state(self) -> RouterState:
        if isinstance(self.target, RouterState):
            return self.target
        return RouterState.from_path(self.target)


@dataclass(frozen=True, slots=True)
class Proceed:
    """The navigation completed.

    ``deactivation_faults`` holds any ``HookFault`` raised by an
    ``on_deactivate`` hook. Those faults are logged and do not stop the
    navigation.
    """

    state: RouterState
    deactivation_faults: tuple[HookFault, ...] = ()


@dataclass(frozen=True, slots=True)
class Cancelled:
    """The navigation did not take effect.

    ``node`` is the route key whose guard declined, when there is one.
    """

    state: RouterState
    reason: CancelReason = CancelReason.DECLINED
    node: str | None = None


Outcome: TypeAlias = Proceed | Cancelled | Redirect
