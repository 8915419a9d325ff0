"""Navigation events.

Small opt-in event channel describing what the sequencer did. The
navigator forwards each event to its registered listeners; applications
use them to drive progress indicators, analytics, or logs.

Event kinds::

    start       a navigation attempt began
    declined    a guard returned False (node = the declining route)
    redirect    a guard returned Redirect (detail = new target)
    deactivate  an instance was discarded
    activate    an instance now represents the target (detail = "reused"/"created")
    fault       a hook raised (detail = hook name)
    end         the attempt finished (detail = outcome name)
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from time import time
from typing import TypeAlias

from waypost.state import RouterState

logger = logging.getLogger("waypost.events")


@dataclass(frozen=True, slots=True)
class NavigationEvent:
    """A structured navigation event."""

    kind: str
    from_state: RouterState
    to_state: RouterState
    node: str | None = None
    detail: str = ""
    timestamp: float = field(default_factory=time)


EventSink: TypeAlias = Callable[[NavigationEvent], None]


def log_event(event: NavigationEvent) -> None:
    """Listener that writes every event to the ``waypost.events`` logger."""
    logger.debug(
        "%s %s -> %s node=%s %s",
        event.kind,
        event.from_state,
        event.to_state,
        event.node or "-",
        event.detail,
    )
