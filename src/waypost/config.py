"""Navigator configuration.

Immutable after creation; ``Navigator`` validates it on construction.
"""

from dataclasses import dataclass
from typing import Literal, TypeAlias

from waypost.errors import ConfigurationError

ConcurrencyPolicy: TypeAlias = Literal["supersede", "queue"]


@dataclass(frozen=True, slots=True)
class NavigatorConfig:
    """Navigator configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = NavigatorConfig(max_redirects=3, concurrency="queue")
    """

    # Redirects followed before RedirectLoopExceeded is raised
    max_redirects: int = 10

    # "supersede": a new navigate() cancels the in-flight one
    # "queue": navigations run one after another in arrival order
    concurrency: ConcurrencyPolicy = "supersede"

    # Guards must return bool or Redirect; when False, other answers pass through bool()
    strict_results: bool = True

    # Attach a listener that logs every NavigationEvent at DEBUG
    log_events: bool = False

    def validate(self) -> None:
        """Raise ``ConfigurationError`` if any field is out of range."""
        if self.max_redirects < 0:
            msg = f"max_redirects must be >= 0, got {self.max_redirects}"
            raise ConfigurationError(msg)
        if self.concurrency not in ("supersede", "queue"):
            msg = (
                f"concurrency must be 'supersede' or 'queue', "
                f"got {self.concurrency!r}"
            )
            raise ConfigurationError(msg)
