"""Resolver configuration.

ResolverConfig is a frozen dataclass — immutable after creation,
validated once at construction.
"""

from dataclasses import dataclass
from typing import Literal

from waypoint.errors import ConfigurationError

ListenerErrors = Literal["log", "raise"]


@dataclass(frozen=True, slots=True)
class ResolverConfig:
    """Resolver configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = ResolverConfig(listener_errors="raise")
    """

    # First id handed out by the resolver's counter
    first_id: int = 1

    # What to do when a listener raises during fan-out:
    # "log" logs the traceback and keeps notifying the rest,
    # "raise" lets it reach the event loop's exception handler.
    listener_errors: ListenerErrors = "log"

    def __post_init__(self) -> None:
        first_id = self.first_id
        if isinstance(first_id, bool) or not isinstance(first_id, int) or first_id < 0:
            msg = f"first_id must be a non-negative integer, got {self.first_id!r}"
            raise ConfigurationError(msg)
        if self.listener_errors not in ("log", "raise"):
            msg = f"listener_errors must be 'log' or 'raise', got {self.listener_errors!r}"
            raise ConfigurationError(msg)
