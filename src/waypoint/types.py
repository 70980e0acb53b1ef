"""Shared type aliases used across waypoint modules."""

from collections.abc import Awaitable, Callable, Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from waypoint.env import Env

# A value that will resolve to T, possibly as a default-export envelope
type Pending[T] = T | Awaitable[T | Mapping[str, T]]

# Pure computation evaluated against an env. Receives an awaitable for
# the output of its data resolvable (or None) and is cached by identity.
type Resolvable[T] = Callable[[Env, Awaitable[Any]], Pending[T]]

# Change listener — called with no arguments when a watched id settles
type Listener = Callable[[], object]
