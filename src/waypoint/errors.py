"""Waypoint exception hierarchy.

Shared across the resolver, environments, and configuration so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class WaypointError(Exception):
    """Base for all waypoint-specific errors."""


class ConfigurationError(WaypointError):
    """Raised when resolver configuration is invalid.

    Typically raised by ``ResolverConfig.__post_init__``.
    """


class ResolverError(WaypointError):
    """A resolvable could not be scheduled.

    Stored on the resolution rather than raised, since ``resolve()``
    never raises.
    """


class ResolutionError(WaypointError):
    """Generic failure for a resolution that settled without an error."""


@dataclass(frozen=True, slots=True)
class HTTPError(WaypointError):
    """An error that maps directly to an HTTP status code.

    Raised by resolvables. The resolver stores it on the failed
    resolution and renderers map it back to a response.
    """

    status: int
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — nothing exists at the requested path.

    ``pathname`` is left as ``None`` by resolvables that don't know
    where they were mounted. The resolver fills it in with the full
    path of the environment the resolvable was evaluated against.
    """

    def __init__(self, detail: str = "Not Found", pathname: str | None = None) -> None:
        super().__init__(status=404, detail=detail)
        self.pathname = pathname

    def __str__(self) -> str:
        if self.pathname:
            return f"{self.status}: {self.detail} ({self.pathname})"
        return super().__str__()
