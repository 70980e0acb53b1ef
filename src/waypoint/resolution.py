"""Resolution records — the cached outcome of one resolvable evaluation.

A ``Resolution`` starts Busy when its resolvable returned an awaitable,
and is settled in place by the resolver once that awaitable completes.
Resolvables that return plain values produce records that are Ready
from the start.

Consumers read ``status`` / ``value`` / ``error`` to decide what to
show, or await the record::

    resolution = resolver.resolve(env, load_post)
    if resolution.is_busy:
        show_spinner()
    post = await resolution
"""

from __future__ import annotations

import asyncio
from collections.abc import Generator, Mapping
from dataclasses import dataclass, field
from types import ModuleType
from typing import Any

import anyio

from waypoint.errors import ResolutionError
from waypoint.status import Status, combine_statuses


@dataclass(slots=True, eq=False)
class Resolution[T]:
    """The versioned outcome of one resolvable within one environment.

    Attributes:
        id: Assigned once by the resolver's counter. Never changes.
        status: Ready, Busy or Error.
        value: The settled value. ``None`` while Busy or on Error.
        error: The settled exception. Set only on Error.
    """

    id: int
    status: Status = Status.BUSY
    value: T | None = None
    error: BaseException | None = None
    _future: asyncio.Future[T] | None = field(default=None, repr=False)

    @property
    def future(self) -> asyncio.Future[T]:
        """Future completing with the same outcome this record carries.

        Records that were settled synchronously get an already-completed
        future on first access, bound to the running loop.
        """
        if self._future is None:
            if self.status is Status.BUSY:
                msg = f"Busy resolution {self.id} has no future"
                raise RuntimeError(msg)
            future: asyncio.Future[T] = asyncio.get_running_loop().create_future()
            if self.status is Status.ERROR:
                future.set_exception(self.error)
            else:
                future.set_result(self.value)  # type: ignore[arg-type]
            self._future = future
        return self._future

    @property
    def is_ready(self) -> bool:
        return self.status is Status.READY

    @property
    def is_busy(self) -> bool:
        return self.status is Status.BUSY

    @property
    def is_error(self) -> bool:
        return self.status is Status.ERROR

    def set_ready(self, value: T) -> None:
        """Settle as Ready. Called by the resolver only."""
        self.status = Status.READY
        self.value = value
        self.error = None

    def set_error(self, error: BaseException | None) -> None:
        """Settle as Error. Called by the resolver only.

        A missing error is replaced with a generic ``ResolutionError``
        so ``error`` is always set when ``status`` is Error.
        """
        self.status = Status.ERROR
        self.value = None
        self.error = error or ResolutionError(f"Resolution {self.id} failed")

    def __await__(self) -> Generator[Any, None, T]:
        # Shielded: a cancelled consumer must not cancel the computation.
        return asyncio.shield(self.future).__await__()


class Completed:
    """Awaitable that completes immediately with *value*.

    Handed to resolvables as their data when no data resolution exists.
    Needs no event loop until awaited.
    """

    __slots__ = ("value",)

    def __init__(self, value: Any = None) -> None:
        self.value = value

    def __await__(self) -> Generator[Any, None, Any]:
        return self.value
        yield  # makes this a generator

    def __repr__(self) -> str:
        return f"Completed({self.value!r})"


def extract_default(value: Any) -> Any:
    """Unwrap a default-export envelope.

    ``{"default": x}`` and modules exposing ``default`` yield ``x``.
    Everything else, ``None`` included, passes through unchanged.
    """
    if isinstance(value, Mapping) and "default" in value:
        return value["default"]
    if isinstance(value, ModuleType) and hasattr(value, "default"):
        return value.default
    return value


async def settle(*resolutions: Resolution[Any]) -> Status:
    """Wait for every resolution to finish and return their combined status.

    Waits concurrently, never raises a resolution's error, and never
    cancels the underlying work. A record dropped from the cache by
    ``Resolver.invalidate()`` before it settled stays Busy.
    """

    async def _wait(resolution: Resolution[Any]) -> None:
        if resolution.is_busy:
            await asyncio.wait((resolution.future,))

    async with anyio.create_task_group() as tg:
        for resolution in resolutions:
            tg.start_soon(_wait, resolution)

    return combine_statuses(r.status for r in resolutions)
