"""Memoized, asynchronous resolver cache.

Evaluates resolvables against environments and caches the outcome as a
``Resolution``. Each resolvable runs at most once per env; repeated
``resolve()`` calls hand back the same record.

Resolvables returning awaitables produce Busy records. The awaitable is
wrapped in a task whose completion settles the record in place and
notifies every listener watching the record's id::

    resolver = Resolver()

    def refresh() -> None:
        render(resolver.resolve(env, load_post))

    resolution = resolver.resolve(env, load_post)   # Busy
    resolver.listen(refresh, [resolution.id])

Staleness:
    Ids come from a per-resolver counter and never repeat. A completion
    only applies if the cache still holds the record with the id it was
    started under. After ``invalidate()`` and a fresh ``resolve()``, the
    older completion is discarded and nobody is notified.

Threading:
    All mutation happens on the event loop thread. Listeners are called
    from task done-callbacks on that same loop, so no locks are taken.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import weakref
from collections.abc import Awaitable, Callable, Iterable
from functools import partial
from types import MethodType
from typing import Any

from waypoint.config import ResolverConfig
from waypoint.env import Env
from waypoint.errors import NotFound, ResolverError
from waypoint.resolution import Completed, Resolution, extract_default
from waypoint.status import Status
from waypoint.types import Listener, Resolvable

logger = logging.getLogger("waypoint.resolver")

type _Table = dict[_IdentityKey, Resolution[Any]]


class _IdentityKey:
    """Dict key comparing a callable by identity, never by its own ``__eq__``.

    Holds the callable so its id can't be reused while the key lives.
    Bound methods compare by instance and function, so ``obj.load``
    gives the same key on every attribute access.
    """

    __slots__ = ("_parts", "target")

    def __init__(self, target: Callable[..., Any]) -> None:
        self.target = target
        if isinstance(target, MethodType):
            self._parts: tuple[object, ...] = (target.__self__, target.__func__)
        else:
            self._parts = (target,)

    def __hash__(self) -> int:
        return hash(tuple(id(part) for part in self._parts))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _IdentityKey):
            return NotImplemented
        return len(self._parts) == len(other._parts) and all(
            a is b for a, b in zip(self._parts, other._parts, strict=False)
        )

    def __repr__(self) -> str:
        return f"_IdentityKey({self.target!r})"


async def _await_default[T](awaitable: Awaitable[Any]) -> T:
    return extract_default(await awaitable)


def _annotate_not_found(error: BaseException | None, full_pathname: str) -> None:
    """Stamp a ``NotFound`` that doesn't know where it happened."""
    if isinstance(error, NotFound) and not error.pathname:
        error.pathname = full_pathname


class Resolver:
    """Per-env, per-resolvable memoization table with change listeners.

    Usage::

        resolver = Resolver()
        resolution = resolver.resolve(env, load_post)
        post = await resolution
    """

    __slots__ = ("_config", "_listener_ids", "_next_id", "_pending", "_results")

    def __init__(self, config: ResolverConfig | None = None) -> None:
        self._config = config or ResolverConfig()
        self._next_id = self._config.first_id
        # Env -> {resolvable key: resolution}; entries die with their env
        self._results: weakref.WeakKeyDictionary[Env, _Table] = weakref.WeakKeyDictionary()
        # Listener key -> watched ids, in registration order
        self._listener_ids: dict[_IdentityKey, list[int]] = {}
        # Strong refs so in-flight tasks outlive their env
        self._pending: set[asyncio.Task[Any]] = set()

    @property
    def config(self) -> ResolverConfig:
        return self._config

    # -- Listeners --

    def listen(self, listener: Listener, resolution_ids: Iterable[int]) -> None:
        """Call *listener* whenever one of *resolution_ids* settles.

        Registering the same listener again replaces its ids.
        """
        self._listener_ids[_IdentityKey(listener)] = list(resolution_ids)

    def unlisten(self, listener: Listener) -> None:
        """Stop calling *listener*. No-op if it isn't registered."""
        self._listener_ids.pop(_IdentityKey(listener), None)

    def _notify(self, resolution_id: int) -> None:
        # Snapshot: listeners may (un)register while being called.
        for key, ids in list(self._listener_ids.items()):
            if resolution_id not in ids:
                continue
            listener = key.target
            if self._config.listener_errors == "raise":
                listener()
                continue
            try:
                listener()
            except Exception:
                logger.exception(
                    "Listener %r failed for resolution %d", listener, resolution_id,
                )

    # -- Cache --

    def resolve[T](
        self,
        env: Env,
        resolvable: Resolvable[T],
        data_resolvable: Resolvable[Any] | None = None,
    ) -> Resolution[T]:
        """Return the resolution of *resolvable* in *env*, computing it once.

        If *data_resolvable* already has a resolution in *env*, that
        resolution is passed to *resolvable* as its data awaitable.
        Otherwise the data awaitable completes with ``None``.

        Never raises. Failures are reported through the returned
        record's ``status``, ``error`` and ``future``.
        """
        results = self._results.get(env)
        if results is None:
            results = {}
            self._results[env] = results

        key = _IdentityKey(resolvable)
        current = results.get(key)
        if current is not None:
            return current

        data: Awaitable[Any] | None = None
        if data_resolvable is not None:
            data = results.get(_IdentityKey(data_resolvable))
        if data is None:
            data = Completed()

        resolution_id = self._next_id
        self._next_id += 1
        full_pathname = env.full_pathname
        logger.debug("Resolving %r as %d at %s", resolvable, resolution_id, full_pathname)

        try:
            maybe_value = resolvable(env, data)
        except Exception as exc:
            _annotate_not_found(exc, full_pathname)
            resolution: Resolution[T] = Resolution(resolution_id, Status.ERROR, error=exc)
            results[key] = resolution
            return resolution

        if not inspect.isawaitable(maybe_value):
            resolution = Resolution(resolution_id, Status.READY, value=maybe_value)
            results[key] = resolution
            return resolution

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            if inspect.iscoroutine(maybe_value):
                maybe_value.close()
            msg = f"{resolvable!r} returned an awaitable but no event loop is running"
            resolution = Resolution(resolution_id, Status.ERROR, error=ResolverError(msg))
            results[key] = resolution
            return resolution

        task: asyncio.Task[T] = loop.create_task(_await_default(maybe_value))
        resolution = Resolution(resolution_id, _future=task)
        self._pending.add(task)
        results[key] = resolution
        task.add_done_callback(
            partial(self._complete, results, key, resolution_id, full_pathname),
        )
        task.add_done_callback(self._pending.discard)
        return resolution

    def _complete(
        self,
        results: _Table,
        key: _IdentityKey,
        resolution_id: int,
        full_pathname: str,
        task: asyncio.Task[Any],
    ) -> None:
        """Settle the record under *key* if it is still the current one."""
        if task.cancelled():
            error: BaseException | None = asyncio.CancelledError()
        else:
            error = task.exception()
            _annotate_not_found(error, full_pathname)

        current = results.get(key)
        if current is None or current.id != resolution_id:
            logger.debug("Discarding stale completion of resolution %d", resolution_id)
            return

        if error is None:
            current.set_ready(task.result())
        else:
            current.set_error(error)
        self._notify(resolution_id)

    def peek[T](self, env: Env, resolvable: Resolvable[T]) -> Resolution[T] | None:
        """Return the cached resolution, if any, without computing anything."""
        results = self._results.get(env)
        if results is None:
            return None
        return results.get(_IdentityKey(resolvable))

    def invalidate(self, env: Env, resolvable: Resolvable[Any] | None = None) -> None:
        """Drop the cached resolution of *resolvable*, or every one in *env*.

        The next ``resolve()`` computes a fresh record with a new id.
        In-flight completions for dropped records are discarded.
        """
        results = self._results.get(env)
        if results is None:
            return
        if resolvable is None:
            results.clear()
        else:
            results.pop(_IdentityKey(resolvable), None)
