"""Environments — the context a resolvable is evaluated against.

An ``Env`` carries the caller's context object plus the routing state:
the part of the path matched so far and the part still unmatched.
Routing logic walks down the path with ``descend()``, producing a new
env per level.

Envs compare by identity. The resolver keys its per-env cache on them
weakly, so dropping the last reference to an env drops its cache.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any
from urllib.parse import parse_qsl, urlsplit

from waypoint.urls import join_paths, split_path


@dataclass(frozen=True, slots=True, eq=False, weakref_slot=True)
class Env:
    """Routing environment. Immutable; compared by identity.

    Attributes:
        context: Arbitrary caller-supplied payload (user, services, ...).
        pathname: The path matched so far, e.g. ``"/blog"``.
        unmatched_pathname_part: The rest of the path, e.g. ``"/posts/1"``.
        params: Path parameters collected while matching.
        query: Query string parameters (first value wins).
        method: Request method.
    """

    context: Any = None
    pathname: str = "/"
    unmatched_pathname_part: str = "/"
    params: Mapping[str, str] = field(default_factory=dict)
    query: Mapping[str, str] = field(default_factory=dict)
    method: str = "GET"

    @property
    def full_pathname(self) -> str:
        """Matched and unmatched parts joined back together."""
        return join_paths(self.pathname, self.unmatched_pathname_part)

    def descend(self, segment_count: int, params: Mapping[str, str] | None = None) -> Env:
        """Return a child env with *segment_count* more segments matched.

        Raises ``ValueError`` if fewer segments remain unmatched.
        """
        segments = split_path(self.unmatched_pathname_part)
        if not 0 <= segment_count <= len(segments):
            msg = (
                f"Cannot match {segment_count} segment(s) of "
                f"{self.unmatched_pathname_part!r}"
            )
            raise ValueError(msg)
        return replace(
            self,
            pathname=join_paths("/", self.pathname, *segments[:segment_count]),
            unmatched_pathname_part=join_paths("/", *segments[segment_count:]),
            params={**self.params, **(params or {})},
        )


def create_env(url: str, context: Any = None, *, method: str = "GET") -> Env:
    """Build the root env for *url*: nothing matched, everything unmatched.

    Usage::

        env = create_env("/blog/posts?page=2", context={"user": user})
        env.unmatched_pathname_part  # "/blog/posts"
        env.query["page"]            # "2"
    """
    parts = urlsplit(url)
    query: dict[str, str] = {}
    for key, value in parse_qsl(parts.query, keep_blank_values=True):
        query.setdefault(key, value)
    return Env(
        context=context,
        pathname="/",
        unmatched_pathname_part=join_paths("/", parts.path),
        query=query,
        method=method.upper(),
    )
