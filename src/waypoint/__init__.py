"""Waypoint — memoized, asynchronous resolution for routed environments.

Evaluates resolvables (pure, identity-keyed computations) against an
environment once, caches the outcome, and tells listeners when pending
outcomes settle.

Basic usage::

    from waypoint import Resolver, create_env

    resolver = Resolver()
    env = create_env("/blog/posts")

    async def load_posts(env, data):
        return await fetch_posts()

    resolution = resolver.resolve(env, load_posts)   # Busy
    posts = await resolution                         # Ready
"""

__version__ = "0.1.0-dev"
__all__ = [
    "ConfigurationError",
    "Env",
    "HTTPError",
    "NotFound",
    "Resolution",
    "ResolutionError",
    "Resolver",
    "ResolverConfig",
    "ResolverError",
    "Status",
    "WaypointError",
    "combine_statuses",
    "create_env",
    "join_paths",
    "reduce_statuses",
    "settle",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import waypoint`` fast while providing a clean top-level API.
    """
    if name == "Resolver":
        from waypoint.resolver import Resolver

        return Resolver

    if name == "ResolverConfig":
        from waypoint.config import ResolverConfig

        return ResolverConfig

    if name in ("Resolution", "settle"):
        from waypoint import resolution as _resolution

        return getattr(_resolution, name)

    if name in ("Status", "combine_statuses", "reduce_statuses"):
        from waypoint import status as _status

        return getattr(_status, name)

    if name in ("Env", "create_env"):
        from waypoint import env as _env

        return getattr(_env, name)

    if name == "join_paths":
        from waypoint.urls import join_paths

        return join_paths

    if name in (
        "ConfigurationError",
        "HTTPError",
        "NotFound",
        "ResolutionError",
        "ResolverError",
        "WaypointError",
    ):
        from waypoint import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
