"""Path helpers shared by environments and the resolver.

Usage::

    from waypoint.urls import join_paths

    join_paths("/blog", "posts/")   # "/blog/posts"
    join_paths("/", "")             # "/"
"""


def split_path(pathname: str) -> list[str]:
    """Split *pathname* into its non-empty segments.

    Examples::

        >>> split_path("/blog/posts/")
        ['blog', 'posts']
        >>> split_path("/")
        []
    """
    return [part for part in pathname.split("/") if part]


def join_paths(*paths: str) -> str:
    """Join path fragments with single slashes.

    The result starts with ``/`` when the first non-empty fragment does,
    never ends with one unless it is the root, and skips empty
    fragments.

    Examples::

        >>> join_paths("/blog", "/posts/")
        '/blog/posts'
        >>> join_paths("a", "b")
        'a/b'
        >>> join_paths("/", "")
        '/'
        >>> join_paths()
        ''
    """
    parts = [p for p in paths if p]
    if not parts:
        return ""
    joined = "/".join(seg for part in parts for seg in split_path(part))
    if parts[0].startswith("/"):
        return "/" + joined
    return joined
