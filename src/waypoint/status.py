"""Resolution status and the rule for combining several of them."""

from collections.abc import Iterable
from enum import StrEnum
from functools import reduce


class Status(StrEnum):
    """Settlement state of a resolution."""

    READY = "ready"
    BUSY = "busy"
    ERROR = "error"


def reduce_statuses(x: Status, y: Status) -> Status:
    """Combine two statuses, worst case wins.

    Error dominates Busy, which dominates Ready::

        >>> reduce_statuses(Status.READY, Status.BUSY)
        <Status.BUSY: 'busy'>
        >>> reduce_statuses(Status.BUSY, Status.ERROR)
        <Status.ERROR: 'error'>
    """
    if x is Status.ERROR or y is Status.ERROR:
        return Status.ERROR
    if x is Status.BUSY or y is Status.BUSY:
        return Status.BUSY
    return Status.READY


def combine_statuses(statuses: Iterable[Status]) -> Status:
    """Fold any number of statuses into one. Empty input is Ready."""
    return reduce(reduce_statuses, statuses, Status.READY)
