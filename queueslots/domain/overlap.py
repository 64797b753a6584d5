"""
Interval predicates shared by every availability check.

Two distinct questions are answered here and nowhere else:

- containment: is a candidate fully inside an opening range? Both ends are
  closed, so a slot ending exactly at closing time still fits.
- conflict: does a candidate share time with a committed interval? Both
  ends are open, so back-to-back bookings never conflict.
"""

from datetime import datetime
from typing import Iterable, Optional, Protocol, Union


class Interval(Protocol):
    """Anything with ``start`` and ``end`` instants (either may be ``None``)."""

    start: Optional[datetime]
    end: Optional[datetime]


def _bounds(interval: Interval):
    start = getattr(interval, "start", None)
    end = getattr(interval, "end", None)
    if start is None or end is None or start >= end:
        return None
    return start, end


def contains(container: Interval, candidate: Union[Interval, datetime]) -> bool:
    """
    Check that a point or interval lies within ``[container.start, container.end]``.
    """
    if isinstance(candidate, datetime):
        start = end = candidate
    else:
        start, end = candidate.start, candidate.end

    if container.start is None or container.end is None or start is None or end is None:
        return False

    return container.start <= start and end <= container.end


def conflicts(a: Interval, b: Interval) -> bool:
    """
    Check whether two intervals share time beyond a boundary touch.

    Symmetric. Intervals with a missing or inverted bound never conflict.
    """
    a_bounds = _bounds(a)
    b_bounds = _bounds(b)
    if a_bounds is None or b_bounds is None:
        return False

    return a_bounds[0] < b_bounds[1] and a_bounds[1] > b_bounds[0]


def conflicts_with_any(candidate: Interval, busy: Iterable[Interval]) -> bool:
    """Check a candidate against a collection of committed intervals."""
    return any(conflicts(candidate, item) for item in busy)
