"""
Point-in-time questions about a branch: is it open, and is a service
currently accepting waiting-queue tickets?
"""

from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from .business_clock import BusinessClock
from .models import ReservationWindow, WeeklyShiftTemplate
from .overlap import contains
from .shift_resolver import ShiftResolver


class ShiftStatus(str, Enum):
    OPEN = "OPEN"
    CLOSED = "CLOSED"
    CLOSING_SOON = "CLOSING_SOON"


def shift_status(
    template: WeeklyShiftTemplate,
    now: datetime,
    clock: BusinessClock,
    closing_soon_minutes: int = 60
) -> ShiftStatus:
    """
    Report whether the branch is open at ``now``.

    CLOSING_SOON means the shift containing ``now`` ends in less than
    ``closing_soon_minutes``. Overnight shifts that started the previous
    day are taken into account.
    """
    local_now = clock.localize(now)
    # Resolving from yesterday also yields today's ranges
    shifts = ShiftResolver(clock).resolve_shifts(template, local_now.date() - timedelta(days=1))

    open_shifts = [shift for shift in shifts if contains(shift, local_now)]
    if not open_shifts:
        return ShiftStatus.CLOSED

    closes_at = max(shift.end for shift in open_shifts)
    if closes_at - local_now < timedelta(minutes=closing_soon_minutes):
        return ShiftStatus.CLOSING_SOON

    return ShiftStatus.OPEN


def is_within_waiting_window(
    window: Optional[ReservationWindow],
    now: datetime,
    clock: BusinessClock
) -> bool:
    """
    Check whether a service accepts waiting tickets at ``now``.

    A service without a window (or with an unusable one) always accepts.
    """
    local_now = clock.localize(now)
    intervals = ShiftResolver(clock).resolve_window(window, local_now.date() - timedelta(days=1))

    if intervals is None:
        return True

    return any(contains(interval, local_now) for interval in intervals)
