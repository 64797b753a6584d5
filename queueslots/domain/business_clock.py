"""
Branch-local time: timezone projection and business-day boundaries.

A branch's operational day does not start at calendar midnight but at a
configurable anchor (3 hours past midnight unless configured otherwise), so
that 00:00-03:00 belongs to the tail of the previous business day.
"""

from datetime import date, datetime, timedelta
from typing import Optional

import pendulum
from pendulum import Date, DateTime

from .exceptions import InvalidTimezone
from .models import TimeOfDay, TimeRange

DEFAULT_ANCHOR_OFFSET_HOURS = 3


def resolve_timezone(name: Optional[str]):
    """
    Resolve a named timezone; ``None`` means the system-local timezone.

    Raises:
        InvalidTimezone: If the identifier is not known
    """
    if name is None:
        return pendulum.local_timezone()

    try:
        return pendulum.timezone(name)
    except (ValueError, LookupError) as exc:
        raise InvalidTimezone(name) from exc


class BusinessClock:
    """
    Converts between wall-clock times and absolute instants for one branch.
    """

    def __init__(
        self,
        timezone: Optional[str] = None,
        anchor_offset_hours: int = DEFAULT_ANCHOR_OFFSET_HOURS
    ):
        """
        Args:
            timezone: IANA timezone identifier, or None for system-local
            anchor_offset_hours: Hours past midnight at which the business day starts
        """
        if not 0 <= anchor_offset_hours <= 23:
            raise ValueError(
                f"anchor_offset_hours must be between 0 and 23, got {anchor_offset_hours}"
            )

        self.timezone_name = timezone
        self.tz = resolve_timezone(timezone)
        self.anchor_offset_hours = anchor_offset_hours

    def now(self, timezone: Optional[str] = None) -> DateTime:
        """Return the current instant in ``timezone``, else in the clock's timezone."""
        tz = resolve_timezone(timezone) if timezone else self.tz
        return pendulum.now(tz)

    def localize(self, instant: datetime) -> DateTime:
        """Project an instant into the clock's timezone; naive values are read as local."""
        return pendulum.instance(instant, tz=self.tz).in_timezone(self.tz)

    def at(self, day: date, time_of_day: TimeOfDay) -> DateTime:
        """Anchor a wall-clock time to a calendar date."""
        return pendulum.datetime(
            day.year,
            day.month,
            day.day,
            time_of_day.hour,
            time_of_day.minute,
            tz=self.tz
        )

    def business_day_bounds(
        self,
        day: date,
        anchor_offset_hours: Optional[int] = None
    ) -> TimeRange:
        """
        Return ``[day at anchor, next day at anchor)`` in local wall-clock time.

        On daylight-saving transition days the business day is 23 or 25 hours
        long, so consecutive business days always meet without gap or overlap.
        """
        anchor = self.anchor_offset_hours if anchor_offset_hours is None else anchor_offset_hours
        start = pendulum.datetime(day.year, day.month, day.day, anchor, tz=self.tz)
        following = day + timedelta(days=1)
        end = pendulum.datetime(following.year, following.month, following.day, anchor, tz=self.tz)

        return TimeRange(start=start, end=end)

    def to_date(self, value: date) -> date:
        """Return a calendar date as is, or the local calendar date of an instant."""
        if isinstance(value, datetime):
            return self.localize(value).date()
        return value

    def business_date_of(self, instant: datetime) -> Date:
        """Return the date whose business day contains ``instant``."""
        local = self.localize(instant)
        day = local.date()
        if local < self.business_day_bounds(day).start:
            return day.subtract(days=1)
        return day
