"""
Domain-specific exception hierarchy for slot availability resolution.
"""


class SlotError(Exception):
    """Base class for all application-level errors."""


class InvalidTimezone(SlotError, ValueError):
    """Raised when a timezone identifier is not recognised."""

    def __init__(self, timezone: str):
        super().__init__(f"Unknown timezone identifier: {timezone!r}")
        self.timezone = timezone


class MalformedTimeOfDay(SlotError, ValueError):
    """Raised when a shift or reservation time is not a valid ``HH:mm`` string."""


class MalformedBusyInterval(SlotError, ValueError):
    """Raised when a busy record has a missing or unparsable bound."""


class BusySourceError(SlotError):
    """Raised when busy-interval data cannot be loaded or parsed."""
