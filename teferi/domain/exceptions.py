"""
Domain-specific exception hierarchy for the teferi calendar.
"""


class TeferiError(Exception):
    """Base class for all application-level errors."""


class DateOutOfRangeError(TeferiError, ValueError):
    """Raised when a date outside the valid calendar range is selected."""


class TimeSlotDataError(TeferiError):
    """Raised when time-slot data cannot be read or parsed."""
