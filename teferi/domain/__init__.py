"""
Domain layer - Pure calendar logic without external dependencies.
"""

from .calendar_grid import CalendarGridBuilder
from .calendar_range import CalendarRangeModel, TimeSlotLookupProtocol
from .exceptions import DateOutOfRangeError, TeferiError, TimeSlotDataError
from .models import (
    CalendarCell,
    Category,
    CategorySlot,
    DateRange,
    HeaderName,
    MonthGrid,
    TimeSlot,
)

__all__ = [
    "CalendarGridBuilder",
    "CalendarRangeModel",
    "TimeSlotLookupProtocol",
    "DateOutOfRangeError",
    "TeferiError",
    "TimeSlotDataError",
    "CalendarCell",
    "Category",
    "CategorySlot",
    "DateRange",
    "HeaderName",
    "MonthGrid",
    "TimeSlot",
]
