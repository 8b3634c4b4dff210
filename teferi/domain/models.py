"""
Domain models for calendar ranges, time slots and category summaries.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Iterator, List, Tuple

import pendulum
from pendulum import Date, DateTime


def to_day(value: date) -> Date:
    """
    Normalise any date-like value to a pendulum calendar day.

    Accepts ``datetime.date``, ``datetime.datetime`` and their pendulum
    counterparts. Datetimes keep the calendar day of their own timezone.
    """
    if isinstance(value, datetime):
        value = value.date()
    return pendulum.date(value.year, value.month, value.day)


def to_month(value: date) -> Date:
    """Truncate a date-like value to the first day of its month."""
    return to_day(value).start_of("month")


class Category(str, Enum):
    """Categories a tracked time slot can belong to."""
    COMMUTE = "commute"
    FOOD = "food"
    FRIENDS = "friends"
    WORK = "work"
    LEISURE = "leisure"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class DateRange:
    """
    Represents an immutable, inclusive range of calendar days.

    Invariant: min_date must not be after max_date.
    """
    min_date: Date
    max_date: Date

    def __post_init__(self):
        # Frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "min_date", to_day(self.min_date))
        object.__setattr__(self, "max_date", to_day(self.max_date))

        if self.min_date > self.max_date:
            raise ValueError(
                f"Min date {self.min_date} must not be after max date {self.max_date}"
            )

    def contains(self, value: date) -> bool:
        """Check if a day lies within the range, bounds included."""
        return self.min_date <= to_day(value) <= self.max_date

    def months(self) -> Iterator[Date]:
        """Yield the first day of every month touched by the range."""
        current = self.min_date.start_of("month")
        last = self.max_date.start_of("month")

        while current <= last:
            yield current
            current = current.add(months=1)

    def __str__(self) -> str:
        return f"{self.min_date.format('DD.MM.YYYY')} - {self.max_date.format('DD.MM.YYYY')}"


@dataclass(frozen=True)
class CategorySlot:
    """
    Share of a day's tracked time spent in one category.
    """
    category: Category
    proportion: float

    def __post_init__(self):
        if not 0.0 <= self.proportion <= 1.0:
            raise ValueError(f"Proportion must be between 0 and 1, got {self.proportion}")

    def percentage(self) -> int:
        """Return the proportion as a rounded percentage."""
        return round(self.proportion * 100)


@dataclass(frozen=True)
class TimeSlot:
    """
    A recorded, categorized interval of a user's day.

    A slot without an end time is the one currently running.
    """
    start_time: DateTime
    category: Category = Category.UNKNOWN
    end_time: DateTime | None = None

    def __post_init__(self):
        if self.end_time is not None and self.end_time <= self.start_time:
            raise ValueError(
                f"Start time {self.start_time} must be before end time {self.end_time}"
            )

    @property
    def is_running(self) -> bool:
        return self.end_time is None

    def seconds_within(self, start: DateTime, end: DateTime, now: DateTime) -> float:
        """
        Return how many seconds of this slot fall inside [start, end).

        A running slot is treated as ending at ``now``.
        """
        slot_end = self.end_time if self.end_time is not None else now

        overlap_start = max(self.start_time, start)
        overlap_end = min(slot_end, end)

        if overlap_end <= overlap_start:
            return 0.0

        return (overlap_end - overlap_start).total_seconds()


@dataclass(frozen=True)
class HeaderName:
    """
    Label data for a calendar month header.
    """
    month: str
    year: str

    def __str__(self) -> str:
        return f"{self.month} {self.year}"


@dataclass(frozen=True)
class CalendarCell:
    """
    Display state of a single day in a month grid.
    """
    date: Date
    row: int
    column: int
    belongs_to_month: bool
    is_selected: bool = False
    allows_scrolling: bool = False
    category_slots: Tuple[CategorySlot, ...] = field(default_factory=tuple)

    @property
    def dominant_category(self) -> Category | None:
        """Category with the largest share, if the day has any tracked time."""
        if not self.category_slots:
            return None
        return self.category_slots[0].category


@dataclass(frozen=True)
class MonthGrid:
    """
    Six-row grid of cells for one calendar month.
    """
    month: Date
    rows: List[List[CalendarCell]]

    def cells(self) -> Iterator[CalendarCell]:
        """Iterate the cells row by row."""
        for row in self.rows:
            yield from row

    def find_cell(self, value: date) -> CalendarCell | None:
        """Find the in-month cell for a day, if the grid shows it."""
        day = to_day(value)
        for cell in self.cells():
            if cell.belongs_to_month and cell.date == day:
                return cell
        return None
