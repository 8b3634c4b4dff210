"""
Calendar state for a bounded, scrollable range of days.

Pure in-memory logic: which days can be scrolled to, which day is selected,
which month segment is visible, and what each day's category summary is.
The summary itself comes from a time-slot lookup collaborator.
"""

import logging
from datetime import date
from typing import Callable, List, Protocol, Sequence

from pendulum import Date

from .exceptions import DateOutOfRangeError
from .models import CategorySlot, DateRange, HeaderName, to_day, to_month
from .observable import Observable, Unsubscribe

logger = logging.getLogger(__name__)


class TimeSlotLookupProtocol(Protocol):
    """Protocol describing the per-day summary lookup needed by the model."""

    def get_category_slots(self, for_date: Date) -> Sequence[CategorySlot]:
        """Return the category slots of a calendar day, largest share first."""


class CalendarRangeModel:
    """
    Date-range driven state behind the calendar screen.

    Selecting a day outside the range is a caller error: the model raises
    ``DateOutOfRangeError`` and never clamps. Callers check ``can_scroll``
    before assigning.
    """

    def __init__(
        self,
        date_range: DateRange,
        time_slot_lookup: TimeSlotLookupProtocol,
        selected_date: date | None = None,
        locale: str | None = None,
    ) -> None:
        self._date_range = date_range
        self._time_slot_lookup = time_slot_lookup
        self._locale = locale

        initial = to_day(selected_date) if selected_date is not None else date_range.max_date
        self._ensure_in_range(initial)

        self._selected_date = initial
        self._visible_month = initial.start_of("month")

        self._selected_date_changed: Observable[Date] = Observable()
        self._visible_date_changed: Observable[Date] = Observable()

    @property
    def date_range(self) -> DateRange:
        return self._date_range

    @property
    def min_valid_date(self) -> Date:
        return self._date_range.min_date

    @property
    def max_valid_date(self) -> Date:
        return self._date_range.max_date

    def can_scroll(self, to_date: date) -> bool:
        """Check whether a day lies within [min_valid_date, max_valid_date]."""
        return self._date_range.contains(to_date)

    def get_category_slots(self, for_date: date) -> List[CategorySlot]:
        """
        Return the category summary of a day as supplied by the lookup.

        Days without tracked time yield an empty list.
        """
        slots = self._time_slot_lookup.get_category_slots(to_day(for_date))
        return list(slots) if slots else []

    @property
    def selected_date(self) -> Date:
        return self._selected_date

    @selected_date.setter
    def selected_date(self, value: date) -> None:
        day = to_day(value)
        self._ensure_in_range(day)

        if day == self._selected_date:
            return

        logger.debug("Selected date changed from %s to %s", self._selected_date, day)
        self._selected_date = day
        self._selected_date_changed.emit(day)

    def is_selected(self, value: date) -> bool:
        return to_day(value) == self._selected_date

    @property
    def current_visible_calendar_date(self) -> Date:
        return self._visible_month

    @current_visible_calendar_date.setter
    def current_visible_calendar_date(self, value: date) -> None:
        month = to_month(value)

        if month == self._visible_month:
            return

        logger.debug("Visible calendar month changed from %s to %s", self._visible_month, month)
        self._visible_month = month
        self._visible_date_changed.emit(month)

    def get_attributed_header_name(self, date: date) -> HeaderName:
        """Return the month and year labels for a header."""
        day = to_day(date)
        return HeaderName(
            month=day.format("MMMM", locale=self._locale),
            year=day.format("YYYY", locale=self._locale),
        )

    def segments(self) -> List[Date]:
        """Return the first day of every month the calendar can show."""
        return list(self._date_range.months())

    def can_scroll_to_previous_segment(self) -> bool:
        return self._visible_month > self.min_valid_date.start_of("month")

    def can_scroll_to_next_segment(self) -> bool:
        return self._visible_month < self.max_valid_date.start_of("month")

    def scroll_to_previous_segment(self) -> bool:
        """Move the visible month back by one. Returns whether it moved."""
        if not self.can_scroll_to_previous_segment():
            return False
        self.current_visible_calendar_date = self._visible_month.subtract(months=1)
        return True

    def scroll_to_next_segment(self) -> bool:
        """Move the visible month forward by one. Returns whether it moved."""
        if not self.can_scroll_to_next_segment():
            return False
        self.current_visible_calendar_date = self._visible_month.add(months=1)
        return True

    def subscribe_selected_date(self, callback: Callable[[Date], None]) -> Unsubscribe:
        """Get notified with the new day whenever the selection changes."""
        return self._selected_date_changed.subscribe(callback)

    def subscribe_visible_calendar_date(self, callback: Callable[[Date], None]) -> Unsubscribe:
        """Get notified with the new month start whenever the visible segment changes."""
        return self._visible_date_changed.subscribe(callback)

    def _ensure_in_range(self, day: Date) -> None:
        if not self.can_scroll(day):
            raise DateOutOfRangeError(
                f"Date {day} is outside the valid range {self._date_range}"
            )
