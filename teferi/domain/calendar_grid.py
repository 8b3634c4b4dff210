"""
Month grid building for the calendar screen.

Every month is laid out as six rows of seven days. Days of the neighbouring
months that fill the first and last rows are "out-of-month" cells: they are
never scrollable or selectable and carry no summary, whatever the range
bounds say.
"""

from datetime import date
from typing import List

from pendulum import Date

from .calendar_range import CalendarRangeModel
from .models import CalendarCell, MonthGrid, to_month

ROWS_PER_MONTH = 6
DAYS_PER_WEEK = 7


class CalendarGridBuilder:
    """
    Binds the cells of a month grid to the state of a ``CalendarRangeModel``.
    """

    def __init__(self, model: CalendarRangeModel, first_weekday: int = 0):
        """
        Args:
            model: Calendar state the cells are bound to
            first_weekday: Weekday of the first column (0=Monday, 6=Sunday)
        """
        if first_weekday not in range(DAYS_PER_WEEK):
            raise ValueError(f"first_weekday must be between 0 and 6, got {first_weekday}")

        self.model = model
        self.first_weekday = first_weekday

    def month_dates(self, month: date) -> List[List[Date]]:
        """
        Return the 6x7 days shown for a month.

        The grid starts on the first weekday on or before the 1st and is
        filled with days of the following month up to the end of the grid.
        """
        first = to_month(month)
        leading_days = (first.weekday() - self.first_weekday) % DAYS_PER_WEEK
        current = first.subtract(days=leading_days)

        rows: List[List[Date]] = []
        for _ in range(ROWS_PER_MONTH):
            row = []
            for _ in range(DAYS_PER_WEEK):
                row.append(current)
                current = current.add(days=1)
            rows.append(row)

        return rows

    def build_month(self, month: date) -> MonthGrid:
        """Build the display state of every cell of a month."""
        first = to_month(month)

        rows = [
            [
                self._bind_cell(day, row_index, column_index, first)
                for column_index, day in enumerate(row)
            ]
            for row_index, row in enumerate(self.month_dates(first))
        ]

        return MonthGrid(month=first, rows=rows)

    def build_visible_month(self) -> MonthGrid:
        return self.build_month(self.model.current_visible_calendar_date)

    def _bind_cell(self, day: Date, row: int, column: int, month: Date) -> CalendarCell:
        belongs_to_month = day.year == month.year and day.month == month.month

        if not belongs_to_month:
            # Reset state for days of adjacent months
            return CalendarCell(date=day, row=row, column=column, belongs_to_month=False)

        return CalendarCell(
            date=day,
            row=row,
            column=column,
            belongs_to_month=True,
            is_selected=self.model.is_selected(day),
            allows_scrolling=self.model.can_scroll(day),
            category_slots=tuple(self.model.get_category_slots(day)),
        )
