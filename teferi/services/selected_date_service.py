"""
App-wide selected day shared between screens.
"""

import logging
from datetime import date
from typing import Callable

from pendulum import Date

from ..domain.models import to_day
from ..domain.observable import Observable, Unsubscribe

logger = logging.getLogger(__name__)


class SelectedDateService:
    """Holds the currently selected day and notifies subscribers of changes."""

    def __init__(self, initial_date: date) -> None:
        self._current = to_day(initial_date)
        self._changed: Observable[Date] = Observable()

    @property
    def current_selected_date(self) -> Date:
        return self._current

    @current_selected_date.setter
    def current_selected_date(self, value: date) -> None:
        day = to_day(value)
        if day == self._current:
            return

        logger.debug("Shared selected date changed to %s", day)
        self._current = day
        self._changed.emit(day)

    def subscribe(self, callback: Callable[[Date], None]) -> Unsubscribe:
        return self._changed.subscribe(callback)
