"""
Settings collaborator exposing the install date and the calendar bounds.
"""

import logging
from datetime import date
from typing import Protocol

from pendulum import Date

from ..domain.models import DateRange, to_day
from .time_service import TimeService

logger = logging.getLogger(__name__)


class SettingsService(Protocol):
    """Protocol describing the settings needed to bound the calendar."""

    @property
    def install_date(self) -> Date | None:
        """Day the app was first used, if known."""

    def set_install_date(self, value: date) -> None:
        """Record the day the app was first used."""

    @property
    def min_valid_date(self) -> Date:
        """First day the calendar can show."""

    @property
    def max_valid_date(self) -> Date:
        """Last day the calendar can show."""

    @property
    def date_range(self) -> DateRange:
        """Both bounds as a range."""


class DefaultSettingsService:
    """
    In-memory settings.

    The calendar runs from the install date up to today. Without an install
    date it only covers today, and an install date after today (clock skew)
    is clamped to today.
    """

    def __init__(self, time_service: TimeService, install_date: date | None = None) -> None:
        self._time_service = time_service
        self._install_date = to_day(install_date) if install_date is not None else None

    @property
    def install_date(self) -> Date | None:
        return self._install_date

    def set_install_date(self, value: date) -> None:
        self._install_date = to_day(value)
        logger.info("Install date set to %s", self._install_date)

    @property
    def max_valid_date(self) -> Date:
        return to_day(self._time_service.now())

    @property
    def min_valid_date(self) -> Date:
        today = self.max_valid_date
        if self._install_date is None or self._install_date > today:
            return today
        return self._install_date

    @property
    def date_range(self) -> DateRange:
        return DateRange(min_date=self.min_valid_date, max_date=self.max_valid_date)
