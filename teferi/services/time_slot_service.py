"""
Time-slot collaborator: day lookups and per-day category summaries.

The service reads slots from a store adapter and aggregates a day's tracked
time into the ``CategorySlot`` summary consumed by the calendar.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Dict, List, Protocol

import pendulum
from pendulum import DateTime

from ..domain.models import Category, CategorySlot, TimeSlot, to_day
from .time_service import TimeService

logger = logging.getLogger(__name__)


class TimeSlotStoreProtocol(Protocol):
    """Protocol describing the storage behaviour needed by the service."""

    def get_time_slots(self) -> List[TimeSlot]:
        """Return every stored time slot."""

    def add_time_slot(self, time_slot: TimeSlot) -> None:
        """Store a new time slot."""

    def save(self) -> None:
        """Persist the stored slots."""


class TimeSlotService:
    """
    Answers time-slot questions for single calendar days.

    Day bounds are midnight to midnight in the clock's timezone. A running
    slot counts up to the current moment.
    """

    def __init__(self, store: TimeSlotStoreProtocol, time_service: TimeService) -> None:
        self._store = store
        self._time_service = time_service

    def add_time_slot(self, time_slot: TimeSlot) -> None:
        self._store.add_time_slot(time_slot)

    def get_time_slots(self, for_date: date) -> List[TimeSlot]:
        """Return the slots overlapping a day, ordered by start time."""
        day_start, day_end = self._day_bounds(for_date)
        now = self._time_service.now()

        slots = [
            slot for slot in self._store.get_time_slots()
            if slot.seconds_within(day_start, day_end, now) > 0
        ]

        return sorted(slots, key=lambda slot: slot.start_time)

    def get_category_slots(self, for_date: date) -> List[CategorySlot]:
        """
        Summarise a day's tracked time per category.

        Returns:
            Category slots ordered by proportion, largest first. Ties keep the
            declaration order of ``Category``. Empty if nothing was tracked.
        """
        day_start, day_end = self._day_bounds(for_date)
        now = self._time_service.now()

        seconds_per_category: Dict[Category, float] = {}

        for slot in self._store.get_time_slots():
            seconds = slot.seconds_within(day_start, day_end, now)
            if seconds <= 0:
                continue
            seconds_per_category[slot.category] = (
                seconds_per_category.get(slot.category, 0.0) + seconds
            )

        total_seconds = sum(seconds_per_category.values())

        if total_seconds <= 0:
            return []

        category_order = list(Category)
        ordered = sorted(
            seconds_per_category.items(),
            key=lambda item: (-item[1], category_order.index(item[0]))
        )

        logger.debug(
            "Aggregated %d categories over %.0f seconds for %s",
            len(ordered), total_seconds, day_start.to_date_string()
        )

        return [
            CategorySlot(category=category, proportion=min(seconds / total_seconds, 1.0))
            for category, seconds in ordered
        ]

    def _day_bounds(self, for_date: date) -> tuple[DateTime, DateTime]:
        day = to_day(for_date)
        start = pendulum.datetime(
            day.year, day.month, day.day, tz=self._time_service.timezone
        )
        return start, start.add(days=1)
