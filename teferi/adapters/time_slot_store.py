"""
Time-slot stores: an in-memory list and a JSON file backed variant.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

import pendulum
from pendulum import DateTime

from ..domain.exceptions import TimeSlotDataError
from ..domain.models import Category, TimeSlot

logger = logging.getLogger(__name__)


class InMemoryTimeSlotStore:
    """
    List-backed store, used when no data file is configured.
    """

    def __init__(self, time_slots: List[TimeSlot] | None = None):
        self._time_slots: List[TimeSlot] = list(time_slots or [])

    def get_time_slots(self) -> List[TimeSlot]:
        return list(self._time_slots)

    def add_time_slot(self, time_slot: TimeSlot) -> None:
        """
        Append a slot, closing the currently running one.

        The running slot ends where the new one starts.

        Raises:
            ValueError: If a running slot starts at or after the new slot
        """
        for existing in self._time_slots:
            if existing.is_running and existing.start_time >= time_slot.start_time:
                raise ValueError(
                    f"Cannot add a slot starting at {time_slot.start_time}: "
                    f"the running slot started at {existing.start_time}"
                )

        for index, existing in enumerate(self._time_slots):
            if existing.is_running:
                self._time_slots[index] = TimeSlot(
                    start_time=existing.start_time,
                    category=existing.category,
                    end_time=time_slot.start_time,
                )

        self._time_slots.append(time_slot)

    def save(self) -> None:
        """Nothing to persist for an in-memory store."""


class JsonTimeSlotStore(InMemoryTimeSlotStore):
    """
    Store that loads time slots from a JSON file.

    The file holds an array of objects::

        [{"start_time": "2017-06-15T08:00:00", "end_time": "2017-06-15T09:00:00", "category": "work"}]

    ``end_time`` may be null for the running slot. Times without an offset
    are read in the configured timezone. A missing file is an empty store.
    """

    def __init__(self, path: Path, timezone: str = "UTC"):
        """
        Args:
            path: Location of the JSON data file
            timezone: IANA timezone used for naive timestamps
        """
        self.path = Path(path)
        self.timezone = timezone
        super().__init__(self._load())

    def _load(self) -> List[TimeSlot]:
        if not self.path.exists():
            logger.info("No time-slot data at %s, starting empty", self.path)
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise TimeSlotDataError(f"Could not read time slots from {self.path}: {exc}") from exc

        if not isinstance(raw, list):
            raise TimeSlotDataError(f"Time-slot file {self.path} must contain a JSON array.")

        slots = [self._parse_entry(entry, position) for position, entry in enumerate(raw)]
        logger.debug("Loaded %d time slots from %s", len(slots), self.path)
        return slots

    def _parse_entry(self, entry: Any, position: int) -> TimeSlot:
        if not isinstance(entry, dict):
            raise TimeSlotDataError(f"Entry {position} in {self.path} is not an object.")

        try:
            start_time = self._parse_time(entry["start_time"])
            end_value = entry.get("end_time")
            end_time = self._parse_time(end_value) if end_value else None
            category = Category(entry.get("category", Category.UNKNOWN.value))
            return TimeSlot(start_time=start_time, category=category, end_time=end_time)
        except KeyError as exc:
            raise TimeSlotDataError(f"Entry {position} in {self.path} is missing {exc}") from exc
        except (ValueError, TypeError) as exc:
            raise TimeSlotDataError(f"Entry {position} in {self.path} is invalid: {exc}") from exc

    def _parse_time(self, value: str) -> DateTime:
        parsed = pendulum.parse(value, tz=self.timezone)
        if not isinstance(parsed, DateTime):
            raise ValueError(f"Expected a date and time, got '{value}'")
        return parsed

    def save(self) -> None:
        """Write all slots back to the data file."""
        payload: List[Dict[str, Any]] = [
            {
                "start_time": slot.start_time.to_iso8601_string(),
                "end_time": slot.end_time.to_iso8601_string() if slot.end_time else None,
                "category": slot.category.value,
            }
            for slot in self.get_time_slots()
        ]

        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)

        logger.debug("Saved %d time slots to %s", len(payload), self.path)
