"""
Clock abstraction so "today" can be pinned in tests and from the CLI.
"""

from typing import Protocol

import pendulum
from pendulum import DateTime


class TimeService(Protocol):
    """Protocol describing the clock behaviour needed by the services."""

    timezone: str

    def now(self) -> DateTime:
        """Return the current moment in the configured timezone."""


class DefaultTimeService:
    """Wall clock backed by pendulum."""

    def __init__(self, timezone: str = "UTC") -> None:
        self.timezone = timezone

    def now(self) -> DateTime:
        return pendulum.now(self.timezone)


class FixedTimeService:
    """Clock that always reports the same moment."""

    def __init__(self, now: DateTime, timezone: str | None = None) -> None:
        self.timezone = timezone or now.timezone_name or "UTC"
        self._now = now.in_timezone(self.timezone)

    def now(self) -> DateTime:
        return self._now
