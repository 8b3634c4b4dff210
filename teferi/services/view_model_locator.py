"""
Composition root handing fully wired calendar models to the UI layer.

Services are built once by the caller and passed in explicitly; the locator
only combines them per screen.
"""

import logging
from typing import List

from ..domain.calendar_grid import CalendarGridBuilder
from ..domain.calendar_range import CalendarRangeModel
from ..domain.observable import Unsubscribe
from .selected_date_service import SelectedDateService
from .settings_service import SettingsService
from .time_service import TimeService
from .time_slot_service import TimeSlotService

logger = logging.getLogger(__name__)


class ViewModelLocator:
    """
    Builds calendar models from already constructed services.
    """

    def __init__(
        self,
        time_service: TimeService,
        settings_service: SettingsService,
        time_slot_service: TimeSlotService,
        selected_date_service: SelectedDateService,
        locale: str | None = None,
        first_weekday: int = 0,
    ) -> None:
        self.time_service = time_service
        self.settings_service = settings_service
        self.time_slot_service = time_slot_service
        self.selected_date_service = selected_date_service
        self.locale = locale
        self.first_weekday = first_weekday
        self._calendar_links: List[Unsubscribe] = []

    def get_calendar_model(self) -> CalendarRangeModel:
        """
        Build the calendar model for the current range.

        The model starts on the shared selected day when it is in range (today
        otherwise) and keeps the shared selection in sync in both directions.
        One calendar screen is live at a time: building a new model releases
        the previous one.
        """
        self.release_calendar_model()

        date_range = self.settings_service.date_range
        shared_date = self.selected_date_service.current_selected_date
        initial = shared_date if date_range.contains(shared_date) else date_range.max_date

        model = CalendarRangeModel(
            date_range=date_range,
            time_slot_lookup=self.time_slot_service,
            selected_date=initial,
            locale=self.locale,
        )

        def push_to_shared(day):
            self.selected_date_service.current_selected_date = day

        def pull_from_shared(day):
            if model.can_scroll(day):
                model.selected_date = day
            else:
                logger.debug("Ignoring shared selection %s outside %s", day, date_range)

        self._calendar_links = [
            model.subscribe_selected_date(push_to_shared),
            self.selected_date_service.subscribe(pull_from_shared),
        ]

        return model

    def release_calendar_model(self) -> None:
        """Unlink the current calendar model from the shared selection."""
        for unsubscribe in self._calendar_links:
            unsubscribe()
        self._calendar_links = []

    def get_calendar_grid_builder(self, model: CalendarRangeModel) -> CalendarGridBuilder:
        return CalendarGridBuilder(model=model, first_weekday=self.first_weekday)
