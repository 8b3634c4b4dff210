"""
Service layer collaborators consumed by the calendar model.
"""

from .selected_date_service import SelectedDateService
from .settings_service import DefaultSettingsService, SettingsService
from .time_service import DefaultTimeService, FixedTimeService, TimeService
from .time_slot_service import TimeSlotService, TimeSlotStoreProtocol
from .view_model_locator import ViewModelLocator

__all__ = [
    "SelectedDateService",
    "DefaultSettingsService",
    "SettingsService",
    "DefaultTimeService",
    "FixedTimeService",
    "TimeService",
    "TimeSlotService",
    "TimeSlotStoreProtocol",
    "ViewModelLocator",
]
