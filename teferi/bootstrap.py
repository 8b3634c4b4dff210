"""
Application start-up: builds the services from configuration.
"""

import logging

from pendulum import DateTime

from .adapters.time_slot_store import InMemoryTimeSlotStore, JsonTimeSlotStore
from .config import AppConfig
from .domain.models import Category, TimeSlot
from .services.selected_date_service import SelectedDateService
from .services.settings_service import DefaultSettingsService
from .services.time_service import DefaultTimeService, FixedTimeService
from .services.time_slot_service import TimeSlotService, TimeSlotStoreProtocol
from .services.view_model_locator import ViewModelLocator

logger = logging.getLogger(__name__)


def build_store(config: AppConfig) -> TimeSlotStoreProtocol:
    """Pick the time-slot store for the configuration."""
    if config.data_file is None:
        return InMemoryTimeSlotStore()
    return JsonTimeSlotStore(path=config.data_file, timezone=config.timezone)


def build_locator(
    config: AppConfig,
    now: DateTime | None = None,
    store: TimeSlotStoreProtocol | None = None,
) -> ViewModelLocator:
    """
    Wire every service and return the locator.

    Args:
        config: Application configuration
        now: Pins the clock (defaults to the wall clock)
        store: Time-slot store to use instead of the configured one

    Without a configured install date, the day of the earliest stored slot is
    used. On first use (nothing stored yet) an open ``unknown`` slot is
    started and saved, and the install date is set to today.
    """
    if now is None:
        time_service = DefaultTimeService(timezone=config.timezone)
    else:
        time_service = FixedTimeService(now=now, timezone=config.timezone)

    settings_service = DefaultSettingsService(
        time_service=time_service,
        install_date=config.install_date,
    )
    if store is None:
        store = build_store(config)

    time_slot_service = TimeSlotService(
        store=store,
        time_service=time_service,
    )

    if settings_service.install_date is None:
        stored_slots = store.get_time_slots()

        if stored_slots:
            first_start = min(slot.start_time for slot in stored_slots)
            logger.debug("Install date taken from the first tracked slot at %s", first_start)
            settings_service.set_install_date(first_start)
        else:
            first_use = time_service.now()
            logger.info("First use detected, starting tracking at %s", first_use)
            time_slot_service.add_time_slot(TimeSlot(start_time=first_use, category=Category.UNKNOWN))
            store.save()
            settings_service.set_install_date(first_use)

    selected_date_service = SelectedDateService(initial_date=time_service.now())

    return ViewModelLocator(
        time_service=time_service,
        settings_service=settings_service,
        time_slot_service=time_slot_service,
        selected_date_service=selected_date_service,
        locale=config.locale,
        first_weekday=config.first_weekday,
    )
