"""
Tests for settings, shared selection and the composition root.
"""

import json

import pendulum
import pytest

from teferi.adapters.time_slot_store import InMemoryTimeSlotStore
from teferi.bootstrap import build_locator
from teferi.config import AppConfig
from teferi.domain.models import Category, TimeSlot
from teferi.services.selected_date_service import SelectedDateService
from teferi.services.settings_service import DefaultSettingsService
from teferi.services.time_service import DefaultTimeService, FixedTimeService

NOW = pendulum.datetime(2017, 12, 31, 20, 0, tz="Europe/Berlin")


class TestTimeServices:
    """Tests for the clocks."""

    def test_fixed_time_service(self):
        clock = FixedTimeService(now=NOW)

        assert clock.now() == NOW
        assert clock.timezone == "Europe/Berlin"

    def test_fixed_time_service_converts_timezone(self):
        clock = FixedTimeService(now=NOW, timezone="UTC")

        assert clock.now() == NOW
        assert clock.now().hour == 19

    def test_default_time_service_uses_timezone(self):
        clock = DefaultTimeService(timezone="Asia/Tokyo")

        assert clock.now().timezone_name == "Asia/Tokyo"


class TestDefaultSettingsService:
    """Tests for the calendar bounds."""

    def test_range_from_install_date_to_today(self):
        settings = DefaultSettingsService(FixedTimeService(now=NOW), install_date=pendulum.date(2017, 1, 1))

        assert settings.min_valid_date == pendulum.date(2017, 1, 1)
        assert settings.max_valid_date == pendulum.date(2017, 12, 31)
        assert settings.date_range.contains(pendulum.date(2017, 6, 15))

    def test_without_install_date_only_today(self):
        settings = DefaultSettingsService(FixedTimeService(now=NOW))

        assert settings.install_date is None
        assert settings.min_valid_date == settings.max_valid_date == pendulum.date(2017, 12, 31)

    def test_future_install_date_is_clamped(self):
        settings = DefaultSettingsService(FixedTimeService(now=NOW), install_date=pendulum.date(2018, 3, 1))

        assert settings.min_valid_date == pendulum.date(2017, 12, 31)

    def test_set_install_date(self):
        settings = DefaultSettingsService(FixedTimeService(now=NOW))

        settings.set_install_date(pendulum.datetime(2017, 5, 2, 14, 0))

        assert settings.install_date == pendulum.date(2017, 5, 2)
        assert settings.min_valid_date == pendulum.date(2017, 5, 2)


class TestSelectedDateService:
    """Tests for the shared selection."""

    def test_notifies_on_change_only(self):
        service = SelectedDateService(initial_date=pendulum.date(2017, 6, 15))
        received = []
        service.subscribe(received.append)

        service.current_selected_date = pendulum.date(2017, 6, 15)
        service.current_selected_date = pendulum.datetime(2017, 6, 16, 8)

        assert received == [pendulum.date(2017, 6, 16)]


class TestViewModelLocator:
    """Tests for wiring through build_locator."""

    def _locator(self, **config_kwargs):
        config = AppConfig(timezone="Europe/Berlin", **config_kwargs)
        return build_locator(config, now=NOW, store=InMemoryTimeSlotStore())

    def test_calendar_model_uses_settings_range(self):
        locator = self._locator(install_date=pendulum.date(2017, 1, 1))

        model = locator.get_calendar_model()

        assert model.min_valid_date == pendulum.date(2017, 1, 1)
        assert model.max_valid_date == pendulum.date(2017, 12, 31)
        assert model.selected_date == pendulum.date(2017, 12, 31)

    def test_selection_is_shared_both_ways(self):
        locator = self._locator(install_date=pendulum.date(2017, 1, 1))
        model = locator.get_calendar_model()

        model.selected_date = pendulum.date(2017, 6, 15)
        assert locator.selected_date_service.current_selected_date == pendulum.date(2017, 6, 15)

        locator.selected_date_service.current_selected_date = pendulum.date(2017, 3, 1)
        assert model.selected_date == pendulum.date(2017, 3, 1)

    def test_shared_selection_outside_range_is_ignored(self):
        locator = self._locator(install_date=pendulum.date(2017, 6, 1))
        model = locator.get_calendar_model()

        locator.selected_date_service.current_selected_date = pendulum.date(2017, 1, 1)

        assert model.selected_date == pendulum.date(2017, 12, 31)

    def test_new_model_starts_on_shared_selection(self):
        locator = self._locator(install_date=pendulum.date(2017, 1, 1))
        locator.selected_date_service.current_selected_date = pendulum.date(2017, 8, 8)

        model = locator.get_calendar_model()

        assert model.selected_date == pendulum.date(2017, 8, 8)
        assert model.current_visible_calendar_date == pendulum.date(2017, 8, 1)

    def test_only_newest_model_follows_shared_selection(self):
        """Building a new model unlinks the previous one."""
        locator = self._locator(install_date=pendulum.date(2017, 1, 1))
        first = locator.get_calendar_model()
        second = locator.get_calendar_model()

        locator.selected_date_service.current_selected_date = pendulum.date(2017, 6, 15)

        assert second.selected_date == pendulum.date(2017, 6, 15)
        assert first.selected_date == pendulum.date(2017, 12, 31)

        first.selected_date = pendulum.date(2017, 2, 2)

        assert locator.selected_date_service.current_selected_date == pendulum.date(2017, 6, 15)
        assert second.selected_date == pendulum.date(2017, 6, 15)

    def test_release_calendar_model_unlinks_selection(self):
        locator = self._locator(install_date=pendulum.date(2017, 1, 1))
        model = locator.get_calendar_model()

        locator.release_calendar_model()
        locator.selected_date_service.current_selected_date = pendulum.date(2017, 6, 15)
        model.selected_date = pendulum.date(2017, 3, 1)

        assert model.selected_date == pendulum.date(2017, 3, 1)
        assert locator.selected_date_service.current_selected_date == pendulum.date(2017, 6, 15)

    def test_grid_builder_uses_configured_first_weekday(self):
        locator = self._locator(install_date=pendulum.date(2017, 1, 1), first_weekday=6)

        builder = locator.get_calendar_grid_builder(locator.get_calendar_model())

        assert builder.first_weekday == 6

    def test_category_slots_reach_model(self):
        store = InMemoryTimeSlotStore([
            TimeSlot(
                start_time=pendulum.datetime(2017, 6, 15, 9, tz="Europe/Berlin"),
                category=Category.WORK,
                end_time=pendulum.datetime(2017, 6, 15, 17, tz="Europe/Berlin"),
            )
        ])
        config = AppConfig(timezone="Europe/Berlin", install_date=pendulum.date(2017, 1, 1))
        model = build_locator(config, now=NOW, store=store).get_calendar_model()

        slots = model.get_category_slots(pendulum.date(2017, 6, 15))

        assert [(slot.category, slot.proportion) for slot in slots] == [(Category.WORK, pytest.approx(1.0))]


class TestFirstUse:
    """Tests for first-use initialisation."""

    def test_first_use_starts_tracking_and_sets_install_date(self):
        store = InMemoryTimeSlotStore()
        locator = build_locator(AppConfig(timezone="Europe/Berlin"), now=NOW, store=store)

        slots = store.get_time_slots()

        assert len(slots) == 1
        assert slots[0].category == Category.UNKNOWN
        assert slots[0].is_running
        assert locator.settings_service.install_date == pendulum.date(2017, 12, 31)

    def test_known_install_date_leaves_store_untouched(self):
        store = InMemoryTimeSlotStore()
        build_locator(
            AppConfig(timezone="Europe/Berlin", install_date=pendulum.date(2017, 1, 1)),
            now=NOW,
            store=store,
        )

        assert store.get_time_slots() == []

    def test_first_use_is_saved_and_remembered(self, tmp_path):
        """A second start finds the saved slot and keeps the first day as install date."""
        data_file = tmp_path / "slots.json"
        data_file.write_text("[]", encoding="utf-8")
        config = AppConfig(timezone="Europe/Berlin", data_file=data_file)

        build_locator(config, now=NOW)
        later = build_locator(config, now=NOW.add(days=3))

        saved = json.loads(data_file.read_text(encoding="utf-8"))
        assert len(saved) == 1
        assert saved[0]["category"] == "unknown"
        assert saved[0]["end_time"] is None
        assert later.settings_service.install_date == pendulum.date(2017, 12, 31)

        model = later.get_calendar_model()

        assert model.min_valid_date == pendulum.date(2017, 12, 31)
        assert model.max_valid_date == pendulum.date(2018, 1, 3)

    def test_install_date_taken_from_earliest_stored_slot(self):
        store = InMemoryTimeSlotStore([
            TimeSlot(
                start_time=pendulum.datetime(2017, 6, 15, 9, tz="Europe/Berlin"),
                category=Category.WORK,
                end_time=pendulum.datetime(2017, 6, 15, 17, tz="Europe/Berlin"),
            ),
            TimeSlot(
                start_time=pendulum.datetime(2017, 3, 2, 8, tz="Europe/Berlin"),
                category=Category.COMMUTE,
                end_time=pendulum.datetime(2017, 3, 2, 9, tz="Europe/Berlin"),
            ),
        ])

        locator = build_locator(AppConfig(timezone="Europe/Berlin"), now=NOW, store=store)

        assert locator.settings_service.install_date == pendulum.date(2017, 3, 2)
        assert len(store.get_time_slots()) == 2
