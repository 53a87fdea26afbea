from __future__ import annotations

from datetime import datetime

from appointly.models import BusinessHours
from appointly.services.availability.schedule_resolver import ScheduleResolver
from tests.helpers import MONDAY, SATURDAY, SUNDAY, at


def entry(open_time: str, close_time: str, is_closed: bool = False) -> BusinessHours:
    return BusinessHours(day_of_week=1, open_time=open_time, close_time=close_time, is_closed=is_closed)


class TestWindowForEntry:
    def test_missing_entry_is_closed(self) -> None:
        window = ScheduleResolver.window_for_entry(None, MONDAY)
        assert not window.is_open
        assert window.interval is None

    def test_closed_entry_is_closed(self) -> None:
        assert not ScheduleResolver.window_for_entry(entry("09:00", "17:00", is_closed=True), MONDAY).is_open

    def test_open_entry_is_anchored_on_date(self) -> None:
        window = ScheduleResolver.window_for_entry(entry("08:30", "12:00"), MONDAY)
        assert window.is_open
        assert window.window_start == at(MONDAY, "08:30")
        assert window.window_end == at(MONDAY, "12:00")

    def test_unparseable_times_give_empty_window(self, caplog) -> None:
        window = ScheduleResolver.window_for_entry(entry("nine", "17:00"), MONDAY)
        assert window.is_open
        assert window.interval.is_empty
        assert "Unparseable schedule" in caplog.text

    def test_inverted_times_give_empty_window(self, caplog) -> None:
        window = ScheduleResolver.window_for_entry(entry("17:00", "09:00"), MONDAY)
        assert window.is_open
        assert window.interval.is_empty
        assert "no slots will be offered" in caplog.text


class TestResolve:
    def test_default_schedule(self, db, business) -> None:
        monday = ScheduleResolver.resolve(db, business.id, MONDAY)
        assert monday.is_open
        assert monday.window_start == datetime(2030, 1, 7, 9, 0)
        assert monday.window_end == datetime(2030, 1, 7, 17, 0)

        assert not ScheduleResolver.resolve(db, business.id, SUNDAY).is_open
        assert not ScheduleResolver.resolve(db, business.id, SATURDAY).is_open

    def test_day_without_row_is_closed(self, db, business) -> None:
        db.query(BusinessHours).filter(
            BusinessHours.business_id == business.id,
            BusinessHours.day_of_week == 1
        ).delete()
        db.commit()

        assert ScheduleResolver.get_schedule_for_day(db, business.id, 1) is None
        assert not ScheduleResolver.resolve(db, business.id, MONDAY).is_open
