# appointly/services/availability/schedule_resolver.py
"""Resolve a business's opening window for one calendar date"""
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional
from uuid import UUID
import logging

from sqlalchemy.orm import Session

from appointly.models.business import BusinessHours
from appointly.services.availability.intervals import TimeInterval, combine, sunday_based_weekday

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DayWindow:
    is_open: bool
    window_start: Optional[datetime] = None
    window_end: Optional[datetime] = None

    @classmethod
    def closed(cls) -> "DayWindow":
        return cls(is_open=False)

    @property
    def interval(self) -> Optional[TimeInterval]:
        if not self.is_open:
            return None
        return TimeInterval(self.window_start, self.window_end)


class ScheduleResolver:
    """Looks up weekly schedule rows and anchors them on a date"""

    @staticmethod
    def get_schedule_for_day(db: Session, business_id: UUID, day_of_week: int) -> Optional[BusinessHours]:
        return db.query(BusinessHours).filter(
            BusinessHours.business_id == business_id,
            BusinessHours.day_of_week == day_of_week
        ).first()

    @staticmethod
    def resolve(db: Session, business_id: UUID, target_date: date) -> DayWindow:
        entry = ScheduleResolver.get_schedule_for_day(
            db, business_id, sunday_based_weekday(target_date)
        )
        return ScheduleResolver.window_for_entry(entry, target_date)

    @staticmethod
    def window_for_entry(entry: Optional[BusinessHours], target_date: date) -> DayWindow:
        """
        Closed when there is no entry or it is flagged closed.

        A malformed entry (unparseable times, or open >= close) yields an
        open but empty window so callers produce zero slots without failing.
        """
        if entry is None or entry.is_closed:
            return DayWindow.closed()

        try:
            window_start = combine(target_date, entry.open_time)
            window_end = combine(target_date, entry.close_time)
        except (TypeError, ValueError):
            logger.warning(
                f"Unparseable schedule for business {entry.business_id} day {entry.day_of_week}: "
                f"{entry.open_time!r}-{entry.close_time!r}"
            )
            anchor = datetime.combine(target_date, datetime.min.time())
            return DayWindow(is_open=True, window_start=anchor, window_end=anchor)

        if window_start >= window_end:
            logger.warning(
                f"Schedule for business {entry.business_id} day {entry.day_of_week} opens at "
                f"{entry.open_time} but closes at {entry.close_time}; no slots will be offered"
            )

        return DayWindow(is_open=True, window_start=window_start, window_end=window_end)
