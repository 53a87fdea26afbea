# ===== appointly/services/availability/availability_service.py =====
from typing import List, Dict, Optional
from datetime import date, timedelta
from uuid import UUID
from sqlalchemy.orm import Session
import logging

from appointly.config.settings import get_settings
from appointly.core.exceptions import ValidationException
from appointly.services.availability.intervals import TimeInterval, day_bounds, format_wall_clock
from appointly.services.availability.schedule_resolver import ScheduleResolver
from appointly.services.availability.blocking_resolver import BlockingResolver
from appointly.services.availability.occupancy_resolver import OccupancyResolver, OccupancyFilter
from appointly.services.business.business_service import BusinessService

logger = logging.getLogger(__name__)


class AvailabilityService:
    """Computes bookable slots from the weekly schedule, blocks and bookings"""

    @staticmethod
    def compute_availability(
            db: Session,
            business_id: UUID,
            target_date: date,
            service_id: UUID,
            staff_id: Optional[UUID] = None,
            step_minutes: Optional[int] = None
    ) -> List[str]:
        """
        Ordered "HH:MM" start times bookable for the service on target_date.

        Read-only. A closed or malformed day yields an empty list.
        """
        return [
            format_wall_clock(slot.start)
            for slot in AvailabilityService._generate_slots(
                db, business_id, target_date, service_id, staff_id, step_minutes
            )
        ]

    @staticmethod
    def get_available_slots(
            db: Session,
            business_id: UUID,
            target_date: date,
            service_id: UUID,
            staff_id: Optional[UUID] = None,
            step_minutes: Optional[int] = None
    ) -> List[Dict]:
        """Same slots as compute_availability, with absolute start/end"""
        return [
            {
                'start': slot.start.isoformat(),
                'end': slot.end.isoformat(),
                'duration_minutes': int((slot.end - slot.start).total_seconds() // 60)
            }
            for slot in AvailabilityService._generate_slots(
                db, business_id, target_date, service_id, staff_id, step_minutes
            )
        ]

    @staticmethod
    def _generate_slots(
            db: Session,
            business_id: UUID,
            target_date: date,
            service_id: UUID,
            staff_id: Optional[UUID],
            step_minutes: Optional[int]
    ) -> List[TimeInterval]:
        business = BusinessService.get_business(db, business_id)
        service = BusinessService.get_service(db, business.id, service_id)
        if staff_id is not None:
            BusinessService.get_staff(db, business.id, staff_id)

        step = get_settings().SLOT_STEP_MINUTES if step_minutes is None else step_minutes
        if step <= 0:
            raise ValidationException("step_minutes must be positive", code="INVALID_STEP")

        window = ScheduleResolver.resolve(db, business.id, target_date)
        if not window.is_open:
            logger.debug(f"Business {business.id} closed on {target_date}")
            return []

        day = day_bounds(target_date)
        blocked = BlockingResolver.resolve(db, business.id, day)
        occupied = OccupancyResolver.resolve(db, OccupancyFilter(
            business_id=business.id,
            window_start=day.start,
            window_end=day.end,
            staff_id=staff_id
        ))

        return AvailabilityService._generate_day_slots(
            window.interval, service.duration, step, occupied + blocked
        )

    @staticmethod
    def _generate_day_slots(
            window: TimeInterval,
            duration_minutes: int,
            step_minutes: int,
            unavailable: List[TimeInterval]
    ) -> List[TimeInterval]:
        """
        Walk the window on a fixed grid.

        Candidates are tested only against persisted occupancy and blocks,
        never against each other, and must end by the window end.
        """
        slots = []
        current = window.start
        step = timedelta(minutes=step_minutes)

        while current + timedelta(minutes=duration_minutes) <= window.end:
            candidate = TimeInterval.from_duration(current, duration_minutes)
            if not candidate.overlaps_any(unavailable):
                slots.append(candidate)
            current += step

        return slots
