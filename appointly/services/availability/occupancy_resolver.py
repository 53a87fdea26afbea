# appointly/services/availability/occupancy_resolver.py
"""Time already consumed by appointments that still hold their slot"""
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Session, Query

from appointly.models.appointment import Appointment, OCCUPYING_STATUSES
from appointly.services.availability.intervals import TimeInterval


@dataclass(frozen=True)
class OccupancyFilter:
    """
    Which appointments count as occupied time.

    Without a staff_id every appointment of the business counts. With one,
    that staff member's appointments count together with unassigned ones,
    since an unassigned booking holds the whole business.
    """
    business_id: UUID
    window_start: datetime
    window_end: datetime
    staff_id: Optional[UUID] = None

    def compile(self, db: Session) -> Query:
        query = db.query(Appointment).filter(
            Appointment.business_id == self.business_id,
            Appointment.status.in_(OCCUPYING_STATUSES),
            Appointment.start_time < self.window_end,
            Appointment.end_time > self.window_start
        )
        if self.staff_id is not None:
            query = query.filter(or_(
                Appointment.staff_id == self.staff_id,
                Appointment.staff_id.is_(None)
            ))
        return query.order_by(Appointment.start_time.asc())


class OccupancyResolver:

    @staticmethod
    def get_active_appointments(db: Session, occupancy_filter: OccupancyFilter) -> List[Appointment]:
        return occupancy_filter.compile(db).all()

    @staticmethod
    def resolve(db: Session, occupancy_filter: OccupancyFilter) -> List[TimeInterval]:
        return [
            TimeInterval(appointment.start_time, appointment.end_time)
            for appointment in OccupancyResolver.get_active_appointments(db, occupancy_filter)
        ]
