# ============================================================================
# appointly/services/appointment/appointment_query_service.py
# Read-only appointment listing - no FastAPI dependencies
# ============================================================================
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy.orm import Session, Query

from appointly.models.appointment import Appointment, AppointmentStatus


@dataclass(frozen=True)
class AppointmentListFilter:
    """Optional listing filters; unset fields do not constrain the query."""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: Optional[AppointmentStatus] = None
    staff_id: Optional[UUID] = None
    customer_id: Optional[UUID] = None

    def apply(self, query: Query) -> Query:
        if self.start_date:
            query = query.filter(Appointment.start_time >= datetime.combine(self.start_date, time.min))
        if self.end_date:
            # end_date is inclusive
            query = query.filter(
                Appointment.start_time < datetime.combine(self.end_date + timedelta(days=1), time.min)
            )
        if self.status:
            query = query.filter(Appointment.status == AppointmentStatus(self.status).value)
        if self.staff_id:
            query = query.filter(Appointment.staff_id == self.staff_id)
        if self.customer_id:
            query = query.filter(Appointment.customer_id == self.customer_id)
        return query


class AppointmentQueryService:
    """Service layer for appointment listings."""

    @staticmethod
    def list_appointments(
            db: Session,
            business_id: Optional[UUID],
            filters: Optional[AppointmentListFilter] = None,
            skip: int = 0,
            limit: int = 50
    ) -> Dict[str, Any]:
        """Get paginated list of appointments, ordered by start time."""
        filters = filters or AppointmentListFilter()
        query = db.query(Appointment)
        if business_id is not None:
            query = query.filter(Appointment.business_id == business_id)
        query = filters.apply(query).order_by(Appointment.start_time.asc())

        total = query.count()
        appointments = query.offset(skip).limit(limit).all()

        return {
            "business_id": str(business_id) if business_id else None,
            "total_appointments": total,
            "page": {
                "skip": skip,
                "limit": limit,
                "total_pages": (total + limit - 1) // limit if total > 0 else 0
            },
            "filters": {
                "start_date": filters.start_date.isoformat() if filters.start_date else None,
                "end_date": filters.end_date.isoformat() if filters.end_date else None,
                "status": AppointmentStatus(filters.status).value if filters.status else None,
                "staff_id": str(filters.staff_id) if filters.staff_id else None,
            },
            "appointments": [appt.to_dict() for appt in appointments]
        }
