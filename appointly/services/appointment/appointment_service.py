# ============================================================================
# appointly/services/appointment/appointment_service.py
# ============================================================================
"""Service for creating appointments and moving them through their lifecycle"""
from datetime import datetime, timezone
from typing import Dict, List, Optional, Set
from uuid import UUID
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from appointly.core.exceptions import (
    InvalidStatusTransitionError,
    NotFoundException,
    PermissionDeniedError,
    TimeSlotUnavailableError,
    ValidationException,
)
from appointly.models.appointment import Appointment, AppointmentStatus
from appointly.schemas.appointment import GuestContact
from appointly.services.availability.intervals import TimeInterval
from appointly.services.availability.occupancy_resolver import OccupancyFilter, OccupancyResolver
from appointly.services.business.business_service import BusinessService

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: Dict[AppointmentStatus, Set[AppointmentStatus]] = {
    AppointmentStatus.PENDING: {
        AppointmentStatus.CONFIRMED,
        AppointmentStatus.REJECTED,
        AppointmentStatus.CANCELLED,
    },
    AppointmentStatus.CONFIRMED: {
        AppointmentStatus.CANCELLED,
        AppointmentStatus.COMPLETED,
    },
}

# Substrings identifying the database-level overlap backstop
EXCLUSION_CONSTRAINTS = ("appointments_no_overlap",)


class AppointmentService:
    """Handles appointment operations"""

    @staticmethod
    def create_appointment(
            db: Session,
            business_id: UUID,
            service_id: UUID,
            start_time: datetime,
            contact: Optional[GuestContact] = None,
            staff_id: Optional[UUID] = None,
            customer_id: Optional[UUID] = None,
            notes: Optional[str] = None,
            customer_language: str = "en",
            auto_confirm: bool = False
    ) -> Appointment:
        """
        Book [start_time, start_time + service.duration).

        The occupancy re-check and the insert share one transaction, and the
        business row is locked first so concurrent bookings for the same
        business serialize. Raises TimeSlotUnavailableError on overlap.
        """
        if contact is None and customer_id is None:
            raise ValidationException(
                "Guest contact details or a customer account are required",
                code="MISSING_FIELDS"
            )
        if start_time.tzinfo is not None:
            raise ValidationException(
                "start_time must be local wall-clock time without a timezone offset",
                code="INVALID_START_TIME"
            )

        try:
            business = BusinessService.get_business(db, business_id, for_update=True)
            service = BusinessService.get_service(db, business.id, service_id)
            if staff_id is not None:
                BusinessService.get_staff(db, business.id, staff_id)

            requested = TimeInterval.from_duration(start_time, service.duration)
            conflicts = OccupancyResolver.get_active_appointments(db, OccupancyFilter(
                business_id=business.id,
                window_start=requested.start,
                window_end=requested.end,
                staff_id=staff_id
            ))
            if conflicts:
                raise TimeSlotUnavailableError(details={
                    "start_time": requested.start.isoformat(),
                    "end_time": requested.end.isoformat(),
                    "conflicting_appointments": [str(a.id) for a in conflicts],
                })

            appointment = Appointment(
                business_id=business.id,
                service_id=service.id,
                staff_id=staff_id,
                customer_id=customer_id,
                guest_name=contact.guest_name if contact else None,
                guest_email=contact.guest_email if contact else None,
                guest_phone=contact.guest_phone if contact else None,
                start_time=requested.start,
                end_time=requested.end,
                total_price=service.price,
                status=(AppointmentStatus.CONFIRMED if auto_confirm else AppointmentStatus.PENDING).value,
                customer_language=customer_language or "en",
                notes=notes,
            )
            db.add(appointment)
            db.commit()
        except IntegrityError as e:
            db.rollback()
            if AppointmentService._is_overlap_violation(e):
                logger.info(f"Overlap backstop rejected booking for business {business_id} at {start_time}")
                raise TimeSlotUnavailableError() from e
            raise
        except Exception:
            db.rollback()
            raise

        db.refresh(appointment)
        logger.info(
            f"Created appointment {appointment.id} for business {business_id} "
            f"{appointment.start_time} - {appointment.end_time} ({appointment.status})"
        )
        return appointment

    @staticmethod
    def _is_overlap_violation(error: IntegrityError) -> bool:
        orig = getattr(error, "orig", None)
        diag = getattr(orig, "diag", None)
        constraint_name = getattr(diag, "constraint_name", None) or str(orig)
        return any(name in constraint_name for name in EXCLUSION_CONSTRAINTS)

    @staticmethod
    def get_appointment(
            db: Session,
            appointment_id: UUID,
            business_id: Optional[UUID] = None
    ) -> Appointment:
        query = db.query(Appointment).filter(Appointment.id == appointment_id)
        if business_id is not None:
            query = query.filter(Appointment.business_id == business_id)
        appointment = query.first()
        if not appointment:
            raise NotFoundException(
                "Appointment not found or access denied",
                code="APPOINTMENT_NOT_FOUND"
            )
        return appointment

    @staticmethod
    def can_transition(current: str, requested: AppointmentStatus) -> bool:
        return requested in ALLOWED_TRANSITIONS.get(AppointmentStatus(current), set())

    @staticmethod
    def update_status(
            db: Session,
            appointment_id: UUID,
            new_status: AppointmentStatus,
            business_id: Optional[UUID] = None,
            customer_id: Optional[UUID] = None,
            rejection_reason: Optional[str] = None
    ) -> Appointment:
        """
        Apply a lifecycle transition.

        business_id scopes the lookup to an owner's tenant. customer_id
        scopes it to the customer's own booking, and customers may only
        cancel. Nothing is written when the transition is rejected.
        """
        new_status = AppointmentStatus(new_status)
        appointment = AppointmentService.get_appointment(db, appointment_id, business_id)

        if customer_id is not None:
            if appointment.customer_id != customer_id:
                raise NotFoundException(
                    "Appointment not found or access denied",
                    code="APPOINTMENT_NOT_FOUND"
                )
            if new_status != AppointmentStatus.CANCELLED:
                raise PermissionDeniedError("Customers can only cancel", code="FORBIDDEN")

        if not AppointmentService.can_transition(appointment.status, new_status):
            raise InvalidStatusTransitionError(appointment.status, new_status.value)

        reason = (rejection_reason or "").strip()
        if new_status == AppointmentStatus.REJECTED and not reason:
            raise ValidationException("Rejection reason is required", code="MISSING_REJECTION_REASON")

        previous = appointment.status
        appointment.status = new_status.value
        if new_status == AppointmentStatus.REJECTED:
            appointment.rejection_reason = reason
        if new_status == AppointmentStatus.CANCELLED:
            appointment.cancelled_at = datetime.now(timezone.utc)

        db.commit()
        db.refresh(appointment)
        logger.info(f"Appointment {appointment.id}: {previous} -> {appointment.status}")
        return appointment

    @staticmethod
    def delete_appointments(db: Session, ids: List[UUID]) -> int:
        """Admin bulk delete. Returns the number of rows removed."""
        if not ids:
            raise ValidationException("No IDs provided", code="NO_IDS")

        deleted = db.query(Appointment).filter(
            Appointment.id.in_(ids)
        ).delete(synchronize_session=False)
        db.commit()
        logger.warning(f"Admin deleted {deleted} appointments")
        return deleted
