# ============================================================================
# FILE: appointly/api/v1/public/appointments.py
# Guest bookings (no account)
# ============================================================================
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging

from appointly.api.dependencies import booking_rate_limit
from appointly.config.database import get_db
from appointly.schemas.appointment import GuestBookingRequest
from appointly.services.appointment.appointment_service import AppointmentService
from appointly.services.business.business_service import BusinessService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/appointments", tags=["public-appointments"])


@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[Depends(booking_rate_limit)])
async def create_guest_appointment(
        booking: GuestBookingRequest,
        db: Session = Depends(get_db)
):
    """
    Book a slot as a guest. Responds 409 with code TIME_SLOT_UNAVAILABLE
    when the slot was taken in the meantime; re-query availability and retry.
    """
    business = BusinessService.get_business_by_slug(db, booking.business_slug)

    appointment = AppointmentService.create_appointment(
        db=db,
        business_id=business.id,
        service_id=booking.service_id,
        staff_id=booking.staff_id,
        start_time=booking.start_time,
        contact=booking.contact(),
        notes=booking.notes,
        customer_language=booking.customer_language
    )

    return {
        "success": True,
        "appointment": appointment.to_dict(),
        "message": "Appointment booked successfully"
    }
