# ============================================================================
# FILE: appointly/api/v1/customer/appointments.py
# Bookings made by signed-in customers
# ============================================================================
from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session
from uuid import UUID

from appointly.api.dependencies import Principal, require_customer
from appointly.config.database import get_db
from appointly.models.appointment import AppointmentStatus
from appointly.schemas.appointment import CustomerBookingRequest
from appointly.services.appointment.appointment_query_service import (
    AppointmentListFilter,
    AppointmentQueryService,
)
from appointly.services.appointment.appointment_service import AppointmentService

router = APIRouter(prefix="/appointments", tags=["customer-appointments"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_customer_appointment(
        booking: CustomerBookingRequest,
        principal: Principal = Depends(require_customer),
        db: Session = Depends(get_db)
):
    appointment = AppointmentService.create_appointment(
        db=db,
        business_id=booking.business_id,
        service_id=booking.service_id,
        staff_id=booking.staff_id,
        start_time=booking.start_time,
        customer_id=principal.user_id,
        notes=booking.notes,
        customer_language=booking.customer_language
    )
    return {"success": True, "appointment": appointment.to_dict()}


@router.get("")
async def list_my_appointments(
        skip: int = Query(0, ge=0),
        limit: int = Query(50, ge=1, le=100),
        principal: Principal = Depends(require_customer),
        db: Session = Depends(get_db)
):
    return AppointmentQueryService.list_appointments(
        db=db,
        business_id=None,
        filters=AppointmentListFilter(customer_id=principal.user_id),
        skip=skip,
        limit=limit
    )


@router.put("/{appointment_id}/cancel")
async def cancel_my_appointment(
        appointment_id: UUID = Path(...),
        principal: Principal = Depends(require_customer),
        db: Session = Depends(get_db)
):
    appointment = AppointmentService.update_status(
        db=db,
        appointment_id=appointment_id,
        new_status=AppointmentStatus.CANCELLED,
        customer_id=principal.user_id
    )
    return {"success": True, "appointment": appointment.to_dict()}
