# ============================================================================
# FILE: appointly/api/v1/dashboard/appointments.py
# Business owner endpoints - thin HTTP layer
# ============================================================================
from fastapi import APIRouter, Depends, Query, Path
from sqlalchemy.orm import Session
from datetime import date
from typing import Optional
from uuid import UUID

from appointly.api.dependencies import Principal, require_business_owner
from appointly.config.database import get_db
from appointly.models.appointment import AppointmentStatus
from appointly.schemas.appointment import RejectAppointmentRequest, StatusUpdateRequest
from appointly.services.appointment.appointment_query_service import (
    AppointmentListFilter,
    AppointmentQueryService,
)
from appointly.services.appointment.appointment_service import AppointmentService

router = APIRouter(prefix="/appointments", tags=["dashboard-appointments"])


@router.get("")
async def list_appointments(
        start_date: Optional[date] = Query(None, description="Appointments starting on or after this date"),
        end_date: Optional[date] = Query(None, description="Appointments starting on or before this date"),
        status: Optional[AppointmentStatus] = Query(None, description="Filter by status"),
        staff_id: Optional[UUID] = Query(None, description="Filter by staff member"),
        skip: int = Query(0, ge=0, description="Number of records to skip"),
        limit: int = Query(50, ge=1, le=100, description="Number of records to return"),
        owner: Principal = Depends(require_business_owner),
        db: Session = Depends(get_db)
):
    """Appointments of the owner's business, ordered by start time."""
    return AppointmentQueryService.list_appointments(
        db=db,
        business_id=owner.business_id,
        filters=AppointmentListFilter(
            start_date=start_date,
            end_date=end_date,
            status=status,
            staff_id=staff_id
        ),
        skip=skip,
        limit=limit
    )


@router.get("/{appointment_id}")
async def get_appointment(
        appointment_id: UUID = Path(..., description="The appointment ID"),
        owner: Principal = Depends(require_business_owner),
        db: Session = Depends(get_db)
):
    appointment = AppointmentService.get_appointment(db, appointment_id, owner.business_id)
    return appointment.to_dict()


@router.put("/{appointment_id}/confirm")
async def confirm_appointment(
        appointment_id: UUID = Path(...),
        owner: Principal = Depends(require_business_owner),
        db: Session = Depends(get_db)
):
    appointment = AppointmentService.update_status(
        db=db,
        appointment_id=appointment_id,
        new_status=AppointmentStatus.CONFIRMED,
        business_id=owner.business_id
    )
    return {"success": True, "appointment": appointment.to_dict()}


@router.put("/{appointment_id}/reject")
async def reject_appointment(
        body: RejectAppointmentRequest,
        appointment_id: UUID = Path(...),
        owner: Principal = Depends(require_business_owner),
        db: Session = Depends(get_db)
):
    appointment = AppointmentService.update_status(
        db=db,
        appointment_id=appointment_id,
        new_status=AppointmentStatus.REJECTED,
        business_id=owner.business_id,
        rejection_reason=body.rejection_reason
    )
    return {"success": True, "appointment": appointment.to_dict()}


@router.put("/{appointment_id}/status")
async def update_appointment_status(
        body: StatusUpdateRequest,
        appointment_id: UUID = Path(...),
        owner: Principal = Depends(require_business_owner),
        db: Session = Depends(get_db)
):
    appointment = AppointmentService.update_status(
        db=db,
        appointment_id=appointment_id,
        new_status=body.status,
        business_id=owner.business_id,
        rejection_reason=body.rejection_reason
    )
    return {"success": True, "appointment": appointment.to_dict()}
