# ============================================================================
# FILE: appointly/api/v1/admin/appointments.py
# Platform admin endpoints
# ============================================================================
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional
from uuid import UUID

from appointly.api.dependencies import Principal, require_admin
from appointly.config.database import get_db
from appointly.models.appointment import AppointmentStatus
from appointly.schemas.appointment import BulkDeleteRequest
from appointly.services.appointment.appointment_query_service import (
    AppointmentListFilter,
    AppointmentQueryService,
)
from appointly.services.appointment.appointment_service import AppointmentService

router = APIRouter(prefix="/admin/appointments", tags=["admin-appointments"])


@router.get("")
async def list_all_appointments(
        business_id: Optional[UUID] = Query(None),
        status: Optional[AppointmentStatus] = Query(None),
        skip: int = Query(0, ge=0),
        limit: int = Query(50, ge=1, le=100),
        admin: Principal = Depends(require_admin),
        db: Session = Depends(get_db)
):
    return AppointmentQueryService.list_appointments(
        db=db,
        business_id=business_id,
        filters=AppointmentListFilter(status=status),
        skip=skip,
        limit=limit
    )


@router.delete("")
async def delete_appointments(
        body: BulkDeleteRequest,
        admin: Principal = Depends(require_admin),
        db: Session = Depends(get_db)
):
    deleted = AppointmentService.delete_appointments(db, body.ids)
    return {"message": "Appointments deleted successfully", "deleted": deleted}
