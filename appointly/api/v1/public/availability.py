# ============================================================================
# FILE: appointly/api/v1/public/availability.py
# Public availability lookup used by the booking widget
# ============================================================================
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from datetime import date
from typing import List, Optional
from uuid import UUID

from appointly.config.database import get_db
from appointly.schemas.availability import AvailabilitySlot
from appointly.services.availability.availability_service import AvailabilityService

router = APIRouter(prefix="/availability", tags=["public-availability"])


@router.get("", response_model=List[str])
async def get_availability(
        business_id: UUID = Query(..., description="Business to book with"),
        date: date = Query(..., description="Calendar date (YYYY-MM-DD)"),
        service_id: UUID = Query(..., description="Service whose duration sizes each slot"),
        staff_id: Optional[UUID] = Query(None, description="Consider this staff member's and unassigned bookings"),
        db: Session = Depends(get_db)
):
    """
    Bookable start times ("HH:MM") for the given day.
    An empty list means the business is closed or fully booked.
    """
    return AvailabilityService.compute_availability(
        db=db,
        business_id=business_id,
        target_date=date,
        service_id=service_id,
        staff_id=staff_id
    )


@router.get("/slots", response_model=List[AvailabilitySlot])
async def get_availability_slots(
        business_id: UUID = Query(...),
        date: date = Query(...),
        service_id: UUID = Query(...),
        staff_id: Optional[UUID] = Query(None),
        db: Session = Depends(get_db)
):
    """Same as the plain lookup, with absolute start and end per slot."""
    return AvailabilityService.get_available_slots(
        db=db,
        business_id=business_id,
        target_date=date,
        service_id=service_id,
        staff_id=staff_id
    )
