# ============================================================================
# FILE: appointly/api/v1/dashboard/schedule.py
# Weekly opening hours and emergency blocks
# ============================================================================
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session
from uuid import UUID

from appointly.api.dependencies import Principal, require_business_owner
from appointly.config.database import get_db
from appointly.schemas.business import EmergencyBlockCreate, ScheduleUpdateRequest
from appointly.services.business.business_service import BusinessService

router = APIRouter(tags=["dashboard-schedule"])


@router.get("/schedule")
async def get_schedule(
        owner: Principal = Depends(require_business_owner),
        db: Session = Depends(get_db)
):
    return [row.to_dict() for row in BusinessService.get_schedule(db, owner.business_id)]


@router.put("/schedule")
async def update_schedule(
        body: ScheduleUpdateRequest,
        owner: Principal = Depends(require_business_owner),
        db: Session = Depends(get_db)
):
    rows = BusinessService.update_schedule(db, owner.business_id, body.entries)
    return {"message": "Schedule updated", "schedule": [row.to_dict() for row in rows]}


@router.get("/emergency-blocks")
async def list_emergency_blocks(
        owner: Principal = Depends(require_business_owner),
        db: Session = Depends(get_db)
):
    return [b.to_dict() for b in BusinessService.list_emergency_blocks(db, owner.business_id)]


@router.post("/emergency-blocks", status_code=status.HTTP_201_CREATED)
async def create_emergency_block(
        body: EmergencyBlockCreate,
        owner: Principal = Depends(require_business_owner),
        db: Session = Depends(get_db)
):
    return BusinessService.create_emergency_block(db, owner.business_id, body).to_dict()


@router.delete("/emergency-blocks/{block_id}")
async def delete_emergency_block(
        block_id: UUID = Path(...),
        owner: Principal = Depends(require_business_owner),
        db: Session = Depends(get_db)
):
    BusinessService.delete_emergency_block(db, owner.business_id, block_id)
    return {"message": "Deleted"}
