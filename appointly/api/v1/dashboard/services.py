# ============================================================================
# FILE: appointly/api/v1/dashboard/services.py
# Services and staff managed by the business owner
# ============================================================================
from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session
from uuid import UUID

from appointly.api.dependencies import Principal, require_business_owner
from appointly.config.database import get_db
from appointly.schemas.business import ServiceCreate, ServiceUpdate, StaffCreate, StaffUpdate
from appointly.services.business.business_service import BusinessService

router = APIRouter(tags=["dashboard-services"])


@router.get("/services")
async def list_services(
        include_inactive: bool = Query(False),
        owner: Principal = Depends(require_business_owner),
        db: Session = Depends(get_db)
):
    services = BusinessService.list_services(db, owner.business_id, include_inactive=include_inactive)
    return {"total": len(services), "services": [s.to_dict() for s in services]}


@router.post("/services", status_code=status.HTTP_201_CREATED)
async def create_service(
        body: ServiceCreate,
        owner: Principal = Depends(require_business_owner),
        db: Session = Depends(get_db)
):
    return BusinessService.create_service(db, owner.business_id, body).to_dict()


@router.put("/services/{service_id}")
async def update_service(
        body: ServiceUpdate,
        service_id: UUID = Path(...),
        owner: Principal = Depends(require_business_owner),
        db: Session = Depends(get_db)
):
    """Duration changes apply to new bookings only"""
    return BusinessService.update_service(db, owner.business_id, service_id, body).to_dict()


@router.delete("/services/{service_id}")
async def deactivate_service(
        service_id: UUID = Path(...),
        owner: Principal = Depends(require_business_owner),
        db: Session = Depends(get_db)
):
    BusinessService.deactivate_service(db, owner.business_id, service_id)
    return {"message": "Deleted"}


@router.get("/staff")
async def list_staff(
        owner: Principal = Depends(require_business_owner),
        db: Session = Depends(get_db)
):
    return [s.to_dict() for s in BusinessService.list_staff(db, owner.business_id)]


@router.post("/staff", status_code=status.HTTP_201_CREATED)
async def create_staff(
        body: StaffCreate,
        owner: Principal = Depends(require_business_owner),
        db: Session = Depends(get_db)
):
    return BusinessService.create_staff(db, owner.business_id, body).to_dict()


@router.put("/staff/{staff_id}")
async def update_staff(
        body: StaffUpdate,
        staff_id: UUID = Path(...),
        owner: Principal = Depends(require_business_owner),
        db: Session = Depends(get_db)
):
    return BusinessService.update_staff(db, owner.business_id, staff_id, body).to_dict()


@router.delete("/staff/{staff_id}")
async def deactivate_staff(
        staff_id: UUID = Path(...),
        owner: Principal = Depends(require_business_owner),
        db: Session = Depends(get_db)
):
    BusinessService.deactivate_staff(db, owner.business_id, staff_id)
    return {"message": "Deactivated"}
