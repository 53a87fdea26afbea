# ============================================================================
# FILE: appointly/api/v1/public/businesses.py
# Business onboarding and public profile
# ============================================================================
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from appointly.config.database import get_db
from appointly.schemas.business import BusinessCreate
from appointly.services.business.business_service import BusinessService

router = APIRouter(prefix="/businesses", tags=["public-businesses"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def register_business(
        data: BusinessCreate,
        db: Session = Depends(get_db)
):
    """Create a business with the default weekly schedule."""
    business = BusinessService.register_business(db, data)
    return {
        "business": business.to_dict(),
        "schedule": [row.to_dict() for row in business.hours]
    }


@router.get("/{slug}")
async def get_business_profile(
        slug: str = Path(..., description="Business slug"),
        db: Session = Depends(get_db)
):
    """Everything the booking page needs: services, staff and opening hours."""
    business = BusinessService.get_business_by_slug(db, slug)
    return {
        "business": business.to_dict(),
        "services": [s.to_dict() for s in BusinessService.list_services(db, business.id)],
        "staff": [s.to_dict() for s in BusinessService.list_staff(db, business.id)],
        "schedule": [row.to_dict() for row in BusinessService.get_schedule(db, business.id)]
    }
