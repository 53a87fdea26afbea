# ============================================================================
# appointly/services/business/business_service.py
# Business onboarding, weekly schedule, emergency blocks, services and staff
# ============================================================================
from typing import List
from uuid import UUID
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from appointly.config.settings import get_settings
from appointly.core.exceptions import ConflictException, NotFoundException
from appointly.models.business import Business, BusinessHours
from appointly.models.emergency_block import EmergencyBlock
from appointly.models.service import Service
from appointly.models.staff import Staff
from appointly.schemas.business import (
    BusinessCreate,
    EmergencyBlockCreate,
    ScheduleEntryInput,
    ServiceCreate,
    ServiceUpdate,
    StaffCreate,
    StaffUpdate,
)

logger = logging.getLogger(__name__)


class BusinessService:
    """Service layer for business-owned configuration."""

    # ------------------------------------------------------------------
    # Lookups shared by the availability and booking paths
    # ------------------------------------------------------------------

    @staticmethod
    def business_query(db: Session, business_id: UUID, for_update: bool = False) -> Query:
        """Active business by id; for_update locks the row until commit"""
        query = db.query(Business).filter(
            Business.id == business_id,
            Business.is_active.is_(True)
        )
        if for_update:
            query = query.with_for_update()
        return query

    @staticmethod
    def get_business(db: Session, business_id: UUID, for_update: bool = False) -> Business:
        business = BusinessService.business_query(db, business_id, for_update).first()
        if not business:
            raise NotFoundException("Business not found", code="BUSINESS_NOT_FOUND")
        return business

    @staticmethod
    def get_business_by_slug(db: Session, slug: str) -> Business:
        business = db.query(Business).filter(
            Business.slug == slug,
            Business.is_active.is_(True)
        ).first()
        if not business:
            raise NotFoundException("Business not found", code="BUSINESS_NOT_FOUND")
        return business

    @staticmethod
    def get_service(db: Session, business_id: UUID, service_id: UUID) -> Service:
        service = db.query(Service).filter(
            Service.id == service_id,
            Service.business_id == business_id,
            Service.is_active.is_(True)
        ).first()
        if not service:
            raise NotFoundException("Service not found", code="SERVICE_NOT_FOUND")
        return service

    @staticmethod
    def get_staff(db: Session, business_id: UUID, staff_id: UUID) -> Staff:
        staff = db.query(Staff).filter(
            Staff.id == staff_id,
            Staff.business_id == business_id,
            Staff.is_active.is_(True)
        ).first()
        if not staff:
            raise NotFoundException("Staff member not found", code="STAFF_NOT_FOUND")
        return staff

    # ------------------------------------------------------------------
    # Onboarding
    # ------------------------------------------------------------------

    @staticmethod
    def default_schedule() -> List[ScheduleEntryInput]:
        """Seven entries built from the DEFAULT_* settings (0=Sunday)."""
        settings = get_settings()
        return [
            ScheduleEntryInput(
                day_of_week=day,
                open_time=settings.DEFAULT_OPEN_TIME,
                close_time=settings.DEFAULT_CLOSE_TIME,
                is_closed=day in settings.DEFAULT_CLOSED_DAYS,
            )
            for day in range(7)
        ]

    @staticmethod
    def register_business(db: Session, data: BusinessCreate) -> Business:
        """Create a business together with its default weekly schedule"""
        business = Business(name=data.name, slug=data.slug, is_active=True)
        business.hours = [
            BusinessHours(**entry.model_dump())
            for entry in BusinessService.default_schedule()
        ]
        db.add(business)
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.info(f"Business slug already taken: {data.slug}")
            raise ConflictException("Business slug already in use", code="SLUG_TAKEN") from e

        db.refresh(business)
        logger.info(f"Registered business {business.id} ({business.slug})")
        return business

    # ------------------------------------------------------------------
    # Weekly schedule
    # ------------------------------------------------------------------

    @staticmethod
    def get_schedule(db: Session, business_id: UUID) -> List[BusinessHours]:
        return db.query(BusinessHours).filter(
            BusinessHours.business_id == business_id
        ).order_by(BusinessHours.day_of_week.asc()).all()

    @staticmethod
    def update_schedule(
            db: Session,
            business_id: UUID,
            entries: List[ScheduleEntryInput]
    ) -> List[BusinessHours]:
        """Upsert the given days in a single transaction"""
        BusinessService.get_business(db, business_id)
        existing = {
            row.day_of_week: row for row in BusinessService.get_schedule(db, business_id)
        }

        for entry in entries:
            row = existing.get(entry.day_of_week)
            if row is None:
                row = BusinessHours(business_id=business_id, day_of_week=entry.day_of_week)
                db.add(row)
            row.open_time = entry.open_time
            row.close_time = entry.close_time
            row.is_closed = entry.is_closed

        db.commit()
        logger.info(f"Updated {len(entries)} schedule entries for business {business_id}")
        return BusinessService.get_schedule(db, business_id)

    # ------------------------------------------------------------------
    # Emergency blocks
    # ------------------------------------------------------------------

    @staticmethod
    def list_emergency_blocks(db: Session, business_id: UUID) -> List[EmergencyBlock]:
        return db.query(EmergencyBlock).filter(
            EmergencyBlock.business_id == business_id
        ).order_by(EmergencyBlock.start_date.desc()).all()

    @staticmethod
    def create_emergency_block(db: Session, business_id: UUID, data: EmergencyBlockCreate) -> EmergencyBlock:
        BusinessService.get_business(db, business_id)
        block = EmergencyBlock(
            business_id=business_id,
            start_date=data.start_date,
            end_date=data.end_date,
            reason=data.reason,
        )
        db.add(block)
        db.commit()
        db.refresh(block)
        logger.info(f"Business {business_id} blocked {block.start_date} - {block.end_date}")
        return block

    @staticmethod
    def delete_emergency_block(db: Session, business_id: UUID, block_id: UUID) -> None:
        block = db.query(EmergencyBlock).filter(
            EmergencyBlock.id == block_id,
            EmergencyBlock.business_id == business_id
        ).first()
        if not block:
            raise NotFoundException("Emergency block not found", code="BLOCK_NOT_FOUND")
        db.delete(block)
        db.commit()

    # ------------------------------------------------------------------
    # Services and staff
    # ------------------------------------------------------------------

    @staticmethod
    def list_services(db: Session, business_id: UUID, include_inactive: bool = False) -> List[Service]:
        query = db.query(Service).filter(Service.business_id == business_id)
        if not include_inactive:
            query = query.filter(Service.is_active.is_(True))
        return query.order_by(Service.name.asc()).all()

    @staticmethod
    def create_service(db: Session, business_id: UUID, data: ServiceCreate) -> Service:
        BusinessService.get_business(db, business_id)
        service = Service(business_id=business_id, is_active=True, **data.model_dump())
        db.add(service)
        db.commit()
        db.refresh(service)
        logger.info(f"Created service {service.id}: {service.name}")
        return service

    @staticmethod
    def update_service(db: Session, business_id: UUID, service_id: UUID, data: ServiceUpdate) -> Service:
        """Inactive services can be edited too, including reactivation"""
        service = db.query(Service).filter(
            Service.id == service_id,
            Service.business_id == business_id
        ).first()
        if not service:
            raise NotFoundException("Service not found", code="SERVICE_NOT_FOUND")

        for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(service, field, value)

        db.commit()
        db.refresh(service)
        logger.info(f"Updated service {service.id}")
        return service

    @staticmethod
    def deactivate_service(db: Session, business_id: UUID, service_id: UUID) -> Service:
        """
        Services stay referenced by past appointments, so they are
        hidden rather than deleted.
        """
        service = BusinessService.get_service(db, business_id, service_id)
        service.is_active = False
        db.commit()
        return service

    @staticmethod
    def list_staff(db: Session, business_id: UUID) -> List[Staff]:
        return db.query(Staff).filter(
            Staff.business_id == business_id,
            Staff.is_active.is_(True)
        ).order_by(Staff.name.asc()).all()

    @staticmethod
    def create_staff(db: Session, business_id: UUID, data: StaffCreate) -> Staff:
        BusinessService.get_business(db, business_id)
        staff = Staff(business_id=business_id, name=data.name, role=data.role, is_active=True)
        db.add(staff)
        db.commit()
        db.refresh(staff)
        return staff

    @staticmethod
    def update_staff(db: Session, business_id: UUID, staff_id: UUID, data: StaffUpdate) -> Staff:
        staff = db.query(Staff).filter(
            Staff.id == staff_id,
            Staff.business_id == business_id
        ).first()
        if not staff:
            raise NotFoundException("Staff member not found", code="STAFF_NOT_FOUND")

        for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(staff, field, value)

        db.commit()
        db.refresh(staff)
        logger.info(f"Updated staff member {staff.id}")
        return staff

    @staticmethod
    def deactivate_staff(db: Session, business_id: UUID, staff_id: UUID) -> Staff:
        """Hidden from booking; existing appointments keep their assignment"""
        staff = BusinessService.get_staff(db, business_id, staff_id)
        staff.is_active = False
        db.commit()
        return staff
