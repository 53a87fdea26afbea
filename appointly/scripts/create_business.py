#!/usr/bin/env python3
"""
Script to create a demo business with services, staff and the default schedule
Usage: python -m appointly.scripts.create_business
"""
import logging
import sys

from sqlalchemy.orm import Session

from appointly.config.database import SessionLocal, create_tables
from appointly.core.exceptions import DomainException
from appointly.schemas.business import BusinessCreate, ServiceCreate, StaffCreate
from appointly.services.business.business_service import BusinessService
from appointly.utils.my_logging import setup_logging

logger = logging.getLogger(__name__)

DEMO_SERVICES = [
    ServiceCreate(name="Haircut", description="Wash, cut and style", price=3500, duration=30),
    ServiceCreate(name="Colour", description="Full colour treatment", price=8000, duration=90),
    ServiceCreate(name="Beard Trim", price=1500, duration=15),
]

DEMO_STAFF = [
    StaffCreate(name="Sam", role="Senior stylist"),
    StaffCreate(name="Alex", role="Stylist"),
]


def create_demo_business(slug: str = "demo-salon") -> None:
    """Create a demo business with its default weekly schedule"""
    db: Session = SessionLocal()

    try:
        business = BusinessService.register_business(
            db, BusinessCreate(name="Demo Salon", slug=slug)
        )
        for service in DEMO_SERVICES:
            BusinessService.create_service(db, business.id, service)
        for staff in DEMO_STAFF:
            BusinessService.create_staff(db, business.id, staff)

        logger.info(f"Created business {business.id} ({business.slug})")
        for row in business.hours:
            state = "closed" if row.is_closed else f"{row.open_time}-{row.close_time}"
            logger.info(f"  day {row.day_of_week}: {state}")

    except DomainException as e:
        logger.error(f"Could not create demo business: {e.message}")
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    setup_logging()
    create_tables()
    create_demo_business(*sys.argv[1:2])
