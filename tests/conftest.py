from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable, Iterator, Optional
from uuid import UUID

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from appointly.api.dependencies import get_rate_limiter
from appointly.config.database import get_db
from appointly.main import app
from appointly.models import Appointment, AppointmentStatus, Base, Business, Service, Staff
from appointly.schemas.business import BusinessCreate, ServiceCreate, StaffCreate
from appointly.services.business.business_service import BusinessService
from tests.helpers import StubLimiter


@pytest.fixture
def session_factory(tmp_path) -> Iterator[sessionmaker]:
    engine = create_engine(
        f"sqlite:///{tmp_path / 'appointly.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine, autocommit=False, autoflush=False)
    engine.dispose()


@pytest.fixture
def db(session_factory) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def business(db: Session) -> Business:
    return BusinessService.register_business(db, BusinessCreate(name="Studio One", slug="studio-one"))


@pytest.fixture
def make_service(db: Session, business: Business) -> Callable[..., Service]:
    def _make(duration: int = 60, price: int = 2500, name: Optional[str] = None) -> Service:
        return BusinessService.create_service(
            db, business.id, ServiceCreate(name=name or f"Service {duration}", price=price, duration=duration)
        )

    return _make


@pytest.fixture
def make_staff(db: Session, business: Business) -> Callable[..., Staff]:
    def _make(name: str = "Robin") -> Staff:
        return BusinessService.create_staff(db, business.id, StaffCreate(name=name))

    return _make


@pytest.fixture
def book(db: Session, business: Business) -> Callable[..., Appointment]:
    """Persist an appointment directly, bypassing the booking guard."""

    def _book(
        service: Service,
        start: datetime,
        status: AppointmentStatus = AppointmentStatus.CONFIRMED,
        staff_id: Optional[UUID] = None,
        customer_id: Optional[UUID] = None,
    ) -> Appointment:
        appointment = Appointment(
            business_id=business.id,
            service_id=service.id,
            staff_id=staff_id,
            customer_id=customer_id,
            guest_name=None if customer_id else "Walk In",
            start_time=start,
            end_time=start + timedelta(minutes=service.duration),
            status=status.value,
            total_price=service.price,
        )
        db.add(appointment)
        db.commit()
        db.refresh(appointment)
        return appointment

    return _book


@pytest.fixture
def limiter() -> StubLimiter:
    return StubLimiter()


@pytest.fixture
def client(session_factory, limiter) -> Iterator[TestClient]:
    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_rate_limiter] = lambda: limiter
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
