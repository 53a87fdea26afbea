from __future__ import annotations

import pytest

from appointly.scripts import create_business
from appointly.services.business.business_service import BusinessService


class TestCreateDemoBusiness:
    def test_seeds_services_staff_and_week(self, monkeypatch, session_factory, db) -> None:
        monkeypatch.setattr(create_business, "SessionLocal", session_factory)

        create_business.create_demo_business("demo-salon")

        business = BusinessService.get_business_by_slug(db, "demo-salon")
        assert len(BusinessService.list_services(db, business.id)) == len(create_business.DEMO_SERVICES)
        assert [s.name for s in BusinessService.list_staff(db, business.id)] == ["Alex", "Sam"]
        assert len(BusinessService.get_schedule(db, business.id)) == 7

    def test_duplicate_slug_exits(self, monkeypatch, session_factory, business) -> None:
        monkeypatch.setattr(create_business, "SessionLocal", session_factory)

        with pytest.raises(SystemExit):
            create_business.create_demo_business(business.slug)
