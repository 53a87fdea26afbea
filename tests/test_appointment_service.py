from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import IntegrityError

from appointly.core.exceptions import (
    InvalidStatusTransitionError,
    NotFoundException,
    PermissionDeniedError,
    TimeSlotUnavailableError,
    ValidationException,
)
from appointly.models import Appointment, AppointmentStatus
from appointly.schemas.appointment import GuestContact
from appointly.services.appointment.appointment_service import AppointmentService
from appointly.services.availability.availability_service import AvailabilityService
from appointly.services.availability.occupancy_resolver import OccupancyResolver
from appointly.services.business.business_service import BusinessService
from tests.helpers import MONDAY, at

GUEST = GuestContact(guest_name="Ada Guest", guest_email="ada@example.com", guest_phone="+15550100")


def book_guest(db, business, service, start, **kwargs) -> Appointment:
    return AppointmentService.create_appointment(db, business.id, service.id, start, contact=GUEST, **kwargs)


class TestCreateAppointment:
    def test_books_service_duration(self, db, business, make_service) -> None:
        service = make_service(45, price=3000)

        appointment = book_guest(db, business, service, at(MONDAY, "10:00"), notes="First visit")

        assert appointment.status == AppointmentStatus.PENDING.value
        assert appointment.start_time == at(MONDAY, "10:00")
        assert appointment.end_time == at(MONDAY, "10:45")
        assert appointment.total_price == 3000
        assert appointment.guest_email == "ada@example.com"
        assert appointment.is_guest
        assert appointment.notes == "First visit"

    def test_auto_confirm(self, db, business, make_service) -> None:
        service = make_service(60)
        appointment = book_guest(db, business, service, at(MONDAY, "10:00"), auto_confirm=True)
        assert appointment.status == AppointmentStatus.CONFIRMED.value

    def test_customer_booking_needs_no_contact(self, db, business, make_service) -> None:
        customer_id = uuid4()
        appointment = AppointmentService.create_appointment(
            db, business.id, make_service(60).id, at(MONDAY, "10:00"), customer_id=customer_id
        )
        assert appointment.customer_id == customer_id
        assert not appointment.is_guest

    def test_requires_contact_or_customer(self, db, business, make_service) -> None:
        with pytest.raises(ValidationException) as exc:
            AppointmentService.create_appointment(db, business.id, make_service(60).id, at(MONDAY, "10:00"))
        assert exc.value.code == "MISSING_FIELDS"

    def test_rejects_timezone_aware_start(self, db, business, make_service) -> None:
        with pytest.raises(ValidationException) as exc:
            book_guest(db, business, make_service(60), datetime(2030, 1, 7, 10, 0, tzinfo=timezone.utc))
        assert exc.value.code == "INVALID_START_TIME"

    def test_second_identical_booking_conflicts(self, db, business, make_service) -> None:
        service = make_service(60)
        first = book_guest(db, business, service, at(MONDAY, "10:00"))

        with pytest.raises(TimeSlotUnavailableError) as exc:
            book_guest(db, business, service, at(MONDAY, "10:00"))

        assert exc.value.status_code == 409
        assert exc.value.code == "TIME_SLOT_UNAVAILABLE"
        assert exc.value.details["conflicting_appointments"] == [str(first.id)]
        assert db.query(Appointment).count() == 1

    def test_partial_overlap_conflicts(self, db, business, make_service) -> None:
        service = make_service(60)
        book_guest(db, business, service, at(MONDAY, "10:00"))

        with pytest.raises(TimeSlotUnavailableError):
            book_guest(db, business, make_service(90, name="Long"), at(MONDAY, "09:00"))

    def test_touching_bookings_are_allowed(self, db, business, make_service) -> None:
        service = make_service(60)
        book_guest(db, business, service, at(MONDAY, "10:00"))

        before = book_guest(db, business, service, at(MONDAY, "09:00"))
        after = book_guest(db, business, service, at(MONDAY, "11:00"))

        assert before.end_time == at(MONDAY, "10:00")
        assert after.start_time == at(MONDAY, "11:00")

    @pytest.mark.parametrize("released", [AppointmentStatus.CANCELLED, AppointmentStatus.REJECTED])
    def test_released_slot_can_be_rebooked(self, db, business, make_service, book, released) -> None:
        service = make_service(60)
        book(service, at(MONDAY, "10:00"), status=released)

        appointment = book_guest(db, business, service, at(MONDAY, "10:00"))

        assert appointment.status == AppointmentStatus.PENDING.value

    def test_staff_bookings_do_not_block_each_other(self, db, business, make_service, make_staff) -> None:
        service = make_service(60)
        robin, sam = make_staff("Robin"), make_staff("Sam")

        book_guest(db, business, service, at(MONDAY, "10:00"), staff_id=robin.id)
        book_guest(db, business, service, at(MONDAY, "10:00"), staff_id=sam.id)

        with pytest.raises(TimeSlotUnavailableError):
            book_guest(db, business, service, at(MONDAY, "10:30"), staff_id=robin.id)

    def test_unassigned_booking_sees_every_staff_member(self, db, business, make_service, make_staff) -> None:
        service = make_service(60)
        book_guest(db, business, service, at(MONDAY, "10:00"), staff_id=make_staff().id)

        with pytest.raises(TimeSlotUnavailableError):
            book_guest(db, business, service, at(MONDAY, "10:00"))

    def test_staffed_booking_over_unassigned_conflicts(self, db, business, make_service, make_staff) -> None:
        service = make_service(60)
        book_guest(db, business, service, at(MONDAY, "10:00"))

        with pytest.raises(TimeSlotUnavailableError):
            book_guest(db, business, service, at(MONDAY, "10:00"), staff_id=make_staff().id)

        assert db.query(Appointment).count() == 1

    def test_unknown_service(self, db, business) -> None:
        with pytest.raises(NotFoundException):
            AppointmentService.create_appointment(db, business.id, uuid4(), at(MONDAY, "10:00"), contact=GUEST)

    def test_unknown_staff(self, db, business, make_service) -> None:
        with pytest.raises(NotFoundException) as exc:
            book_guest(db, business, make_service(60), at(MONDAY, "10:00"), staff_id=uuid4())
        assert exc.value.code == "STAFF_NOT_FOUND"

    def test_booked_slot_disappears_from_availability(self, db, business, make_service) -> None:
        service = make_service(60)
        before = AvailabilityService.compute_availability(db, business.id, MONDAY, service.id)

        book_guest(db, business, service, at(MONDAY, "14:00"))
        after = AvailabilityService.compute_availability(db, business.id, MONDAY, service.id)

        assert "14:00" in before
        assert "14:00" not in after
        assert set(after) < set(before)


class TestBookingLock:
    def test_business_lookup_locks_row(self, db, business) -> None:
        locked = BusinessService.business_query(db, business.id, for_update=True)
        plain = BusinessService.business_query(db, business.id)

        assert "FOR UPDATE" in str(locked.statement.compile(dialect=postgresql.dialect()))
        assert "FOR UPDATE" not in str(plain.statement.compile(dialect=postgresql.dialect()))

    def test_occupancy_check_runs_under_lock(self, db, business, make_service, monkeypatch) -> None:
        service = make_service(60)
        calls = []
        get_business = BusinessService.get_business
        get_active = OccupancyResolver.get_active_appointments

        def locking_lookup(db, business_id, for_update=False):
            calls.append(("business", for_update))
            return get_business(db, business_id, for_update)

        def occupancy_lookup(db, occupancy_filter):
            calls.append(("occupancy", None))
            return get_active(db, occupancy_filter)

        monkeypatch.setattr(BusinessService, "get_business", staticmethod(locking_lookup))
        monkeypatch.setattr(OccupancyResolver, "get_active_appointments", staticmethod(occupancy_lookup))

        book_guest(db, business, service, at(MONDAY, "10:00"))

        assert calls == [("business", True), ("occupancy", None)]

class TestOverlapBackstop:
    def test_exclusion_violation_is_recognised(self) -> None:
        orig = MagicMock()
        orig.diag.constraint_name = "appointments_no_overlap"
        error = IntegrityError("INSERT", {}, orig)
        assert AppointmentService._is_overlap_violation(error)

    def test_other_integrity_errors_are_not(self) -> None:
        orig = MagicMock()
        orig.diag.constraint_name = "appointments_service_id_fkey"
        error = IntegrityError("INSERT", {}, orig)
        assert not AppointmentService._is_overlap_violation(error)


class TestStatusTransitions:
    @pytest.mark.parametrize("current,requested", [
        (AppointmentStatus.PENDING, AppointmentStatus.CONFIRMED),
        (AppointmentStatus.PENDING, AppointmentStatus.REJECTED),
        (AppointmentStatus.PENDING, AppointmentStatus.CANCELLED),
        (AppointmentStatus.CONFIRMED, AppointmentStatus.CANCELLED),
        (AppointmentStatus.CONFIRMED, AppointmentStatus.COMPLETED),
    ])
    def test_allowed(self, current, requested) -> None:
        assert AppointmentService.can_transition(current.value, requested)

    @pytest.mark.parametrize("current,requested", [
        (AppointmentStatus.PENDING, AppointmentStatus.COMPLETED),
        (AppointmentStatus.CONFIRMED, AppointmentStatus.REJECTED),
        (AppointmentStatus.CONFIRMED, AppointmentStatus.PENDING),
        (AppointmentStatus.CANCELLED, AppointmentStatus.CONFIRMED),
        (AppointmentStatus.REJECTED, AppointmentStatus.PENDING),
        (AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED),
    ])
    def test_disallowed(self, current, requested) -> None:
        assert not AppointmentService.can_transition(current.value, requested)

    def test_confirm(self, db, business, make_service, book) -> None:
        appointment = book(make_service(60), at(MONDAY, "10:00"), status=AppointmentStatus.PENDING)

        updated = AppointmentService.update_status(
            db, appointment.id, AppointmentStatus.CONFIRMED, business_id=business.id
        )

        assert updated.status == AppointmentStatus.CONFIRMED.value

    def test_reject_requires_reason(self, db, business, make_service, book) -> None:
        appointment = book(make_service(60), at(MONDAY, "10:00"), status=AppointmentStatus.PENDING)

        with pytest.raises(ValidationException) as exc:
            AppointmentService.update_status(
                db, appointment.id, AppointmentStatus.REJECTED, business_id=business.id, rejection_reason="  "
            )
        assert exc.value.code == "MISSING_REJECTION_REASON"

        db.refresh(appointment)
        assert appointment.status == AppointmentStatus.PENDING.value

    def test_reject_stores_reason(self, db, business, make_service, book) -> None:
        appointment = book(make_service(60), at(MONDAY, "10:00"), status=AppointmentStatus.PENDING)

        updated = AppointmentService.update_status(
            db, appointment.id, AppointmentStatus.REJECTED, business_id=business.id, rejection_reason="Fully booked"
        )

        assert updated.status == AppointmentStatus.REJECTED.value
        assert updated.rejection_reason == "Fully booked"

    def test_cancel_sets_timestamp(self, db, business, make_service, book) -> None:
        appointment = book(make_service(60), at(MONDAY, "10:00"))

        updated = AppointmentService.update_status(db, appointment.id, AppointmentStatus.CANCELLED)

        assert updated.status == AppointmentStatus.CANCELLED.value
        assert updated.cancelled_at is not None

    def test_invalid_transition_leaves_row_untouched(self, db, business, make_service, book) -> None:
        appointment = book(make_service(60), at(MONDAY, "10:00"), status=AppointmentStatus.COMPLETED)

        with pytest.raises(InvalidStatusTransitionError) as exc:
            AppointmentService.update_status(db, appointment.id, AppointmentStatus.CANCELLED)

        assert exc.value.details == {"current_status": "COMPLETED", "requested_status": "CANCELLED"}
        db.refresh(appointment)
        assert appointment.status == AppointmentStatus.COMPLETED.value

    def test_other_business_cannot_see_appointment(self, db, business, make_service, book) -> None:
        appointment = book(make_service(60), at(MONDAY, "10:00"), status=AppointmentStatus.PENDING)

        with pytest.raises(NotFoundException):
            AppointmentService.update_status(db, appointment.id, AppointmentStatus.CONFIRMED, business_id=uuid4())

    def test_customer_may_cancel_own_booking(self, db, business, make_service, book) -> None:
        customer_id = uuid4()
        appointment = book(make_service(60), at(MONDAY, "10:00"), customer_id=customer_id)

        updated = AppointmentService.update_status(
            db, appointment.id, AppointmentStatus.CANCELLED, customer_id=customer_id
        )

        assert updated.status == AppointmentStatus.CANCELLED.value

    def test_customer_may_only_cancel(self, db, business, make_service, book) -> None:
        customer_id = uuid4()
        appointment = book(
            make_service(60), at(MONDAY, "10:00"), status=AppointmentStatus.PENDING, customer_id=customer_id
        )

        with pytest.raises(PermissionDeniedError):
            AppointmentService.update_status(
                db, appointment.id, AppointmentStatus.CONFIRMED, customer_id=customer_id
            )

    def test_customer_cannot_touch_other_booking(self, db, business, make_service, book) -> None:
        appointment = book(make_service(60), at(MONDAY, "10:00"), customer_id=uuid4())

        with pytest.raises(NotFoundException):
            AppointmentService.update_status(
                db, appointment.id, AppointmentStatus.CANCELLED, customer_id=uuid4()
            )


class TestDeleteAppointments:
    def test_deletes_selected(self, db, business, make_service, book) -> None:
        service = make_service(60)
        keep = book(service, at(MONDAY, "09:00"))
        drop = [book(service, at(MONDAY, "11:00")), book(service, at(MONDAY, "13:00"))]

        deleted = AppointmentService.delete_appointments(db, [a.id for a in drop] + [uuid4()])

        assert deleted == 2
        assert [a.id for a in db.query(Appointment).all()] == [keep.id]

    def test_requires_ids(self, db) -> None:
        with pytest.raises(ValidationException) as exc:
            AppointmentService.delete_appointments(db, [])
        assert exc.value.code == "NO_IDS"
