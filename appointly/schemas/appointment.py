"""
Pydantic schemas for booking requests and status changes
"""
from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List
from datetime import datetime
from uuid import UUID

from appointly.models.appointment import AppointmentStatus
from appointly.schemas.business import _naive


class GuestContact(BaseModel):
    """Contact details identifying a guest (no account) booking"""
    guest_name: str = Field(..., min_length=1, max_length=200)
    guest_email: EmailStr
    guest_phone: str = Field(..., min_length=5, max_length=30)


class _BookingFields(BaseModel):
    service_id: UUID
    staff_id: Optional[UUID] = None
    start_time: datetime
    notes: Optional[str] = Field(None, max_length=2000)
    customer_language: str = Field("en", max_length=5)

    @field_validator('start_time')
    @classmethod
    def validate_naive(cls, v):
        return _naive(v)


class GuestBookingRequest(_BookingFields, GuestContact):
    """Public booking made without an account"""
    business_slug: str = Field(..., min_length=1)

    def contact(self) -> GuestContact:
        return GuestContact(
            guest_name=self.guest_name,
            guest_email=self.guest_email,
            guest_phone=self.guest_phone,
        )


class CustomerBookingRequest(_BookingFields):
    """Booking made by an authenticated customer"""
    business_id: UUID


class StatusUpdateRequest(BaseModel):
    status: AppointmentStatus
    rejection_reason: Optional[str] = Field(None, max_length=1000)


class RejectAppointmentRequest(BaseModel):
    rejection_reason: str = Field(..., min_length=1, max_length=1000)


class BulkDeleteRequest(BaseModel):
    ids: List[UUID]
