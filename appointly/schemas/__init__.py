# appointly/schemas/__init__.py
from .business import (
    BusinessCreate,
    ScheduleEntryInput,
    ScheduleUpdateRequest,
    EmergencyBlockCreate,
    ServiceCreate,
    ServiceUpdate,
    StaffCreate,
    StaffUpdate,
)
from .appointment import (
    GuestContact,
    GuestBookingRequest,
    CustomerBookingRequest,
    StatusUpdateRequest,
    RejectAppointmentRequest,
    BulkDeleteRequest,
)
from .availability import AvailabilitySlot

__all__ = [
    "BusinessCreate",
    "ScheduleEntryInput",
    "ScheduleUpdateRequest",
    "EmergencyBlockCreate",
    "ServiceCreate",
    "StaffCreate",
    "ServiceUpdate",
    "StaffUpdate",
    "GuestContact",
    "GuestBookingRequest",
    "CustomerBookingRequest",
    "StatusUpdateRequest",
    "RejectAppointmentRequest",
    "BulkDeleteRequest",
    "AvailabilitySlot",
]
