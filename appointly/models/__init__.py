# appointly/models/__init__.py
from .base import Base
from .business import Business, BusinessHours
from .service import Service
from .staff import Staff
from .emergency_block import EmergencyBlock
from .appointment import Appointment, AppointmentStatus, OCCUPYING_STATUSES

__all__ = [
    "Base",
    "Business",
    "BusinessHours",
    "Service",
    "Staff",
    "EmergencyBlock",
    "Appointment",
    "AppointmentStatus",
    "OCCUPYING_STATUSES",
]
