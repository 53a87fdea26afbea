"""
Pydantic schemas for business setup: schedule, emergency blocks, services, staff
"""
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, List
from datetime import datetime
import re

HH_MM = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def _naive(value: datetime) -> datetime:
    if value.tzinfo is not None:
        raise ValueError("Timestamps must be local wall-clock time without a timezone offset")
    return value


class BusinessCreate(BaseModel):
    """Onboarding request for a new business"""
    name: str = Field(..., min_length=1, max_length=200)
    slug: str = Field(..., min_length=1, max_length=200, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


class ScheduleEntryInput(BaseModel):
    """Opening hours for one day of the week (0=Sunday, 6=Saturday)"""
    day_of_week: int = Field(..., ge=0, le=6)
    open_time: str = "09:00"
    close_time: str = "17:00"
    is_closed: bool = False

    @field_validator('open_time', 'close_time')
    @classmethod
    def validate_wall_clock(cls, v):
        if not HH_MM.match(v):
            raise ValueError('Time must use the HH:MM 24-hour format')
        return v

    @model_validator(mode='after')
    def validate_window(self):
        # Zero-padded HH:MM strings compare chronologically
        if not self.is_closed and self.open_time >= self.close_time:
            raise ValueError('open_time must be before close_time on an open day')
        return self


class ScheduleUpdateRequest(BaseModel):
    entries: List[ScheduleEntryInput] = Field(..., min_length=1, max_length=7)

    @field_validator('entries')
    @classmethod
    def validate_unique_days(cls, v):
        days = [entry.day_of_week for entry in v]
        if len(days) != len(set(days)):
            raise ValueError('Each day_of_week may appear only once')
        return v


class EmergencyBlockCreate(BaseModel):
    start_date: datetime
    end_date: datetime
    reason: Optional[str] = Field(None, max_length=255)

    @field_validator('start_date', 'end_date')
    @classmethod
    def validate_naive(cls, v):
        return _naive(v)

    @model_validator(mode='after')
    def validate_range(self):
        if self.start_date >= self.end_date:
            raise ValueError('start_date must be before end_date')
        return self


class ServiceCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    price: int = Field(0, ge=0, description="Price in cents")
    duration: int = Field(..., gt=0, le=24 * 60, description="Duration in minutes")


class StaffCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    role: Optional[str] = Field(None, max_length=100)


class ServiceUpdate(BaseModel):
    """Partial update; omitted fields keep their current value"""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    price: Optional[int] = Field(None, ge=0)
    duration: Optional[int] = Field(None, gt=0, le=24 * 60)
    is_active: Optional[bool] = None


class StaffUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    role: Optional[str] = Field(None, max_length=100)
    is_active: Optional[bool] = None
