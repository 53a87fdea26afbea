from pydantic import BaseModel


class AvailabilitySlot(BaseModel):
    start: str
    end: str
    duration_minutes: int
