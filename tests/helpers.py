from __future__ import annotations

from datetime import date, datetime
from typing import Optional
from uuid import UUID, uuid4

from appointly.api.dependencies import create_access_token

# Default onboarding schedule: Mon-Fri 09:00-17:00, weekend closed
SUNDAY = date(2030, 1, 6)
MONDAY = date(2030, 1, 7)
SATURDAY = date(2030, 1, 12)


def at(day: date, hhmm: str) -> datetime:
    hours, minutes = (int(part) for part in hhmm.split(":"))
    return datetime(day.year, day.month, day.day, hours, minutes)


def bearer(role: str, business_id: Optional[UUID] = None, user_id: Optional[UUID] = None) -> dict:
    claims = {"sub": str(user_id or uuid4()), "role": role}
    if business_id:
        claims["business_id"] = str(business_id)
    return {"Authorization": f"Bearer {create_access_token(claims)}"}


class StubLimiter:
    def __init__(self, allowed: bool = True) -> None:
        self.allowed = allowed
        self.calls = 0

    async def hit(self, client: str, limit: int, window_seconds: int = 60, now=None) -> bool:
        self.calls += 1
        return self.allowed
