# appointly/services/availability/blocking_resolver.py
"""Emergency blocks (ad-hoc closures) intersecting a time window"""
from datetime import datetime
from typing import List
from uuid import UUID

from sqlalchemy.orm import Session

from appointly.models.emergency_block import EmergencyBlock
from appointly.services.availability.intervals import TimeInterval


class BlockingResolver:

    @staticmethod
    def get_blocks_overlapping(
            db: Session,
            business_id: UUID,
            window_start: datetime,
            window_end: datetime
    ) -> List[EmergencyBlock]:
        return db.query(EmergencyBlock).filter(
            EmergencyBlock.business_id == business_id,
            EmergencyBlock.start_date < window_end,
            EmergencyBlock.end_date > window_start
        ).order_by(EmergencyBlock.start_date.asc()).all()

    @staticmethod
    def resolve(db: Session, business_id: UUID, window: TimeInterval) -> List[TimeInterval]:
        """Blocks are already absolute; they are returned as-is, unmerged."""
        blocks = BlockingResolver.get_blocks_overlapping(db, business_id, window.start, window.end)
        return [TimeInterval(block.start_date, block.end_date) for block in blocks]
