# appointly/models/emergency_block.py
from sqlalchemy import Column, String, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
import uuid
from appointly.models.base import Base


class EmergencyBlock(Base):
    """Ad-hoc closure (holiday, sick day) with absolute start/end timestamps"""
    __tablename__ = "emergency_blocks"
    __table_args__ = (
        CheckConstraint("start_date < end_date", name="ck_emergency_blocks_range"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    business_id = Column(
        UUID(as_uuid=True),
        ForeignKey("businesses.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    # Naive local wall-clock timestamps
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    reason = Column(String(255), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<EmergencyBlock(business_id={self.business_id}, {self.start_date} - {self.end_date})>"

    def to_dict(self):
        return {
            "id": str(self.id),
            "business_id": str(self.business_id),
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "reason": self.reason,
        }
