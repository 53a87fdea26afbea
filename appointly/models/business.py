# appointly/models/business.py
"""
Business (tenant) and its weekly schedule
"""
from sqlalchemy import Column, String, Boolean, DateTime, Integer, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid
from appointly.models.base import Base


class Business(Base):
    __tablename__ = "businesses"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False)
    slug = Column(String(200), nullable=False, unique=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
    is_active = Column(Boolean, default=True, nullable=False)

    hours = relationship(
        "BusinessHours",
        back_populates="business",
        cascade="all, delete-orphan",
        order_by="BusinessHours.day_of_week",
    )

    def __repr__(self):
        return f"<Business(id={self.id}, slug={self.slug})>"

    def to_dict(self):
        """Convert to dictionary for API responses"""
        return {
            "id": str(self.id),
            "name": self.name,
            "slug": self.slug,
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class BusinessHours(Base):
    """One schedule entry per (business, day of week)"""
    __tablename__ = "business_hours"
    __table_args__ = (
        UniqueConstraint("business_id", "day_of_week", name="uq_business_hours_day"),
        CheckConstraint("day_of_week BETWEEN 0 AND 6", name="ck_business_hours_day"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    business_id = Column(
        UUID(as_uuid=True),
        ForeignKey("businesses.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    day_of_week = Column(Integer, nullable=False)  # 0=Sunday, 6=Saturday
    open_time = Column(String(5), nullable=False)  # HH:MM format
    close_time = Column(String(5), nullable=False)  # HH:MM format
    is_closed = Column(Boolean, default=False, nullable=False)

    business = relationship("Business", back_populates="hours")

    def __repr__(self):
        return f"<BusinessHours(business_id={self.business_id}, day={self.day_of_week})>"

    def to_dict(self):
        return {
            "day_of_week": self.day_of_week,
            "open_time": self.open_time,
            "close_time": self.close_time,
            "is_closed": self.is_closed,
        }
