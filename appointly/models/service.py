# appointly/models/service.py
"""
Service Model - bookable services offered by a business.
Duration drives slot length; price is copied onto each appointment.
"""
from sqlalchemy import Column, String, Integer, ForeignKey, Boolean, DateTime, Text, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid
from appointly.models.base import Base


class Service(Base):
    __tablename__ = "services"
    __table_args__ = (
        CheckConstraint("duration > 0", name="ck_services_duration_positive"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    business_id = Column(
        UUID(as_uuid=True),
        ForeignKey("businesses.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)

    # Price in minor units (cents)
    price = Column(Integer, nullable=False, default=0)

    # Duration in minutes
    duration = Column(Integer, nullable=False)

    is_active = Column(Boolean, default=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now()
    )

    business = relationship("Business")

    def __repr__(self):
        return f"<Service(id={self.id}, name={self.name}, business_id={self.business_id})>"

    def to_dict(self):
        """Convert to dictionary for API responses"""
        return {
            "id": str(self.id),
            "business_id": str(self.business_id),
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "duration": self.duration,
            "formatted_duration": self.formatted_duration,
            "is_active": self.is_active,
        }

    @property
    def formatted_duration(self) -> str:
        """Return human-readable duration string"""
        hours = self.duration // 60
        minutes = self.duration % 60

        if hours > 0 and minutes > 0:
            return f"{hours}h {minutes}m"
        elif hours > 0:
            return f"{hours}h"
        else:
            return f"{minutes}m"
