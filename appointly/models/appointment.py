# appointly/models/appointment.py
from sqlalchemy import Column, String, Integer, Text, DateTime, ForeignKey, Index, CheckConstraint, DDL, event
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum
import uuid
from appointly.models.base import Base


class AppointmentStatus(str, enum.Enum):
    """Lifecycle states of an appointment."""
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"
    REJECTED = "REJECTED"


# Statuses whose interval counts as occupied time
OCCUPYING_STATUSES = (
    AppointmentStatus.PENDING.value,
    AppointmentStatus.CONFIRMED.value,
    AppointmentStatus.COMPLETED.value,
)


class Appointment(Base):
    __tablename__ = "appointments"
    __table_args__ = (
        CheckConstraint("start_time < end_time", name="ck_appointments_range"),
        CheckConstraint(
            "status IN ('PENDING', 'CONFIRMED', 'CANCELLED', 'COMPLETED', 'REJECTED')",
            name="ck_appointments_status"
        ),
        Index("ix_appointments_business_start", "business_id", "start_time"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # References
    business_id = Column(UUID(as_uuid=True), ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False)
    service_id = Column(UUID(as_uuid=True), ForeignKey("services.id"), nullable=False)
    staff_id = Column(UUID(as_uuid=True), ForeignKey("staff.id"), nullable=True, index=True)

    # Registered customer, or guest contact fields
    customer_id = Column(UUID(as_uuid=True), nullable=True, index=True)
    guest_name = Column(String(200), nullable=True)
    guest_email = Column(String(255), nullable=True)
    guest_phone = Column(String(30), nullable=True)

    # [start_time, end_time) in naive local wall-clock time
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    total_price = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)
    customer_language = Column(String(5), default="en")

    status = Column(String(20), nullable=False, default=AppointmentStatus.PENDING.value, index=True)
    rejection_reason = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    cancelled_at = Column(DateTime(timezone=True), nullable=True)

    service = relationship("Service")
    staff = relationship("Staff")

    @property
    def duration_minutes(self) -> int:
        return int((self.end_time - self.start_time).total_seconds() // 60)

    @property
    def is_guest(self) -> bool:
        return self.customer_id is None

    def __repr__(self):
        return f"<Appointment(id={self.id}, start={self.start_time}, status={self.status})>"

    def to_dict(self):
        """Convert to dictionary for API responses"""
        return {
            "id": str(self.id),
            "business_id": str(self.business_id),
            "service_id": str(self.service_id),
            "staff_id": str(self.staff_id) if self.staff_id else None,
            "customer_id": str(self.customer_id) if self.customer_id else None,
            "guest_name": self.guest_name,
            "guest_email": self.guest_email,
            "guest_phone": self.guest_phone,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "duration_minutes": self.duration_minutes,
            "total_price": self.total_price,
            "status": self.status,
            "rejection_reason": self.rejection_reason,
            "customer_language": self.customer_language,
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "cancelled_at": self.cancelled_at.isoformat() if self.cancelled_at else None,
        }


# Overlap backstop for schemas built with metadata.create_all; the Alembic
# migration adds the same constraint. PostgreSQL only.
event.listen(
    Appointment.__table__,
    "before_create",
    DDL("CREATE EXTENSION IF NOT EXISTS btree_gist").execute_if(dialect="postgresql")
)
event.listen(
    Appointment.__table__,
    "after_create",
    DDL(
        "ALTER TABLE appointments "
        "ADD CONSTRAINT appointments_no_overlap "
        "EXCLUDE USING gist ("
        "business_id WITH =, "
        "(COALESCE(staff_id, '00000000-0000-0000-0000-000000000000'::uuid)) WITH =, "
        "tsrange(start_time, end_time, '[)') WITH &&"
        ") "
        "WHERE (status IN ('PENDING', 'CONFIRMED', 'COMPLETED'))"
    ).execute_if(dialect="postgresql")
)
