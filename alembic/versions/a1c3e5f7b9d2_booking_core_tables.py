"""booking core tables

Revision ID: a1c3e5f7b9d2
Revises:
Create Date: 2026-10-19 09:12:44.418203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = 'a1c3e5f7b9d2'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""

    op.create_table(
        'businesses',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('slug', sa.String(200), nullable=False),
        sa.Column('is_active', sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'))
    )
    op.create_index('ix_businesses_slug', 'businesses', ['slug'], unique=True)

    op.create_table(
        'business_hours',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('business_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('businesses.id', ondelete='CASCADE'), nullable=False),
        sa.Column('day_of_week', sa.Integer, nullable=False),
        sa.Column('open_time', sa.String(5), nullable=False),
        sa.Column('close_time', sa.String(5), nullable=False),
        sa.Column('is_closed', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.UniqueConstraint('business_id', 'day_of_week', name='uq_business_hours_day'),
        sa.CheckConstraint('day_of_week BETWEEN 0 AND 6', name='ck_business_hours_day')
    )
    op.create_index('ix_business_hours_business_id', 'business_hours', ['business_id'])

    op.create_table(
        'services',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('business_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('businesses.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('description', sa.Text, nullable=True),
        sa.Column('price', sa.Integer, nullable=False, server_default='0'),
        sa.Column('duration', sa.Integer, nullable=False),
        sa.Column('is_active', sa.Boolean, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.CheckConstraint('duration > 0', name='ck_services_duration_positive')
    )
    op.create_index('ix_services_business_id', 'services', ['business_id'])
    op.create_index('ix_services_is_active', 'services', ['is_active'])

    op.create_table(
        'staff',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('business_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('businesses.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('role', sa.String(100), nullable=True),
        sa.Column('is_active', sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'))
    )
    op.create_index('ix_staff_business_id', 'staff', ['business_id'])

    op.create_table(
        'emergency_blocks',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('business_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('businesses.id', ondelete='CASCADE'), nullable=False),
        sa.Column('start_date', sa.DateTime, nullable=False),
        sa.Column('end_date', sa.DateTime, nullable=False),
        sa.Column('reason', sa.String(255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.CheckConstraint('start_date < end_date', name='ck_emergency_blocks_range')
    )
    op.create_index('ix_emergency_blocks_business_id', 'emergency_blocks', ['business_id'])

    op.create_table(
        'appointments',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('business_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('businesses.id', ondelete='CASCADE'), nullable=False),
        sa.Column('service_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('services.id'), nullable=False),
        sa.Column('staff_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('staff.id'), nullable=True),
        sa.Column('customer_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('guest_name', sa.String(200), nullable=True),
        sa.Column('guest_email', sa.String(255), nullable=True),
        sa.Column('guest_phone', sa.String(30), nullable=True),
        sa.Column('start_time', sa.DateTime, nullable=False),
        sa.Column('end_time', sa.DateTime, nullable=False),
        sa.Column('total_price', sa.Integer, nullable=True),
        sa.Column('notes', sa.Text, nullable=True),
        sa.Column('customer_language', sa.String(5), server_default='en'),
        sa.Column('status', sa.String(20), nullable=False, server_default='PENDING'),
        sa.Column('rejection_reason', sa.Text, nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('cancelled_at', sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint('start_time < end_time', name='ck_appointments_range'),
        sa.CheckConstraint(
            "status IN ('PENDING', 'CONFIRMED', 'CANCELLED', 'COMPLETED', 'REJECTED')",
            name='ck_appointments_status'
        )
    )
    op.create_index('ix_appointments_business_start', 'appointments', ['business_id', 'start_time'])
    op.create_index('ix_appointments_staff_id', 'appointments', ['staff_id'])
    op.create_index('ix_appointments_customer_id', 'appointments', ['customer_id'])
    op.create_index('ix_appointments_status', 'appointments', ['status'])

    # Backstop for the booking guard: no two occupying appointments of the
    # same business and staff member may overlap. Unassigned appointments
    # share one nil-UUID lane per business.
    op.execute("CREATE EXTENSION IF NOT EXISTS btree_gist;")
    op.execute(
        """
        ALTER TABLE appointments
          ADD CONSTRAINT appointments_no_overlap
          EXCLUDE USING gist (
            business_id WITH =,
            (COALESCE(staff_id, '00000000-0000-0000-0000-000000000000'::uuid)) WITH =,
            tsrange(start_time, end_time, '[)') WITH &&
          )
          WHERE (status IN ('PENDING', 'CONFIRMED', 'COMPLETED'))
        """
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.execute("ALTER TABLE appointments DROP CONSTRAINT IF EXISTS appointments_no_overlap")
    op.drop_table('appointments')
    op.drop_table('emergency_blocks')
    op.drop_table('staff')
    op.drop_table('services')
    op.drop_table('business_hours')
    op.drop_table('businesses')
