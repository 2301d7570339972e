"""init_device_reservation_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Schema:
- users: requesters (read-only to the reservation core)
- devices: catalog entries with default loan duration
- device_inventory: physical units, unique (device_id, serial_number)
- reservations: one row per successful allocation
- loans: collection / return timestamps of a reservation
- waitlist: FIFO queue per device, one pending entry per (user, device)
- email_notifications: delivery audit of waitlist notifications
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all tables."""

    op.create_table(
        'users',
        sa.Column('user_id', UUID(as_uuid=True), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password', sa.String(255), nullable=False, server_default=''),
        sa.Column('first_name', sa.String(255), nullable=False),
        sa.Column('last_name', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), nullable=False, server_default='student'),
        sa.Column(
            'created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_role', 'users', ['role'])
    op.create_index('ix_users_is_deleted', 'users', ['is_deleted'])

    op.create_table(
        'devices',
        sa.Column('device_id', UUID(as_uuid=True), primary_key=True),
        sa.Column('brand', sa.String(255), nullable=False),
        sa.Column('model', sa.String(255), nullable=False),
        sa.Column('category', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('default_loan_duration_days', sa.Integer(), nullable=False, server_default='2'),
        sa.Column(
            'created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index('ix_devices_brand', 'devices', ['brand'])
    op.create_index('ix_devices_model', 'devices', ['model'])
    op.create_index('ix_devices_category', 'devices', ['category'])
    op.create_index('ix_devices_is_deleted', 'devices', ['is_deleted'])

    op.create_table(
        'device_inventory',
        sa.Column('inventory_id', UUID(as_uuid=True), primary_key=True),
        sa.Column(
            'device_id',
            UUID(as_uuid=True),
            sa.ForeignKey('devices.device_id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('serial_number', sa.String(255), nullable=False),
        sa.Column('is_available', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column(
            'created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.UniqueConstraint('device_id', 'serial_number', name='uq_device_inventory_serial'),
    )
    op.create_index(
        'ix_device_inventory_device_available', 'device_inventory', ['device_id', 'is_available']
    )

    op.create_table(
        'reservations',
        sa.Column('reservation_id', UUID(as_uuid=True), primary_key=True),
        sa.Column(
            'user_id',
            UUID(as_uuid=True),
            sa.ForeignKey('users.user_id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column(
            'device_id',
            UUID(as_uuid=True),
            sa.ForeignKey('devices.device_id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column(
            'inventory_id',
            UUID(as_uuid=True),
            sa.ForeignKey('device_inventory.inventory_id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column(
            'reserved_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column('due_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('status', sa.String(50), nullable=False, server_default='pending'),
        sa.Column(
            'updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
    )
    op.create_index('ix_reservations_device_id', 'reservations', ['device_id'])
    op.create_index('ix_reservations_inventory_id', 'reservations', ['inventory_id'])
    op.create_index(
        'ix_reservations_user_reserved_at', 'reservations', ['user_id', 'reserved_at']
    )

    op.create_table(
        'loans',
        sa.Column('loan_id', UUID(as_uuid=True), primary_key=True),
        sa.Column(
            'reservation_id',
            UUID(as_uuid=True),
            sa.ForeignKey('reservations.reservation_id', ondelete='CASCADE'),
            nullable=False,
            unique=True,
        ),
        sa.Column(
            'collected_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column('returned_at', sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        'waitlist',
        sa.Column('waitlist_id', UUID(as_uuid=True), primary_key=True),
        sa.Column(
            'user_id',
            UUID(as_uuid=True),
            sa.ForeignKey('users.user_id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column(
            'device_id',
            UUID(as_uuid=True),
            sa.ForeignKey('devices.device_id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column(
            'added_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column('is_notified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('notified_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_waitlist_user_id', 'waitlist', ['user_id'])
    op.create_index(
        'ix_waitlist_device_queue',
        'waitlist',
        ['device_id', 'is_notified', 'added_at', 'waitlist_id'],
    )
    # At most one un-notified entry per (user, device)
    op.create_index(
        'uq_waitlist_user_device_pending',
        'waitlist',
        ['user_id', 'device_id'],
        unique=True,
        postgresql_where=sa.text('is_notified = false'),
    )

    op.create_table(
        'email_notifications',
        sa.Column('email_id', UUID(as_uuid=True), primary_key=True),
        sa.Column(
            'user_id',
            UUID(as_uuid=True),
            sa.ForeignKey('users.user_id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('email_address', sa.String(255), nullable=False),
        sa.Column('subject', sa.String(500), nullable=False),
        sa.Column('body', sa.Text(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('attempts', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('error_message', sa.Text(), nullable=True),
        sa.Column('sent_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            'created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
    )
    op.create_index('ix_email_notifications_user_id', 'email_notifications', ['user_id'])
    op.create_index('ix_email_notifications_status', 'email_notifications', ['status'])


def downgrade() -> None:
    op.drop_table('email_notifications')
    op.drop_table('waitlist')
    op.drop_table('loans')
    op.drop_table('reservations')
    op.drop_table('device_inventory')
    op.drop_table('devices')
    op.drop_table('users')
