from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, func, text
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column
from uuid_utils import UUID

from src.platform.database.db_setting import Base


class WaitlistModel(Base):
    __tablename__ = 'waitlist'
    __table_args__ = (
        # At most one un-notified entry per (user, device)
        Index(
            'uq_waitlist_user_device_pending',
            'user_id',
            'device_id',
            unique=True,
            postgresql_where=text('is_notified = false'),
        ),
        # FIFO scan: WHERE device_id = ? AND is_notified = false ORDER BY added_at, waitlist_id
        Index('ix_waitlist_device_queue', 'device_id', 'is_notified', 'added_at', 'waitlist_id'),
    )

    waitlist_id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)
    user_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey('users.user_id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )
    device_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True), ForeignKey('devices.device_id', ondelete='CASCADE'), nullable=False
    )
    added_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    is_notified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    notified_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
