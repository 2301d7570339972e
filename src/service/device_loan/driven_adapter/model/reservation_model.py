from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, func
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column
from uuid_utils import UUID

from src.platform.database.db_setting import Base


class ReservationModel(Base):
    __tablename__ = 'reservations'
    __table_args__ = (Index('ix_reservations_user_reserved_at', 'user_id', 'reserved_at'),)

    reservation_id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)  # UUID7
    user_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True), ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False
    )
    device_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey('devices.device_id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )
    inventory_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey('device_inventory.inventory_id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )
    reserved_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    due_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    status: Mapped[str] = mapped_column(String(50), nullable=False, default='pending')
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
