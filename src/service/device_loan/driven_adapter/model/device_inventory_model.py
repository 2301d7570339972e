from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column
from uuid_utils import UUID

from src.platform.database.db_setting import Base


class DeviceInventoryModel(Base):
    __tablename__ = 'device_inventory'
    __table_args__ = (
        UniqueConstraint('device_id', 'serial_number', name='uq_device_inventory_serial'),
        # Allocation scans free units of one device
        Index('ix_device_inventory_device_available', 'device_id', 'is_available'),
    )

    inventory_id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)
    device_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey('devices.device_id', ondelete='CASCADE'),
        nullable=False,
    )
    serial_number: Mapped[str] = mapped_column(String(255), nullable=False)
    is_available: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
