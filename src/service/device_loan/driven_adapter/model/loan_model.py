from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, func
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column
from uuid_utils import UUID

from src.platform.database.db_setting import Base


class LoanModel(Base):
    __tablename__ = 'loans'

    loan_id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)
    reservation_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey('reservations.reservation_id', ondelete='CASCADE'),
        nullable=False,
        unique=True,
    )
    collected_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    returned_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
