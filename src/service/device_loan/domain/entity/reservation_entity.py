from datetime import datetime, timedelta, timezone
from typing import Optional

import attrs
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.service.device_loan.domain.device_loan_errors import InvalidStateError
from src.service.device_loan.domain.enum.reservation_status import (
    ACTIVE_RESERVATION_STATUSES,
    ReservationStatus,
)


_ALLOWED_TRANSITIONS: dict[ReservationStatus, frozenset[ReservationStatus]] = {
    ReservationStatus.PENDING: frozenset({ReservationStatus.COLLECTED, ReservationStatus.CANCELLED}),
    ReservationStatus.COLLECTED: frozenset(
        {ReservationStatus.RETURNED, ReservationStatus.COMPLETED}
    ),
}


@attrs.define
class Reservation:
    id: UUID
    user_id: UUID
    device_id: UUID
    inventory_id: UUID
    reserved_at: datetime
    due_date: datetime
    status: ReservationStatus = ReservationStatus.PENDING
    updated_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        *,
        id: UUID,
        user_id: UUID,
        device_id: UUID,
        inventory_id: UUID,
        loan_duration_days: int,
        reserved_at: Optional[datetime] = None,
    ) -> 'Reservation':
        reserved_at = reserved_at or datetime.now(timezone.utc)
        return cls(
            id=id,
            user_id=user_id,
            device_id=device_id,
            inventory_id=inventory_id,
            reserved_at=reserved_at,
            due_date=reserved_at + timedelta(days=loan_duration_days),
            status=ReservationStatus.PENDING,
            updated_at=reserved_at,
        )

    @property
    def holds_inventory(self) -> bool:
        return self.status in ACTIVE_RESERVATION_STATUSES

    def can_transition_to(self, target: ReservationStatus) -> bool:
        return target in _ALLOWED_TRANSITIONS.get(self.status, frozenset())

    def _transition_to(self, target: ReservationStatus) -> 'Reservation':
        if not self.can_transition_to(target):
            raise InvalidStateError(
                f'Cannot change reservation from {self.status.value} to {target.value}'
            )
        return attrs.evolve(self, status=target, updated_at=datetime.now(timezone.utc))

    @Logger.io
    def collect(self) -> 'Reservation':
        return self._transition_to(ReservationStatus.COLLECTED)

    @Logger.io
    def cancel(self) -> 'Reservation':
        if self.status != ReservationStatus.PENDING:
            raise InvalidStateError(
                f'Only pending reservations can be cancelled (current: {self.status.value})'
            )
        return self._transition_to(ReservationStatus.CANCELLED)

    @Logger.io
    def return_device(self) -> 'Reservation':
        return self._transition_to(ReservationStatus.RETURNED)

    @Logger.io
    def complete(self) -> 'Reservation':
        return self._transition_to(ReservationStatus.COMPLETED)
