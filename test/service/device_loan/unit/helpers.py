from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock, Mock

import attrs
from uuid_utils import UUID, uuid7

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.service.device_loan.app.dto.reservation_patch import ReservationPatch
from src.service.device_loan.domain.entity.device_entity import Device
from src.service.device_loan.domain.entity.loan_entity import Loan
from src.service.device_loan.domain.entity.reservation_entity import Reservation
from src.service.device_loan.domain.entity.user_entity import User
from src.service.device_loan.domain.entity.waitlist_entry_entity import WaitlistEntry
from src.service.device_loan.domain.enum.reservation_status import ReservationStatus


class FakeUnitOfWork(AbstractUnitOfWork):
    """
    In-memory UoW: repositories are AsyncMocks, commit/rollback are recorded.

    `update` applies the patch to the reservation passed in, so use cases see
    the same row they would get back from PostgreSQL.
    """

    def __init__(self, *, reservation: Reservation | None = None) -> None:
        self.committed = False
        self.rolled_back = False
        self.entered = False

        self.inventory_allocator: Mock = AsyncMock()
        self.inventory_command_repo: Mock = AsyncMock()
        self.reservation_command_repo: Mock = AsyncMock()
        self.loan_command_repo: Mock = AsyncMock()

        self.reservation_command_repo.get_for_update = AsyncMock(return_value=reservation)
        self.reservation_command_repo.create = AsyncMock(side_effect=_return_reservation)
        self.reservation_command_repo.update = AsyncMock(
            side_effect=lambda *, reservation_id, patch: _apply_patch(reservation, patch)
        )
        self.loan_command_repo.create = AsyncMock(side_effect=lambda *, loan: loan)
        self.loan_command_repo.mark_returned = AsyncMock(
            side_effect=lambda *, reservation_id: Loan(
                id=uuid7(),
                reservation_id=reservation_id,
                collected_at=datetime.now(timezone.utc) - timedelta(days=1),
                returned_at=datetime.now(timezone.utc),
            )
        )

    async def __aenter__(self) -> 'FakeUnitOfWork':
        self.entered = True
        return self

    async def _commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        if not self.committed:
            self.rolled_back = True


async def _return_reservation(*, reservation: Reservation) -> Reservation:
    return reservation


def _apply_patch(reservation: Reservation | None, patch: ReservationPatch) -> Reservation:
    assert reservation is not None
    changes: dict = {}
    if patch.status is not None:
        changes['status'] = patch.status
    if patch.due_date is not None:
        changes['due_date'] = patch.due_date
    return attrs.evolve(reservation, **changes)


def make_reservation(
    *,
    user_id: UUID | None = None,
    device_id: UUID | None = None,
    status: ReservationStatus = ReservationStatus.PENDING,
) -> Reservation:
    reservation = Reservation.create(
        id=uuid7(),
        user_id=user_id or uuid7(),
        device_id=device_id or uuid7(),
        inventory_id=uuid7(),
        loan_duration_days=2,
    )
    return attrs.evolve(reservation, status=status)


def make_device(*, device_id: UUID | None = None, loan_days: int | None = 7) -> Device:
    return Device(
        id=device_id or uuid7(),
        brand='Apple',
        model='MacBook Pro 14',
        category='laptop',
        default_loan_duration_days=loan_days,
    )


def make_user(*, user_id: UUID | None = None) -> User:
    return User(
        id=user_id or uuid7(),
        email='student@campus.edu',
        first_name='Alex',
        last_name='Chen',
    )


def make_waitlist_entry(
    *, user_id: UUID | None = None, device_id: UUID | None = None
) -> WaitlistEntry:
    return WaitlistEntry.create(
        id=uuid7(), user_id=user_id or uuid7(), device_id=device_id or uuid7()
    )


def make_background_task_runner() -> MagicMock:
    runner = MagicMock()
    runner.submit = MagicMock(return_value=True)
    return runner
