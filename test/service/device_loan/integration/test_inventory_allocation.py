"""
Integration tests for reservation allocation against PostgreSQL

Test Focus:
1. N concurrent reservations on K units: exactly min(N, K) succeed, each on a
   different unit, the rest get NoInventoryError
2. Cancel hands the unit back so the next reservation can claim it
3. A failed reservation leaves inventory untouched
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.platform.database.unit_of_work import AsyncpgUnitOfWork
from src.service.device_loan.app.command.cancel_reservation_use_case import (
    CancelReservationUseCase,
)
from src.service.device_loan.app.command.reserve_device_use_case import ReserveDeviceUseCase
from src.service.device_loan.domain.device_loan_errors import NoInventoryError
from src.service.device_loan.domain.enum.reservation_status import ReservationStatus
from src.service.device_loan.driven_adapter.repo.device_query_repo_impl import DeviceQueryRepoImpl
from src.service.device_loan.driven_adapter.repo.reservation_query_repo_impl import (
    ReservationQueryRepoImpl,
)
from test.service.device_loan.integration.seed import (
    count_available_units,
    count_reservations,
    seed_device,
    seed_user,
)
from test.service.device_loan.unit.helpers import make_background_task_runner


pytestmark = pytest.mark.integration


def _reserve_use_case() -> ReserveDeviceUseCase:
    # One UoW per request, like the Factory provider in the container
    return ReserveDeviceUseCase(uow=AsyncpgUnitOfWork(), device_query_repo=DeviceQueryRepoImpl())


async def test_concurrent_reservations_never_oversell():
    """
    Given: a device with 3 units and 8 users
    When: all 8 reserve at the same time
    Then:
      - exactly 3 reservations are created, on 3 distinct units
      - the other 5 get NoInventoryError
      - no unit of the device is left available
    """
    device_id = await seed_device(units=3)
    user_ids = [await seed_user() for _ in range(8)]

    results = await asyncio.gather(
        *(
            _reserve_use_case().execute(user_id=user_id, device_id=device_id)
            for user_id in user_ids
        ),
        return_exceptions=True,
    )

    reservations = [r for r in results if not isinstance(r, BaseException)]
    failures = [r for r in results if isinstance(r, BaseException)]
    assert len(reservations) == 3
    assert len({r.inventory_id for r in reservations}) == 3
    assert len(failures) == 5
    assert all(isinstance(f, NoInventoryError) for f in failures)
    assert await count_available_units(device_id=device_id) == 0


async def test_fewer_requests_than_units_all_succeed():
    device_id = await seed_device(units=5)
    user_ids = [await seed_user() for _ in range(3)]

    results = await asyncio.gather(
        *(
            _reserve_use_case().execute(user_id=user_id, device_id=device_id)
            for user_id in user_ids
        )
    )

    assert len({r.inventory_id for r in results}) == 3
    assert await count_available_units(device_id=device_id) == 2


async def test_cancel_returns_unit_to_pool():
    """
    Given: the only unit of a device is reserved
    When: the owner cancels
    Then: the unit is available again and another user can reserve it
    """
    device_id = await seed_device(units=1)
    owner_id = await seed_user()
    other_id = await seed_user()

    reservation = await _reserve_use_case().execute(user_id=owner_id, device_id=device_id)
    with pytest.raises(NoInventoryError):
        await _reserve_use_case().execute(user_id=other_id, device_id=device_id)

    runner = make_background_task_runner()
    cancelled = await CancelReservationUseCase(
        uow=AsyncpgUnitOfWork(),
        background_task_runner=runner,
        notification_dispatcher=MagicMock(),
    ).execute(user_id=owner_id, reservation_id=reservation.id)

    assert cancelled.status == ReservationStatus.CANCELLED
    assert await count_available_units(device_id=device_id) == 1
    runner.submit.assert_called_once()

    second = await _reserve_use_case().execute(user_id=other_id, device_id=device_id)
    assert second.inventory_id == reservation.inventory_id

    history = await ReservationQueryRepoImpl().list_by_user(user_id=owner_id)
    assert [r.status for r in history] == [ReservationStatus.CANCELLED]


class _FailingInsertUnitOfWork(AsyncpgUnitOfWork):
    """Real transaction whose reservation insert fails after a unit was claimed"""

    def __init__(self) -> None:
        super().__init__()
        self.claimed_inventory_id = None

    async def __aenter__(self) -> '_FailingInsertUnitOfWork':
        await super().__aenter__()
        allocator = self.inventory_allocator

        async def _acquire(*, device_id):
            self.claimed_inventory_id = await allocator.acquire(device_id=device_id)
            return self.claimed_inventory_id

        self.inventory_allocator = MagicMock(acquire=AsyncMock(side_effect=_acquire))
        self.reservation_command_repo = MagicMock(
            create=AsyncMock(side_effect=RuntimeError('insert failed'))
        )
        return self


async def test_failed_reservation_leaves_inventory_untouched():
    """
    Given: a device with a single unit
    When: the unit is claimed but the reservation insert fails
    Then:
      - the error propagates to the caller
      - the transaction is rolled back: the unit is available again
      - no reservation row exists
      - the next reservation gets the same unit
    """
    device_id = await seed_device(units=1)
    user_id = await seed_user()
    uow = _FailingInsertUnitOfWork()

    with pytest.raises(RuntimeError, match='insert failed'):
        await ReserveDeviceUseCase(uow=uow, device_query_repo=DeviceQueryRepoImpl()).execute(
            user_id=user_id, device_id=device_id
        )

    assert uow.claimed_inventory_id is not None
    assert await count_available_units(device_id=device_id) == 1
    assert await count_reservations(device_id=device_id) == 0

    reservation = await _reserve_use_case().execute(user_id=user_id, device_id=device_id)
    assert reservation.inventory_id == uow.claimed_inventory_id
