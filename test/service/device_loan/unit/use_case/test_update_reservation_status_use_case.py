"""
Unit tests for collect / return

collect: pending -> collected, loan opened, unit stays held
return:  collected -> returned | completed, loan closed, unit released,
         waitlist notification scheduled after commit
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from uuid_utils import uuid7

from src.platform.exception.exceptions import NotFoundError
from src.service.device_loan.app.command.update_reservation_status_to_collected_use_case import (
    UpdateReservationStatusToCollectedUseCase,
)
from src.service.device_loan.app.command.update_reservation_status_to_returned_use_case import (
    UpdateReservationStatusToReturnedUseCase,
)
from src.service.device_loan.domain.device_loan_errors import InvalidStateError
from src.service.device_loan.domain.enum.reservation_status import ReservationStatus
from test.service.device_loan.unit.helpers import (
    FakeUnitOfWork,
    make_background_task_runner,
    make_reservation,
)


pytestmark = pytest.mark.unit


@pytest.fixture
def dispatcher():
    dispatcher = MagicMock()
    dispatcher.notify_next_user = AsyncMock(return_value=True)
    return dispatcher


class TestCollectReservation:
    async def test_collect_opens_loan_without_releasing_unit(self):
        reservation = make_reservation()
        uow = FakeUnitOfWork(reservation=reservation)

        result = await UpdateReservationStatusToCollectedUseCase(uow=uow).execute(
            reservation_id=reservation.id
        )

        assert result.status == ReservationStatus.COLLECTED
        loan = uow.loan_command_repo.create.await_args.kwargs['loan']
        assert loan.reservation_id == reservation.id
        assert loan.returned_at is None
        uow.inventory_command_repo.release.assert_not_awaited()
        assert uow.committed is True

    async def test_cancelled_reservation_cannot_be_collected(self):
        uow = FakeUnitOfWork(reservation=make_reservation(status=ReservationStatus.CANCELLED))

        with pytest.raises(InvalidStateError):
            await UpdateReservationStatusToCollectedUseCase(uow=uow).execute(
                reservation_id=uuid7()
            )

        uow.loan_command_repo.create.assert_not_awaited()
        assert uow.committed is False

    async def test_missing_reservation_raises_not_found(self):
        uow = FakeUnitOfWork(reservation=None)

        with pytest.raises(NotFoundError):
            await UpdateReservationStatusToCollectedUseCase(uow=uow).execute(
                reservation_id=uuid7()
            )


class TestReturnReservation:
    @pytest.mark.parametrize(
        'completed, expected',
        [(False, ReservationStatus.RETURNED), (True, ReservationStatus.COMPLETED)],
    )
    async def test_return_releases_unit_and_schedules_notification(
        self, dispatcher, completed, expected
    ):
        """
        Given: a collected reservation
        When: the device comes back
        Then: the loan is closed, the unit released, and the waitlist notified
        """
        reservation = make_reservation(status=ReservationStatus.COLLECTED)
        uow = FakeUnitOfWork(reservation=reservation)
        runner = make_background_task_runner()
        use_case = UpdateReservationStatusToReturnedUseCase(
            uow=uow, background_task_runner=runner, notification_dispatcher=dispatcher
        )

        result = await use_case.execute(reservation_id=reservation.id, completed=completed)

        assert result.status == expected
        uow.loan_command_repo.mark_returned.assert_awaited_once_with(
            reservation_id=reservation.id
        )
        uow.inventory_command_repo.release.assert_awaited_once_with(
            inventory_id=reservation.inventory_id
        )
        assert uow.committed is True
        runner.submit.assert_called_once()

    async def test_pending_reservation_cannot_be_returned(self, dispatcher):
        uow = FakeUnitOfWork(reservation=make_reservation())
        runner = make_background_task_runner()
        use_case = UpdateReservationStatusToReturnedUseCase(
            uow=uow, background_task_runner=runner, notification_dispatcher=dispatcher
        )

        with pytest.raises(InvalidStateError):
            await use_case.execute(reservation_id=uuid7())

        uow.inventory_command_repo.release.assert_not_awaited()
        runner.submit.assert_not_called()
