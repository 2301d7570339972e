"""
Unit tests for CancelReservationUseCase

Test Focus:
1. pending -> cancelled, unit released, commit, then waitlist notification scheduled
2. Notification is scheduled after commit and never fails the cancellation
3. Fail fast: not found, not owner, not pending (nothing released or scheduled)
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from uuid_utils import uuid7

from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.service.device_loan.app.command.cancel_reservation_use_case import (
    CancelReservationUseCase,
)
from src.service.device_loan.app.dto.reservation_patch import ReservationPatch
from src.service.device_loan.domain.device_loan_errors import InvalidStateError
from src.service.device_loan.domain.enum.reservation_status import ReservationStatus
from test.service.device_loan.unit.helpers import (
    FakeUnitOfWork,
    make_background_task_runner,
    make_reservation,
)


pytestmark = pytest.mark.unit


class TestCancelReservation:
    @pytest.fixture
    def owner_id(self):
        return uuid7()

    @pytest.fixture
    def pending_reservation(self, owner_id):
        return make_reservation(user_id=owner_id)

    @pytest.fixture
    def dispatcher(self):
        dispatcher = MagicMock()
        dispatcher.notify_next_user = AsyncMock(return_value=True)
        return dispatcher

    @pytest.fixture
    def runner(self):
        return make_background_task_runner()

    def _use_case(self, *, uow, runner, dispatcher):
        return CancelReservationUseCase(
            uow=uow, background_task_runner=runner, notification_dispatcher=dispatcher
        )

    async def test_cancel_releases_unit_and_schedules_notification(
        self, owner_id, pending_reservation, runner, dispatcher
    ):
        """
        Given: a pending reservation owned by the caller
        When: the owner cancels it
        Then:
          - status becomes cancelled
          - the reserved unit is released in the same transaction
          - the transaction is committed
          - notify_next_user for that device is submitted to the background runner
        """
        uow = FakeUnitOfWork(reservation=pending_reservation)
        use_case = self._use_case(uow=uow, runner=runner, dispatcher=dispatcher)

        result = await use_case.execute(user_id=owner_id, reservation_id=pending_reservation.id)

        assert result.status == ReservationStatus.CANCELLED
        uow.reservation_command_repo.update.assert_awaited_once_with(
            reservation_id=pending_reservation.id,
            patch=ReservationPatch(status=ReservationStatus.CANCELLED),
        )
        uow.inventory_command_repo.release.assert_awaited_once_with(
            inventory_id=pending_reservation.inventory_id
        )
        assert uow.committed is True

        runner.submit.assert_called_once()
        job = runner.submit.call_args.args[0]
        assert runner.submit.call_args.kwargs['name'] == (
            f'notify-waitlist:{pending_reservation.device_id}'
        )

        # The submitted job notifies the head of this device's waitlist
        await job()
        dispatcher.notify_next_user.assert_awaited_once_with(
            device_id=pending_reservation.device_id
        )

    async def test_notification_is_not_awaited_by_the_request(
        self, owner_id, pending_reservation, runner, dispatcher
    ):
        uow = FakeUnitOfWork(reservation=pending_reservation)
        use_case = self._use_case(uow=uow, runner=runner, dispatcher=dispatcher)

        await use_case.execute(user_id=owner_id, reservation_id=pending_reservation.id)

        dispatcher.notify_next_user.assert_not_awaited()

    async def test_unschedulable_notification_does_not_fail_cancel(
        self, owner_id, pending_reservation, dispatcher
    ):
        """
        Given: the background runner cannot accept work (e.g. shutting down)
        When: the owner cancels
        Then: the cancellation still succeeds and stays committed
        """
        runner = MagicMock()
        runner.submit = MagicMock(return_value=False)
        uow = FakeUnitOfWork(reservation=pending_reservation)
        use_case = self._use_case(uow=uow, runner=runner, dispatcher=dispatcher)

        result = await use_case.execute(user_id=owner_id, reservation_id=pending_reservation.id)

        assert result.status == ReservationStatus.CANCELLED
        assert uow.committed is True

    async def test_missing_reservation_raises_not_found(self, runner, dispatcher):
        uow = FakeUnitOfWork(reservation=None)
        use_case = self._use_case(uow=uow, runner=runner, dispatcher=dispatcher)

        with pytest.raises(NotFoundError):
            await use_case.execute(user_id=uuid7(), reservation_id=uuid7())

        assert uow.rolled_back is True
        runner.submit.assert_not_called()

    async def test_other_users_reservation_is_forbidden(
        self, pending_reservation, runner, dispatcher
    ):
        uow = FakeUnitOfWork(reservation=pending_reservation)
        use_case = self._use_case(uow=uow, runner=runner, dispatcher=dispatcher)

        with pytest.raises(ForbiddenError):
            await use_case.execute(user_id=uuid7(), reservation_id=pending_reservation.id)

        uow.inventory_command_repo.release.assert_not_awaited()
        assert uow.committed is False
        runner.submit.assert_not_called()

    async def test_collected_reservation_cannot_be_cancelled(self, owner_id, runner, dispatcher):
        """
        Given: a reservation already collected
        When: the owner cancels
        Then: InvalidStateError, unit stays held, nothing scheduled
        """
        collected = make_reservation(user_id=owner_id, status=ReservationStatus.COLLECTED)
        uow = FakeUnitOfWork(reservation=collected)
        use_case = self._use_case(uow=uow, runner=runner, dispatcher=dispatcher)

        with pytest.raises(InvalidStateError):
            await use_case.execute(user_id=owner_id, reservation_id=collected.id)

        uow.reservation_command_repo.update.assert_not_awaited()
        uow.inventory_command_repo.release.assert_not_awaited()
        assert uow.rolled_back is True
        runner.submit.assert_not_called()
