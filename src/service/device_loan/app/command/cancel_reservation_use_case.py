from functools import partial
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.task.background_task_runner import IBackgroundTaskRunner
from src.service.device_loan.app.command.notification_dispatcher import NotificationDispatcher
from src.service.device_loan.app.dto.reservation_patch import ReservationPatch
from src.service.device_loan.domain.entity.reservation_entity import Reservation


class CancelReservationUseCase:
    """
    Cancel a pending reservation and hand its unit back.

    Flow:
    1. Lock the reservation row (FOR UPDATE) and validate owner + status
    2. status -> cancelled, unit -> available, commit
    3. After commit: schedule waitlist notification in the background

    Step 3 never fails the cancellation.
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        background_task_runner: IBackgroundTaskRunner,
        notification_dispatcher: NotificationDispatcher,
    ) -> None:
        self.uow = uow
        self.background_task_runner = background_task_runner
        self.notification_dispatcher = notification_dispatcher

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        background_task_runner: IBackgroundTaskRunner = Depends(
            Provide[Container.background_task_runner]
        ),
        notification_dispatcher: NotificationDispatcher = Depends(
            Provide[Container.notification_dispatcher]
        ),
    ) -> Self:
        return cls(
            uow=uow,
            background_task_runner=background_task_runner,
            notification_dispatcher=notification_dispatcher,
        )

    @Logger.io
    async def execute(self, *, user_id: UUID, reservation_id: UUID) -> Reservation:
        async with self.uow:
            reservation = await self.uow.reservation_command_repo.get_for_update(
                reservation_id=reservation_id
            )
            if reservation is None:
                raise NotFoundError('Reservation not found')

            if reservation.user_id != user_id:
                raise ForbiddenError('Only the owner can cancel this reservation')

            cancelled = reservation.cancel()
            reservation = await self.uow.reservation_command_repo.update(
                reservation_id=reservation_id,
                patch=ReservationPatch(status=cancelled.status),
            )
            await self.uow.inventory_command_repo.release(inventory_id=reservation.inventory_id)
            await self.uow.commit()

        Logger.base.info(
            f'🚫 [CANCEL] Reservation {reservation_id} cancelled, '
            f'unit {reservation.inventory_id} released'
        )

        self.background_task_runner.submit(
            partial(self.notification_dispatcher.notify_next_user, device_id=reservation.device_id),
            name=f'notify-waitlist:{reservation.device_id}',
        )
        return reservation
