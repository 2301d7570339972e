from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID, uuid7

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.device_loan.app.dto.reservation_patch import ReservationPatch
from src.service.device_loan.domain.entity.loan_entity import Loan
from src.service.device_loan.domain.entity.reservation_entity import Reservation


class UpdateReservationStatusToCollectedUseCase:
    """pending -> collected; opens a loan. The unit stays unavailable."""

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
    ) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def execute(self, *, reservation_id: UUID) -> Reservation:
        async with self.uow:
            reservation = await self.uow.reservation_command_repo.get_for_update(
                reservation_id=reservation_id
            )
            if reservation is None:
                raise NotFoundError('Reservation not found')

            collected = reservation.collect()
            reservation = await self.uow.reservation_command_repo.update(
                reservation_id=reservation_id,
                patch=ReservationPatch(status=collected.status),
            )
            loan = await self.uow.loan_command_repo.create(
                loan=Loan.start(id=uuid7(), reservation_id=reservation_id)
            )
            await self.uow.commit()

        Logger.base.info(f'📦 [COLLECT] Reservation {reservation_id} collected, loan {loan.id}')
        return reservation
