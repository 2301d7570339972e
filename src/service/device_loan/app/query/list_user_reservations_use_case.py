from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.device_loan.app.interface.i_reservation_query_repo import IReservationQueryRepo
from src.service.device_loan.domain.entity.reservation_entity import Reservation


class ListUserReservationsUseCase:
    def __init__(self, *, reservation_query_repo: IReservationQueryRepo) -> None:
        self.reservation_query_repo = reservation_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        reservation_query_repo: IReservationQueryRepo = Depends(
            Provide[Container.reservation_query_repo]
        ),
    ) -> Self:
        return cls(reservation_query_repo=reservation_query_repo)

    @Logger.io
    async def execute(self, *, user_id: UUID, status: str = '') -> List[Reservation]:
        return await self.reservation_query_repo.list_by_user(user_id=user_id, status=status)
