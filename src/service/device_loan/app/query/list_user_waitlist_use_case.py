from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.device_loan.app.interface.i_waitlist_query_repo import IWaitlistQueryRepo
from src.service.device_loan.domain.entity.waitlist_entry_entity import WaitlistEntry


class ListUserWaitlistUseCase:
    def __init__(self, *, waitlist_query_repo: IWaitlistQueryRepo) -> None:
        self.waitlist_query_repo = waitlist_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        waitlist_query_repo: IWaitlistQueryRepo = Depends(Provide[Container.waitlist_query_repo]),
    ) -> Self:
        return cls(waitlist_query_repo=waitlist_query_repo)

    @Logger.io
    async def execute(self, *, user_id: UUID) -> List[WaitlistEntry]:
        return await self.waitlist_query_repo.list_by_user(user_id=user_id)
