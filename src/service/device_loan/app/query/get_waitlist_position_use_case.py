from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.device_loan.app.interface.i_waitlist_command_repo import IWaitlistCommandRepo


class GetWaitlistPositionUseCase:
    def __init__(self, *, waitlist_command_repo: IWaitlistCommandRepo) -> None:
        self.waitlist_command_repo = waitlist_command_repo

    @classmethod
    @inject
    def depends(
        cls,
        waitlist_command_repo: IWaitlistCommandRepo = Depends(
            Provide[Container.waitlist_command_repo]
        ),
    ) -> Self:
        return cls(waitlist_command_repo=waitlist_command_repo)

    @Logger.io
    async def execute(self, *, user_id: UUID, device_id: UUID) -> int:
        """Current 1-based queue position of the caller's pending entry"""
        entry = await self.waitlist_command_repo.find_pending(user_id=user_id, device_id=device_id)
        if entry is None:
            raise NotFoundError('Waitlist entry not found')
        return await self.waitlist_command_repo.get_position(entry=entry)
