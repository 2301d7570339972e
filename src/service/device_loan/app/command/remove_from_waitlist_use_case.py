from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.device_loan_metrics import metrics
from src.service.device_loan.app.interface.i_waitlist_command_repo import IWaitlistCommandRepo


class RemoveFromWaitlistUseCase:
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
    async def execute(self, *, user_id: UUID, device_id: UUID) -> None:
        # Notified entries are history and cannot be removed
        removed = await self.waitlist_command_repo.remove_pending(
            user_id=user_id, device_id=device_id
        )
        if not removed:
            metrics.record_waitlist_operation(operation='remove', result='not_found')
            raise NotFoundError('Waitlist entry not found')

        metrics.record_waitlist_operation(operation='remove', result='success')
        Logger.base.info(f'🗑️  [WAITLIST] User {user_id} left waitlist for device {device_id}')
