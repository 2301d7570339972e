from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID, uuid7

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError, ValidationError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.device_loan_metrics import metrics
from src.service.device_loan.app.dto.waitlist_join_result import WaitlistJoinResult
from src.service.device_loan.app.interface.i_device_query_repo import IDeviceQueryRepo
from src.service.device_loan.app.interface.i_waitlist_command_repo import IWaitlistCommandRepo
from src.service.device_loan.domain.device_loan_errors import AlreadyJoinedError
from src.service.device_loan.domain.entity.waitlist_entry_entity import WaitlistEntry


class JoinWaitlistUseCase:
    def __init__(
        self,
        *,
        waitlist_command_repo: IWaitlistCommandRepo,
        device_query_repo: IDeviceQueryRepo,
    ) -> None:
        self.waitlist_command_repo = waitlist_command_repo
        self.device_query_repo = device_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        waitlist_command_repo: IWaitlistCommandRepo = Depends(
            Provide[Container.waitlist_command_repo]
        ),
        device_query_repo: IDeviceQueryRepo = Depends(Provide[Container.device_query_repo]),
    ) -> Self:
        return cls(waitlist_command_repo=waitlist_command_repo, device_query_repo=device_query_repo)

    @Logger.io
    async def execute(self, *, user_id: UUID, device_id: UUID) -> WaitlistJoinResult:
        if not user_id or not device_id:
            raise ValidationError('user_id and device_id are required')

        if await self.device_query_repo.get_by_id(device_id=device_id) is None:
            raise NotFoundError('Device not found')

        if await self.waitlist_command_repo.find_pending(user_id=user_id, device_id=device_id):
            metrics.record_waitlist_operation(operation='join', result='already_joined')
            raise AlreadyJoinedError()

        # A concurrent join that slips past the check trips the partial unique index
        try:
            entry = await self.waitlist_command_repo.add(
                entry=WaitlistEntry.create(id=uuid7(), user_id=user_id, device_id=device_id)
            )
        except AlreadyJoinedError:
            metrics.record_waitlist_operation(operation='join', result='already_joined')
            raise

        position = await self.waitlist_command_repo.get_position(entry=entry)
        metrics.record_waitlist_operation(operation='join', result='success')
        Logger.base.info(
            f'📝 [WAITLIST] User {user_id} joined waitlist for device {device_id} at #{position}'
        )
        return WaitlistJoinResult(entry=entry, position=position)
