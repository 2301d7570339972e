import time
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from uuid_utils import UUID, uuid7

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError, ValidationError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.device_loan_metrics import metrics
from src.service.device_loan.app.interface.i_device_query_repo import IDeviceQueryRepo
from src.service.device_loan.domain.device_loan_errors import NoInventoryError
from src.service.device_loan.domain.entity.reservation_entity import Reservation


class ReserveDeviceUseCase:
    """
    Reserve one unit of a device for a user.

    Flow:
    1. Validate ids (before any transaction)
    2. Resolve the device (NotFoundError when missing or soft-deleted)
    3. In one transaction: claim a free unit (skip-locked) -> insert the
       pending reservation -> commit

    No free unit raises NoInventoryError and rolls back; the caller may join
    the waitlist instead. Allocation is never retried here.
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        device_query_repo: IDeviceQueryRepo,
        default_loan_duration_days: int = settings.DEFAULT_LOAN_DURATION_DAYS,
    ) -> None:
        self.uow = uow
        self.device_query_repo = device_query_repo
        self.default_loan_duration_days = default_loan_duration_days
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(Provide[Container.unit_of_work]),
        device_query_repo: IDeviceQueryRepo = Depends(Provide[Container.device_query_repo]),
    ) -> Self:
        return cls(uow=uow, device_query_repo=device_query_repo)

    @Logger.io
    async def execute(self, *, user_id: UUID, device_id: UUID) -> Reservation:
        if not user_id:
            raise ValidationError('user_id is required')
        if not device_id:
            raise ValidationError('device_id is required')

        with self.tracer.start_as_current_span(
            'use_case.reserve_device',
            attributes={'device.id': str(device_id), 'user.id': str(user_id)},
        ):
            started = time.perf_counter()

            device = await self.device_query_repo.get_by_id(device_id=device_id)
            if device is None:
                metrics.record_reservation(result='not_found')
                raise NotFoundError('Device not found')

            async with self.uow:
                inventory_id = await self.uow.inventory_allocator.acquire(device_id=device_id)
                if inventory_id is None:
                    metrics.record_reservation(result='no_inventory')
                    raise NoInventoryError()

                reservation = Reservation.create(
                    id=uuid7(),
                    user_id=user_id,
                    device_id=device_id,
                    inventory_id=inventory_id,
                    loan_duration_days=device.loan_duration_days(
                        fallback=self.default_loan_duration_days
                    ),
                )
                reservation = await self.uow.reservation_command_repo.create(
                    reservation=reservation
                )
                await self.uow.commit()

            metrics.record_reservation(result='success', duration=time.perf_counter() - started)
            Logger.base.info(
                f'✅ [RESERVE] Reservation {reservation.id}: user {user_id} '
                f'got unit {inventory_id} of device {device_id}'
            )
            return reservation
