from typing import List

from fastapi import APIRouter, Depends, status
from opentelemetry import trace
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.platform.types import UtilsUUID7
from src.service.device_loan.app.command.cancel_reservation_use_case import (
    CancelReservationUseCase,
)
from src.service.device_loan.app.command.reserve_device_use_case import ReserveDeviceUseCase
from src.service.device_loan.app.command.update_reservation_status_to_collected_use_case import (
    UpdateReservationStatusToCollectedUseCase,
)
from src.service.device_loan.app.command.update_reservation_status_to_returned_use_case import (
    UpdateReservationStatusToReturnedUseCase,
)
from src.service.device_loan.app.query.list_user_reservations_use_case import (
    ListUserReservationsUseCase,
)
from src.service.device_loan.driving_adapter.http_controller.auth.current_user import (
    get_current_user_id,
)
from src.service.device_loan.driving_adapter.http_controller.schema.reservation_schema import (
    ReservationCreateRequest,
    ReservationResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.get('/my_reservations', response_model=List[ReservationResponse])
@Logger.io
async def list_my_reservations(
    reservation_status: str = '',
    user_id: UUID = Depends(get_current_user_id),
    use_case: ListUserReservationsUseCase = Depends(ListUserReservationsUseCase.depends),
) -> List[ReservationResponse]:
    reservations = await use_case.execute(user_id=user_id, status=reservation_status)
    return [ReservationResponse.from_entity(reservation) for reservation in reservations]


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def reserve_device(
    request: ReservationCreateRequest,
    user_id: UUID = Depends(get_current_user_id),
    use_case: ReserveDeviceUseCase = Depends(ReserveDeviceUseCase.depends),
) -> ReservationResponse:
    with tracer.start_as_current_span('controller.reserve_device') as span:
        span.set_attribute('device_id', str(request.device_id))
        span.set_attribute('user_id', str(user_id))

        reservation = await use_case.execute(user_id=user_id, device_id=request.device_id)

        span.set_attribute('reservation.id', str(reservation.id))
        return ReservationResponse.from_entity(reservation)


@router.patch('/{reservation_id}/cancel', status_code=status.HTTP_200_OK)
@Logger.io
async def cancel_reservation(
    reservation_id: UtilsUUID7,
    user_id: UUID = Depends(get_current_user_id),
    use_case: CancelReservationUseCase = Depends(CancelReservationUseCase.depends),
) -> ReservationResponse:
    # Waitlist notification runs in the background; the response does not wait for it
    reservation = await use_case.execute(user_id=user_id, reservation_id=reservation_id)
    return ReservationResponse.from_entity(reservation)


@router.patch('/{reservation_id}/collect', status_code=status.HTTP_200_OK)
@Logger.io
async def collect_reservation(
    reservation_id: UtilsUUID7,
    use_case: UpdateReservationStatusToCollectedUseCase = Depends(
        UpdateReservationStatusToCollectedUseCase.depends
    ),
) -> ReservationResponse:
    reservation = await use_case.execute(reservation_id=reservation_id)
    return ReservationResponse.from_entity(reservation)


@router.patch('/{reservation_id}/return', status_code=status.HTTP_200_OK)
@Logger.io
async def return_reservation(
    reservation_id: UtilsUUID7,
    completed: bool = False,
    use_case: UpdateReservationStatusToReturnedUseCase = Depends(
        UpdateReservationStatusToReturnedUseCase.depends
    ),
) -> ReservationResponse:
    reservation = await use_case.execute(reservation_id=reservation_id, completed=completed)
    return ReservationResponse.from_entity(reservation)
