from typing import List

from fastapi import APIRouter, Depends, Response, status
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.platform.types import UtilsUUID7
from src.service.device_loan.app.command.join_waitlist_use_case import JoinWaitlistUseCase
from src.service.device_loan.app.command.remove_from_waitlist_use_case import (
    RemoveFromWaitlistUseCase,
)
from src.service.device_loan.app.query.get_waitlist_position_use_case import (
    GetWaitlistPositionUseCase,
)
from src.service.device_loan.app.query.list_user_waitlist_use_case import (
    ListUserWaitlistUseCase,
)
from src.service.device_loan.driving_adapter.http_controller.auth.current_user import (
    get_current_user_id,
)
from src.service.device_loan.driving_adapter.http_controller.schema.waitlist_schema import (
    WaitlistEntryResponse,
    WaitlistJoinRequest,
    WaitlistJoinResponse,
    WaitlistPositionResponse,
)


router = APIRouter()


@router.get('/my_waitlist', response_model=List[WaitlistEntryResponse])
@Logger.io
async def list_my_waitlist(
    user_id: UUID = Depends(get_current_user_id),
    use_case: ListUserWaitlistUseCase = Depends(ListUserWaitlistUseCase.depends),
) -> List[WaitlistEntryResponse]:
    entries = await use_case.execute(user_id=user_id)
    return [WaitlistEntryResponse.from_entity(entry) for entry in entries]


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def join_waitlist(
    request: WaitlistJoinRequest,
    user_id: UUID = Depends(get_current_user_id),
    use_case: JoinWaitlistUseCase = Depends(JoinWaitlistUseCase.depends),
) -> WaitlistJoinResponse:
    result = await use_case.execute(user_id=user_id, device_id=request.device_id)
    return WaitlistJoinResponse(
        entry=WaitlistEntryResponse.from_entity(result.entry),
        position=result.position,
    )


@router.delete('/{device_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
async def remove_from_waitlist(
    device_id: UtilsUUID7,
    user_id: UUID = Depends(get_current_user_id),
    use_case: RemoveFromWaitlistUseCase = Depends(RemoveFromWaitlistUseCase.depends),
) -> Response:
    await use_case.execute(user_id=user_id, device_id=device_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get('/{device_id}/position')
@Logger.io
async def get_waitlist_position(
    device_id: UtilsUUID7,
    user_id: UUID = Depends(get_current_user_id),
    use_case: GetWaitlistPositionUseCase = Depends(GetWaitlistPositionUseCase.depends),
) -> WaitlistPositionResponse:
    position = await use_case.execute(user_id=user_id, device_id=device_id)
    return WaitlistPositionResponse(device_id=device_id, position=position)
