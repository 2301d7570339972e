"""
Caller identity

Authentication happens upstream (gateway / auth service); requests reach this
service with the authenticated user's id in the X-User-Id header.
"""

from typing import Annotated

from fastapi import Header
from uuid_utils import UUID

from src.platform.constant.route_constant import USER_ID_HEADER
from src.platform.exception.exceptions import ValidationError


async def get_current_user_id(
    x_user_id: Annotated[str | None, Header(alias=USER_ID_HEADER)] = None,
) -> UUID:
    if not x_user_id:
        raise ValidationError(f'{USER_ID_HEADER} header is required')
    try:
        return UUID(x_user_id)
    except ValueError as e:
        raise ValidationError(f'{USER_ID_HEADER} header must be a UUID') from e
