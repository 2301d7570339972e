from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.platform.types import UtilsUUID7
from src.service.device_loan.domain.entity.waitlist_entry_entity import WaitlistEntry


class WaitlistJoinRequest(BaseModel):
    device_id: UtilsUUID7

    class Config:
        json_schema_extra = {'example': {'device_id': '01936d8f-5e73-7c4e-a9c5-123456789abc'}}


class WaitlistEntryResponse(BaseModel):
    id: UtilsUUID7
    user_id: UtilsUUID7
    device_id: UtilsUUID7
    added_at: datetime
    is_notified: bool
    notified_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, entry: WaitlistEntry) -> 'WaitlistEntryResponse':
        return cls(
            id=entry.id,
            user_id=entry.user_id,
            device_id=entry.device_id,
            added_at=entry.added_at,
            is_notified=entry.is_notified,
            notified_at=entry.notified_at,
        )


class WaitlistJoinResponse(BaseModel):
    entry: WaitlistEntryResponse
    position: int


class WaitlistPositionResponse(BaseModel):
    device_id: UtilsUUID7
    position: int

    class Config:
        json_schema_extra = {
            'example': {'device_id': '01936d8f-5e73-7c4e-a9c5-123456789abc', 'position': 3}
        }
