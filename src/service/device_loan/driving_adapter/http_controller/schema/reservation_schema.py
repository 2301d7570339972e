from datetime import datetime

from pydantic import BaseModel

from src.platform.types import UtilsUUID7
from src.service.device_loan.domain.entity.reservation_entity import Reservation


class ReservationCreateRequest(BaseModel):
    device_id: UtilsUUID7

    class Config:
        json_schema_extra = {'example': {'device_id': '01936d8f-5e73-7c4e-a9c5-123456789abc'}}


class ReservationResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': '01936d8f-6a10-7c4e-a9c5-123456789abc',  # UUID7
                'user_id': '01936d8f-5e73-7c4e-a9c5-000000000001',
                'device_id': '01936d8f-5e73-7c4e-a9c5-123456789abc',
                'inventory_id': '01936d8f-5e73-7c4e-a9c5-00000000aaaa',
                'reserved_at': '2025-01-10T10:30:00Z',
                'due_date': '2025-01-12T10:30:00Z',
                'status': 'pending',
            }
        },
    }

    id: UtilsUUID7
    user_id: UtilsUUID7
    device_id: UtilsUUID7
    inventory_id: UtilsUUID7
    reserved_at: datetime
    due_date: datetime
    status: str

    @classmethod
    def from_entity(cls, reservation: Reservation) -> 'ReservationResponse':
        return cls(
            id=reservation.id,
            user_id=reservation.user_id,
            device_id=reservation.device_id,
            inventory_id=reservation.inventory_id,
            reserved_at=reservation.reserved_at,
            due_date=reservation.due_date,
            status=reservation.status.value,
        )
