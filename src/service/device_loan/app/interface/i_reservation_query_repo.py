from abc import ABC, abstractmethod
from typing import List

from uuid_utils import UUID

from src.service.device_loan.domain.entity.reservation_entity import Reservation


class IReservationQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, reservation_id: UUID) -> Reservation | None:
        pass

    @abstractmethod
    async def list_by_user(self, *, user_id: UUID, status: str = '') -> List[Reservation]:
        """Newest first; an empty status means every status"""
        pass
