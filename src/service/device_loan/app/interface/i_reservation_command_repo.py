from abc import ABC, abstractmethod

from uuid_utils import UUID

from src.service.device_loan.app.dto.reservation_patch import ReservationPatch
from src.service.device_loan.domain.entity.reservation_entity import Reservation


class IReservationCommandRepo(ABC):
    """Reservation writes, bound to the unit of work's transaction"""

    @abstractmethod
    async def create(self, *, reservation: Reservation) -> Reservation:
        pass

    @abstractmethod
    async def get_for_update(self, *, reservation_id: UUID) -> Reservation | None:
        """
        Load a reservation and hold its row lock until the transaction ends

        Returns:
            Reservation entity or None if not found
        """
        pass

    @abstractmethod
    async def update(self, *, reservation_id: UUID, patch: ReservationPatch) -> Reservation:
        """Apply the non-None fields of `patch` and return the updated row"""
        pass
