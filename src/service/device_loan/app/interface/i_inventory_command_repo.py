from abc import ABC, abstractmethod

from uuid_utils import UUID

from src.service.device_loan.domain.entity.inventory_unit_entity import InventoryUnit


class IInventoryCommandRepo(ABC):
    @abstractmethod
    async def release(self, *, inventory_id: UUID) -> InventoryUnit | None:
        """
        Make the unit available again

        Returns:
            The released unit, or None if it no longer exists
        """
        pass
