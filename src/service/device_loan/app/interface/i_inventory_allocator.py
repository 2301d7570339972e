from abc import ABC, abstractmethod

from uuid_utils import UUID


class IInventoryAllocator(ABC):
    """
    Claims one free inventory unit for a device inside the caller's transaction.

    Implementations must never block on a unit another transaction is claiming:
    a locked candidate is skipped, not waited for.
    """

    @abstractmethod
    async def acquire(self, *, device_id: UUID) -> UUID | None:
        """
        Mark one available unit of the device as unavailable.

        Returns:
            The claimed inventory_id, or None when no unit is free
            (every candidate is taken or currently locked)
        """
        pass
