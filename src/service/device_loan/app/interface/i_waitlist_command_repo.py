from abc import ABC, abstractmethod

from uuid_utils import UUID

from src.service.device_loan.domain.entity.waitlist_entry_entity import WaitlistEntry


class IWaitlistCommandRepo(ABC):
    """
    FIFO waitlist per device.

    Order is (added_at, id) ascending. Only un-notified entries take part in
    the queue; at most one un-notified entry exists per (user, device).
    """

    @abstractmethod
    async def find_pending(self, *, user_id: UUID, device_id: UUID) -> WaitlistEntry | None:
        """The caller's un-notified entry for the device, if any"""
        pass

    @abstractmethod
    async def add(self, *, entry: WaitlistEntry) -> WaitlistEntry:
        """
        Insert a new un-notified entry

        Raises:
            AlreadyJoinedError: an un-notified entry for (user, device) already exists
        """
        pass

    @abstractmethod
    async def get_position(self, *, entry: WaitlistEntry) -> int:
        """1 + number of un-notified entries of the same device ordered before `entry`"""
        pass

    @abstractmethod
    async def remove_pending(self, *, user_id: UUID, device_id: UUID) -> bool:
        """
        Delete the caller's un-notified entry

        Returns:
            False when there was nothing to delete
        """
        pass

    @abstractmethod
    async def get_next_user(self, *, device_id: UUID) -> WaitlistEntry | None:
        """Earliest un-notified entry of the device"""
        pass

    @abstractmethod
    async def mark_as_notified(self, *, entry_id: UUID) -> WaitlistEntry | None:
        pass
