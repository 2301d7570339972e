from abc import ABC, abstractmethod
from typing import List

from uuid_utils import UUID

from src.service.device_loan.domain.entity.waitlist_entry_entity import WaitlistEntry


class IWaitlistQueryRepo(ABC):
    @abstractmethod
    async def list_by_user(self, *, user_id: UUID) -> List[WaitlistEntry]:
        """Every entry of the user, notified ones included, oldest first"""
        pass
