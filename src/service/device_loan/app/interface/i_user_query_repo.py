from abc import ABC, abstractmethod

from uuid_utils import UUID

from src.service.device_loan.domain.entity.user_entity import User


class IUserQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, user_id: UUID) -> User | None:
        pass
