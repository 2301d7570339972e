from abc import ABC, abstractmethod

from uuid_utils import UUID

from src.service.device_loan.domain.entity.device_entity import Device


class IDeviceQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, device_id: UUID) -> Device | None:
        """Soft-deleted devices are treated as missing"""
        pass
