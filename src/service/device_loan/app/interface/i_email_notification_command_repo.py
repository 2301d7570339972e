from abc import ABC, abstractmethod

from src.service.device_loan.domain.entity.email_notification_entity import (
    EmailNotification,
)


class IEmailNotificationCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, notification: EmailNotification) -> EmailNotification:
        pass
