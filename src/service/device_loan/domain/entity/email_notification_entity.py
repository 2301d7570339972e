from datetime import datetime, timezone
from typing import Optional

import attrs
from uuid_utils import UUID

from src.service.device_loan.domain.enum.notification_status import NotificationStatus


@attrs.define
class EmailNotification:
    """Delivery audit record, one per notification trigger"""

    id: UUID
    user_id: UUID
    email_address: str
    subject: str
    body: str
    status: NotificationStatus = NotificationStatus.PENDING
    attempts: int = 0
    error_message: Optional[str] = None
    sent_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @classmethod
    def sent(
        cls,
        *,
        id: UUID,
        user_id: UUID,
        email_address: str,
        subject: str,
        body: str,
        attempts: int,
    ) -> 'EmailNotification':
        now = datetime.now(timezone.utc)
        return cls(
            id=id,
            user_id=user_id,
            email_address=email_address,
            subject=subject,
            body=body,
            status=NotificationStatus.SENT,
            attempts=attempts,
            sent_at=now,
            created_at=now,
        )

    @classmethod
    def failed(
        cls,
        *,
        id: UUID,
        user_id: UUID,
        email_address: str,
        subject: str,
        body: str,
        attempts: int,
        error_message: str,
    ) -> 'EmailNotification':
        return cls(
            id=id,
            user_id=user_id,
            email_address=email_address,
            subject=subject,
            body=body,
            status=NotificationStatus.FAILED,
            attempts=attempts,
            error_message=error_message,
            created_at=datetime.now(timezone.utc),
        )
