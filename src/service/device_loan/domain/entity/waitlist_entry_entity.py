from datetime import datetime, timezone
from typing import Optional

import attrs
from uuid_utils import UUID


@attrs.define
class WaitlistEntry:
    """
    A requester queued for a device.

    Queue order per device is (added_at, id) ascending. An entry is pending
    until a notification is confirmed delivered; notified entries are kept
    as history and never re-enter the queue.
    """

    id: UUID
    user_id: UUID
    device_id: UUID
    added_at: datetime
    is_notified: bool = False
    notified_at: Optional[datetime] = None

    @classmethod
    def create(cls, *, id: UUID, user_id: UUID, device_id: UUID) -> 'WaitlistEntry':
        return cls(
            id=id,
            user_id=user_id,
            device_id=device_id,
            added_at=datetime.now(timezone.utc),
            is_notified=False,
            notified_at=None,
        )

    def mark_as_notified(self, *, notified_at: Optional[datetime] = None) -> 'WaitlistEntry':
        return attrs.evolve(
            self,
            is_notified=True,
            notified_at=notified_at or datetime.now(timezone.utc),
        )
