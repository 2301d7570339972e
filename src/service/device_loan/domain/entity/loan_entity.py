from datetime import datetime, timezone
from typing import Optional

import attrs
from uuid_utils import UUID


@attrs.define
class Loan:
    id: UUID
    reservation_id: UUID
    collected_at: datetime
    returned_at: Optional[datetime] = None

    @classmethod
    def start(cls, *, id: UUID, reservation_id: UUID) -> 'Loan':
        return cls(id=id, reservation_id=reservation_id, collected_at=datetime.now(timezone.utc))
