from typing import Optional

import attrs
from uuid_utils import UUID


@attrs.define
class Device:
    id: UUID
    brand: str
    model: str
    category: str = ''
    description: Optional[str] = None
    default_loan_duration_days: Optional[int] = None
    is_deleted: bool = False

    def loan_duration_days(self, *, fallback: int) -> int:
        return self.default_loan_duration_days or fallback
