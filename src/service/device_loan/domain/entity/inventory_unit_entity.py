from datetime import datetime
from typing import Optional

import attrs
from uuid_utils import UUID


@attrs.define
class InventoryUnit:
    id: UUID
    device_id: UUID
    serial_number: str
    is_available: bool = True
    created_at: Optional[datetime] = None
