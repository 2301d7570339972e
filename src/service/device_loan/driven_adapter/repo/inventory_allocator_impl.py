"""
Inventory Allocator (PostgreSQL skip-locked claim)

A single statement picks a free unit and flips it to unavailable under the
row lock it just took. Rows locked by a concurrent claim are skipped, so
concurrent reservers never queue behind each other: each either gets a
different unit or sees none.
"""

import asyncpg
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.service.device_loan.app.interface.i_inventory_allocator import IInventoryAllocator


class InventoryAllocatorImpl(IInventoryAllocator):
    def __init__(self, *, conn: asyncpg.Connection) -> None:
        self.conn = conn

    @Logger.io
    async def acquire(self, *, device_id: UUID) -> UUID | None:
        inventory_id = await self.conn.fetchval(
            """
            UPDATE device_inventory
            SET is_available = false
            WHERE inventory_id = (
                SELECT inventory_id
                FROM device_inventory
                WHERE device_id = $1
                  AND is_available = true
                ORDER BY created_at, inventory_id
                FOR UPDATE SKIP LOCKED
                LIMIT 1
            )
            RETURNING inventory_id
            """,
            device_id,
        )

        if inventory_id is None:
            Logger.base.info(f'📭 [ALLOCATE] No free unit for device {device_id}')
        return inventory_id
