import asyncpg
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.service.device_loan.app.interface.i_inventory_command_repo import IInventoryCommandRepo
from src.service.device_loan.domain.entity.inventory_unit_entity import InventoryUnit
from src.service.device_loan.driven_adapter.repo.row_mapping import row_to_inventory_unit


class InventoryCommandRepoImpl(IInventoryCommandRepo):
    def __init__(self, *, conn: asyncpg.Connection) -> None:
        self.conn = conn

    @Logger.io
    async def release(self, *, inventory_id: UUID) -> InventoryUnit | None:
        row = await self.conn.fetchrow(
            """
            UPDATE device_inventory
            SET is_available = true
            WHERE inventory_id = $1
            RETURNING inventory_id, device_id, serial_number, is_available, created_at
            """,
            inventory_id,
        )
        if not row:
            Logger.base.warning(f'⚠️  [INVENTORY] Unit {inventory_id} not found on release')
            return None
        return row_to_inventory_unit(row)
