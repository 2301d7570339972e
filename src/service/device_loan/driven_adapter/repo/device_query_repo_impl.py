from uuid_utils import UUID

from src.platform.database.db_setting import get_asyncpg_pool
from src.platform.logging.loguru_io import Logger
from src.service.device_loan.app.interface.i_device_query_repo import IDeviceQueryRepo
from src.service.device_loan.domain.entity.device_entity import Device
from src.service.device_loan.driven_adapter.repo.row_mapping import DEVICE_COLUMNS, row_to_device


class DeviceQueryRepoImpl(IDeviceQueryRepo):
    @Logger.io
    async def get_by_id(self, *, device_id: UUID) -> Device | None:
        async with (await get_asyncpg_pool()).acquire() as conn:
            row = await conn.fetchrow(
                f"""
                SELECT {DEVICE_COLUMNS}
                FROM devices
                WHERE device_id = $1 AND is_deleted = false
                """,
                device_id,
            )
            return row_to_device(row) if row else None
