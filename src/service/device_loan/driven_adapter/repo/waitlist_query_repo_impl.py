from typing import List

from uuid_utils import UUID

from src.platform.database.db_setting import get_asyncpg_pool
from src.platform.logging.loguru_io import Logger
from src.service.device_loan.app.interface.i_waitlist_query_repo import IWaitlistQueryRepo
from src.service.device_loan.domain.entity.waitlist_entry_entity import WaitlistEntry
from src.service.device_loan.driven_adapter.repo.row_mapping import (
    WAITLIST_COLUMNS,
    row_to_waitlist_entry,
)


class WaitlistQueryRepoImpl(IWaitlistQueryRepo):
    @Logger.io
    async def list_by_user(self, *, user_id: UUID) -> List[WaitlistEntry]:
        async with (await get_asyncpg_pool()).acquire() as conn:
            rows = await conn.fetch(
                f"""
                SELECT {WAITLIST_COLUMNS}
                FROM waitlist
                WHERE user_id = $1
                ORDER BY added_at ASC, waitlist_id ASC
                """,
                user_id,
            )
            return [row_to_waitlist_entry(row) for row in rows]
