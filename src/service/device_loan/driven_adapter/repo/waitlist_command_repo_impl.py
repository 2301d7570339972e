"""
Waitlist Command Repository Implementation

FIFO per device by (added_at, waitlist_id). The partial unique index
uq_waitlist_user_device_pending guarantees at most one un-notified entry per
(user, device) even when two joins race.
"""

import asyncpg
from uuid_utils import UUID

from src.platform.database.db_setting import get_asyncpg_pool
from src.platform.logging.loguru_io import Logger
from src.service.device_loan.app.interface.i_waitlist_command_repo import IWaitlistCommandRepo
from src.service.device_loan.domain.device_loan_errors import AlreadyJoinedError
from src.service.device_loan.domain.entity.waitlist_entry_entity import WaitlistEntry
from src.service.device_loan.driven_adapter.repo.row_mapping import (
    WAITLIST_COLUMNS,
    row_to_waitlist_entry,
)


class WaitlistCommandRepoImpl(IWaitlistCommandRepo):
    @Logger.io
    async def find_pending(self, *, user_id: UUID, device_id: UUID) -> WaitlistEntry | None:
        async with (await get_asyncpg_pool()).acquire() as conn:
            row = await conn.fetchrow(
                f"""
                SELECT {WAITLIST_COLUMNS}
                FROM waitlist
                WHERE user_id = $1 AND device_id = $2 AND is_notified = false
                """,
                user_id,
                device_id,
            )
            return row_to_waitlist_entry(row) if row else None

    @Logger.io
    async def add(self, *, entry: WaitlistEntry) -> WaitlistEntry:
        async with (await get_asyncpg_pool()).acquire() as conn:
            try:
                row = await conn.fetchrow(
                    f"""
                    INSERT INTO waitlist (
                        waitlist_id, user_id, device_id, added_at, is_notified, notified_at
                    )
                    VALUES ($1, $2, $3, $4, $5, $6)
                    RETURNING {WAITLIST_COLUMNS}
                    """,
                    entry.id,
                    entry.user_id,
                    entry.device_id,
                    entry.added_at,
                    entry.is_notified,
                    entry.notified_at,
                )
            except asyncpg.UniqueViolationError as e:
                raise AlreadyJoinedError() from e
            return row_to_waitlist_entry(row)

    @Logger.io
    async def get_position(self, *, entry: WaitlistEntry) -> int:
        async with (await get_asyncpg_pool()).acquire() as conn:
            ahead = await conn.fetchval(
                """
                SELECT COUNT(*)
                FROM waitlist
                WHERE device_id = $1
                  AND is_notified = false
                  AND (added_at, waitlist_id) < ($2, $3)
                """,
                entry.device_id,
                entry.added_at,
                entry.id,
            )
            return int(ahead) + 1

    @Logger.io
    async def remove_pending(self, *, user_id: UUID, device_id: UUID) -> bool:
        async with (await get_asyncpg_pool()).acquire() as conn:
            deleted_id = await conn.fetchval(
                """
                DELETE FROM waitlist
                WHERE user_id = $1 AND device_id = $2 AND is_notified = false
                RETURNING waitlist_id
                """,
                user_id,
                device_id,
            )
            return deleted_id is not None

    @Logger.io
    async def get_next_user(self, *, device_id: UUID) -> WaitlistEntry | None:
        async with (await get_asyncpg_pool()).acquire() as conn:
            row = await conn.fetchrow(
                f"""
                SELECT {WAITLIST_COLUMNS}
                FROM waitlist
                WHERE device_id = $1 AND is_notified = false
                ORDER BY added_at ASC, waitlist_id ASC
                LIMIT 1
                """,
                device_id,
            )
            return row_to_waitlist_entry(row) if row else None

    @Logger.io
    async def mark_as_notified(self, *, entry_id: UUID) -> WaitlistEntry | None:
        async with (await get_asyncpg_pool()).acquire() as conn:
            # Keep the first notified_at if the entry was already marked
            row = await conn.fetchrow(
                f"""
                UPDATE waitlist
                SET is_notified = true,
                    notified_at = COALESCE(notified_at, now())
                WHERE waitlist_id = $1
                RETURNING {WAITLIST_COLUMNS}
                """,
                entry_id,
            )
            return row_to_waitlist_entry(row) if row else None
