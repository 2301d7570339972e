from typing import List

from uuid_utils import UUID

from src.platform.database.db_setting import get_asyncpg_pool
from src.platform.logging.loguru_io import Logger
from src.service.device_loan.app.interface.i_reservation_query_repo import IReservationQueryRepo
from src.service.device_loan.domain.entity.reservation_entity import Reservation
from src.service.device_loan.driven_adapter.repo.row_mapping import (
    RESERVATION_COLUMNS,
    row_to_reservation,
)


class ReservationQueryRepoImpl(IReservationQueryRepo):
    @Logger.io
    async def get_by_id(self, *, reservation_id: UUID) -> Reservation | None:
        async with (await get_asyncpg_pool()).acquire() as conn:
            row = await conn.fetchrow(
                f"""
                SELECT {RESERVATION_COLUMNS}
                FROM reservations
                WHERE reservation_id = $1
                """,
                reservation_id,
            )
            return row_to_reservation(row) if row else None

    @Logger.io
    async def list_by_user(self, *, user_id: UUID, status: str = '') -> List[Reservation]:
        async with (await get_asyncpg_pool()).acquire() as conn:
            if status:
                rows = await conn.fetch(
                    f"""
                    SELECT {RESERVATION_COLUMNS}
                    FROM reservations
                    WHERE user_id = $1 AND status = $2
                    ORDER BY reserved_at DESC, reservation_id DESC
                    """,
                    user_id,
                    status,
                )
            else:
                rows = await conn.fetch(
                    f"""
                    SELECT {RESERVATION_COLUMNS}
                    FROM reservations
                    WHERE user_id = $1
                    ORDER BY reserved_at DESC, reservation_id DESC
                    """,
                    user_id,
                )
            return [row_to_reservation(row) for row in rows]
