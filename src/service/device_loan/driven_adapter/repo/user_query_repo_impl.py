from uuid_utils import UUID

from src.platform.database.db_setting import get_asyncpg_pool
from src.platform.logging.loguru_io import Logger
from src.service.device_loan.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.device_loan.domain.entity.user_entity import User
from src.service.device_loan.driven_adapter.repo.row_mapping import USER_COLUMNS, row_to_user


class UserQueryRepoImpl(IUserQueryRepo):
    @Logger.io
    async def get_by_id(self, *, user_id: UUID) -> User | None:
        async with (await get_asyncpg_pool()).acquire() as conn:
            row = await conn.fetchrow(
                f"""
                SELECT {USER_COLUMNS}
                FROM users
                WHERE user_id = $1 AND is_deleted = false
                """,
                user_id,
            )
            return row_to_user(row) if row else None
