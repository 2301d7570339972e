"""
Database entry points

- orm_db_setting.py: SQLAlchemy engine + declarative Base (schema ownership)
- asyncpg_setting.py: asyncpg connection pool (all runtime queries)
"""

from src.platform.database.asyncpg_setting import (
    close_all_asyncpg_pools,
    close_asyncpg_pool,
    get_asyncpg_pool,
    warmup_asyncpg_pool,
)
from src.platform.database.orm_db_setting import (
    Base,
    dispose_engine,
    get_engine,
)

__all__ = [
    # SQLAlchemy
    'Base',
    'get_engine',
    'dispose_engine',
    # asyncpg
    'get_asyncpg_pool',
    'warmup_asyncpg_pool',
    'close_asyncpg_pool',
    'close_all_asyncpg_pools',
]
