import asyncio
from typing import Any

import asyncpg
from uuid_utils import UUID

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


# Global connection pools per event loop
asyncpg_pools: dict[int, asyncpg.Pool] = {}


def _uuid_decoder(value: bytes) -> UUID:
    """Decode PostgreSQL UUID binary data to uuid_utils.UUID"""
    return UUID(bytes=value)


def _uuid_encoder(value: Any) -> bytes:
    """Encode uuid_utils.UUID / uuid.UUID / str to binary for PostgreSQL"""
    if isinstance(value, str):
        return UUID(value).bytes
    return value.bytes


async def _init_connection(conn: asyncpg.Connection) -> None:
    await conn.set_type_codec(
        'uuid',
        encoder=_uuid_encoder,
        decoder=_uuid_decoder,
        schema='pg_catalog',
        format='binary',
    )


async def get_asyncpg_pool() -> asyncpg.Pool:
    current_loop = asyncio.get_running_loop()
    loop_id = id(current_loop)

    # Fast path: pool already exists for this loop
    if loop_id in asyncpg_pools:
        return asyncpg_pools[loop_id]

    # Slow path: create new pool (should only happen at startup)
    dsn = settings.DATABASE_URL_ASYNC.replace('postgresql+asyncpg://', 'postgresql://')

    pool = await asyncpg.create_pool(
        dsn,
        min_size=settings.ASYNCPG_POOL_MIN_SIZE,
        max_size=settings.ASYNCPG_POOL_MAX_SIZE,
        command_timeout=settings.ASYNCPG_POOL_COMMAND_TIMEOUT,
        max_inactive_connection_lifetime=settings.ASYNCPG_POOL_MAX_INACTIVE_LIFETIME,
        timeout=settings.ASYNCPG_POOL_TIMEOUT,
        max_queries=settings.ASYNCPG_POOL_MAX_QUERIES,
        init=_init_connection,  # Register uuid_utils codec on every connection
    )
    asyncpg_pools[loop_id] = pool
    Logger.base.info(
        f'🏊 [Pool] Created asyncpg pool (min={pool.get_min_size()}, max={pool.get_max_size()})'
    )

    return pool


async def warmup_asyncpg_pool() -> int:
    """
    Acquire MIN_SIZE connections and release them again so the first requests
    do not pay the connect cost.
    """
    pool = await get_asyncpg_pool()
    connections: list[asyncpg.Connection] = []

    Logger.base.info(
        f'🔥 [Pool Warmup] Starting warmup (target={settings.ASYNCPG_POOL_MIN_SIZE})...'
    )
    try:
        for i in range(settings.ASYNCPG_POOL_MIN_SIZE):
            try:
                connections.append(await pool.acquire(timeout=5.0))
            except asyncio.TimeoutError:
                Logger.base.warning(f'⚠️  [Pool Warmup] Timeout at {i + 1} connections')
                break
    finally:
        for conn in connections:
            await pool.release(conn)

    Logger.base.info(
        f'✅ [Pool Warmup] Completed: {len(connections)} connections ready '
        f'(size={pool.get_size()}, idle={pool.get_idle_size()})'
    )
    return len(connections)


async def close_asyncpg_pool() -> None:
    """Close the pool bound to the current event loop only."""
    loop_id = id(asyncio.get_running_loop())

    if pool := asyncpg_pools.pop(loop_id, None):
        await pool.close()


async def close_all_asyncpg_pools() -> None:
    """Close every pool. Only call this during application shutdown."""
    for pool in list(asyncpg_pools.values()):
        try:
            await pool.close()
        except Exception as e:
            Logger.base.warning(f'⚠️  [Pool] Error while closing pool: {e}')
    asyncpg_pools.clear()
