"""
Production FastAPI Application

Reservation and waitlist API plus the background task group that runs
post-commit waitlist notifications.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import anyio
from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.asyncpg_setting import (
    close_all_asyncpg_pools,
    get_asyncpg_pool,
    warmup_asyncpg_pool,
)
from src.platform.database.orm_db_setting import dispose_engine, get_engine
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Device Service] Starting up...')

    # Setup OpenTelemetry tracing
    tracing = TracingConfig(service_name='device-reservation-service')
    tracing.setup()
    Logger.base.info('📊 [Device Service] OpenTelemetry tracing configured')

    # Wire dependency injection for all modules
    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Device Service] Dependency injection wired')

    tracing.instrument_sqlalchemy(engine=get_engine())
    Logger.base.info('🗄️  [Device Service] Database engine ready + instrumented')

    # Initialize asyncpg connection pool (eager initialization)
    await get_asyncpg_pool()
    await warmup_asyncpg_pool()
    Logger.base.info('🏊 [Device Service] Asyncpg pool initialized and warmed up')

    # Task group for post-commit background work (waitlist notification)
    async with anyio.create_task_group() as tg:
        container.task_group.override(tg)
        Logger.base.info('✅ [Device Service] Ready to serve requests')

        yield

        Logger.base.info('🛑 [Device Service] Shutting down...')
        container.task_group.reset_override()
        tg.cancel_scope.cancel()

    await close_all_asyncpg_pools()
    await dispose_engine()
    Logger.base.info('🏊 [Device Service] Database connections closed')

    tracing.shutdown()
    container.unwire()

    Logger.base.info('👋 [Device Service] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
