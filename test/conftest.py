"""
Test Configuration and Fixtures

This module provides:
- Test database setup (create database, reset schema, alembic upgrade)
- Per-test table cleanup for integration tests
- The session-scoped TestClient and small seeding helpers

Architecture:
- Unit tests (marked `unit`): pure, no database; never touch these fixtures
- Integration tests: real PostgreSQL with TRUNCATE between tests; skipped
  when the database is unreachable
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings reads POSTGRES_DB at import time
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    if worker_id == 'master':
        os.environ['POSTGRES_DB'] = 'device_reservation_test_db'
    else:
        os.environ['POSTGRES_DB'] = f'device_reservation_test_db_{worker_id}'

    # Create test log directory
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    # Pool size settings for tests
    os.environ.setdefault('DB_POOL_SIZE', '2')
    os.environ.setdefault('DB_POOL_MAX_OVERFLOW', '2')
    os.environ.setdefault('ASYNCPG_POOL_MIN_SIZE', '2')
    os.environ.setdefault('ASYNCPG_POOL_MAX_SIZE', '20')

    # One TestClient serves the whole session from a single client address
    os.environ['RATE_LIMIT_ENABLED'] = 'false'


# Call immediately to set env vars before any imports
_early_setup_test_environment()

import asyncio  # noqa: E402
from collections.abc import AsyncGenerator, Generator  # noqa: E402
import contextlib  # noqa: E402
from typing import Any  # noqa: E402

from alembic import command  # noqa: E402
from alembic.config import Config  # noqa: E402
from dotenv import load_dotenv  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy import text  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402


# =============================================================================
# Database Configuration
# =============================================================================
def _get_db_config() -> dict[str, str]:
    env_file = '.env' if Path('.env').exists() else '.env.example'
    # override=False keeps the POSTGRES_DB chosen above
    load_dotenv(env_file, override=False)

    return {
        'user': os.getenv('POSTGRES_USER', 'postgres'),
        'password': os.getenv('POSTGRES_PASSWORD', 'postgres'),
        'host': os.getenv('POSTGRES_SERVER', 'localhost'),
        'port': os.getenv('POSTGRES_PORT', '5432'),
        'test_db': os.getenv('POSTGRES_DB', 'device_reservation_test_db'),
    }


def _get_test_database_url() -> str:
    """Get test database URL"""
    cfg = _get_db_config()
    return (
        f'postgresql+asyncpg://{cfg["user"]}:{cfg["password"]}'
        f'@{cfg["host"]}:{cfg["port"]}/{cfg["test_db"]}'
    )


_database_available: bool | None = None


# =============================================================================
# Pytest Hooks: Detect test type and setup accordingly
# =============================================================================
def _is_unit_test_only_run(config: pytest.Config) -> bool:
    markexpr = config.getoption('markexpr', default='')
    if markexpr and 'unit' in str(markexpr) and 'not unit' not in str(markexpr):
        return True

    args = config.args or []
    test_paths = [arg for arg in args if arg and not arg.startswith('-')]
    return bool(test_paths and all('/unit/' in path or '\\unit\\' in path for path in test_paths))


def pytest_sessionstart(session: pytest.Session) -> None:
    global _database_available
    if _is_unit_test_only_run(session.config):
        return

    try:
        asyncio.run(_reset_test_database())
        # env.py drives its own event loop, so this must run outside asyncio.run
        _run_migrations()
    except (OSError, ConnectionError) as e:
        _database_available = False
        print(f'\n⚠️  Test database unavailable, integration tests will be skipped: {e}')
        return

    _database_available = True


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    skip_integration = pytest.mark.skip(reason='PostgreSQL test database is not reachable')
    for item in items:
        markers = [m.name for m in item.iter_markers()]
        if 'unit' in markers:
            continue
        if _database_available is False:
            item.add_marker(skip_integration)
            continue
        item.fixturenames.append('clean_database')


# =============================================================================
# Database Setup and Cleanup
# =============================================================================
async def _reset_test_database() -> None:
    db_url = _get_test_database_url()
    cfg = _get_db_config()

    # Create database if not exists
    postgres_url = db_url.replace(f'/{cfg["test_db"]}', '/postgres')
    engine = create_async_engine(postgres_url, isolation_level='AUTOCOMMIT')
    try:
        async with engine.begin() as conn:
            result = await conn.execute(
                text('SELECT 1 FROM pg_database WHERE datname = :name'), {'name': cfg['test_db']}
            )
            if not result.fetchone():
                await conn.execute(text(f'CREATE DATABASE {cfg["test_db"]}'))
    finally:
        await engine.dispose()

    # Reset schema so migrations start from scratch
    reset_engine = create_async_engine(db_url)
    try:
        async with reset_engine.begin() as conn:
            await conn.execute(text('DROP SCHEMA public CASCADE'))
            await conn.execute(text('CREATE SCHEMA public'))
    finally:
        await reset_engine.dispose()


def _run_migrations() -> None:
    from src.platform.constant.path import ALEMBIC_INI_PATH

    alembic_cfg = Config(str(ALEMBIC_INI_PATH))
    alembic_cfg.set_main_option('sqlalchemy.url', _get_test_database_url())
    command.upgrade(alembic_cfg, 'head')


_cached_tables: list[str] | None = None


async def _clean_all_tables() -> None:
    global _cached_tables
    engine = create_async_engine(_get_test_database_url())
    try:
        async with engine.begin() as conn:
            if _cached_tables is None:
                result = await conn.execute(
                    text(
                        "SELECT tablename FROM pg_tables WHERE schemaname = 'public' "
                        "AND tablename != 'alembic_version'"
                    )
                )
                _cached_tables = [row[0] for row in result]

            if _cached_tables:
                quoted = [f'"{t}"' for t in _cached_tables]
                await conn.execute(text(f'TRUNCATE {", ".join(quoted)} RESTART IDENTITY CASCADE'))
    finally:
        await engine.dispose()


# =============================================================================
# Integration Test Fixtures
# =============================================================================
@pytest.fixture(scope='function')
async def clean_database() -> AsyncGenerator[None, None]:
    await _clean_all_tables()
    yield

    from src.platform.database.asyncpg_setting import close_asyncpg_pool

    # Pools are bound to the test's event loop; drop it before the loop goes away
    with contextlib.suppress(Exception):
        await close_asyncpg_pool()


@pytest.fixture(scope='session')
def client() -> Generator[TestClient, None, None]:
    from test.test_main import app

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def execute_sql_statement() -> Any:
    """
    Run a statement against the test database from sync tests
    (TestClient-based tests cannot await).
    """

    def _execute(
        statement: str, params: dict[str, Any] | None = None, fetch: bool = False
    ) -> list[dict[str, Any]] | None:
        async def _run() -> list[dict[str, Any]] | None:
            engine = create_async_engine(_get_test_database_url())
            try:
                async with engine.begin() as conn:
                    result = await conn.execute(text(statement), params or {})
                    if fetch:
                        return [dict(row._mapping) for row in result]
                    return None
            finally:
                await engine.dispose()

        return asyncio.run(_run())

    return _execute
