"""
Unit test configuration for the device loan service.

Overrides the database fixtures from the parent conftest so unit tests run
without PostgreSQL, and prevents the session-scoped TestClient from starting.
"""

from collections.abc import AsyncGenerator, Generator
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient


@pytest.fixture(autouse=True, scope='function')
async def clean_database() -> AsyncGenerator[None, None]:
    """No-op override for unit tests - no real database needed"""
    yield


@pytest.fixture(scope='session')
def client() -> Generator[MagicMock, None, None]:
    """Mock client for unit tests - prevents TestClient/lifespan from being created"""
    mock_client = MagicMock(spec=TestClient)
    yield mock_client
