# ==============================================================================
# CONFTEST - Pytest Fixtures and Configuration
# ==============================================================================
# Shared fixtures for all tests
# ==============================================================================

from __future__ import annotations

import os
from typing import AsyncGenerator
from uuid import uuid4

import pytest
import pytest_asyncio

# Set test environment before importing the package
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "false"
os.environ["DATABASE_PROVIDER"] = "sqlite"
os.environ["SQLITE_PATH"] = ":memory:"
os.environ["LOG_LEVEL"] = "DEBUG"

from scaffold_db.database.adapters.base_adapter import BaseDatabaseAdapter  # noqa: E402
from scaffold_db.database.adapters.sqlite_adapter import SQLiteAdapter  # noqa: E402
from scaffold_db.database.adapters.supabase_adapter import SupabaseAdapter  # noqa: E402
from scaffold_db.database.factory import DatabaseFactory  # noqa: E402
from scaffold_db.database.tables import metadata  # noqa: E402

from fakes import FakeSupabaseClient, entities_table  # noqa: E402

ALL_TABLES = list(metadata.tables.values()) + [entities_table]


# ==============================================================================
# ADAPTER FIXTURES
# ==============================================================================

@pytest.fixture(autouse=True)
def reset_factory():
    """Each test starts with an empty adapter cache."""
    DatabaseFactory.reset()
    yield
    DatabaseFactory.reset()


@pytest_asyncio.fixture
async def sqlite_adapter(tmp_path) -> AsyncGenerator[SQLiteAdapter, None]:
    """Connected SQLite adapter on a throwaway database file."""
    adapter = SQLiteAdapter(str(tmp_path / "db" / "test.db"))
    await adapter.connect()
    yield adapter
    await adapter.disconnect()


@pytest.fixture
def fake_client() -> FakeSupabaseClient:
    return FakeSupabaseClient(ALL_TABLES)


@pytest_asyncio.fixture
async def supabase_adapter(fake_client) -> AsyncGenerator[SupabaseAdapter, None]:
    """Supabase adapter over the in-memory fake client."""
    adapter = SupabaseAdapter(client=fake_client)
    await adapter.connect()
    yield adapter
    await adapter.disconnect()


@pytest_asyncio.fixture(params=["sqlite", "supabase"])
async def adapter(request, tmp_path, fake_client) -> AsyncGenerator[BaseDatabaseAdapter, None]:
    """
    Each backend in turn, with the test table in place.

    Tests using this fixture run once per backend.
    """
    if request.param == "sqlite":
        backend: BaseDatabaseAdapter = SQLiteAdapter(str(tmp_path / "parity.db"))
    else:
        backend = SupabaseAdapter(client=fake_client)
    await backend.connect()
    await backend.ensure_schema(entities_table)
    yield backend
    await backend.disconnect()


# ==============================================================================
# HELPER FIXTURES
# ==============================================================================

@pytest.fixture
def sample_entity_data() -> dict:
    """Generate sample test-entity data."""
    return {
        "name": "Ann",
        "email": f"ann_{uuid4().hex[:8]}@example.com",
    }


@pytest.fixture
def sample_user_data() -> dict:
    """Generate sample user data in the application's camelCase convention."""
    return {
        "email": f"user_{uuid4().hex[:8]}@example.com",
        "firstName": "Sample",
        "lastName": "User",
        "passwordHash": "$2b$12$abcdefghijklmnopqrstuv",
    }
