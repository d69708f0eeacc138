# ==============================================================================
# DATABASE FACTORY TESTS
# ==============================================================================

import pytest

from scaffold_db.core.exceptions import DatabaseConnectionError
from scaffold_db.core.settings import DatabaseProvider
from scaffold_db.database.adapters.sqlite_adapter import SQLiteAdapter
from scaffold_db.database.adapters.supabase_adapter import SupabaseAdapter
from scaffold_db.database.factory import DatabaseFactory


class TestCreateAdapter:
    """Tests for adapter construction and caching."""

    def test_sqlite_adapter(self):
        adapter = DatabaseFactory.create_adapter("sqlite", database_path=":memory:")
        assert isinstance(adapter, SQLiteAdapter)
        assert adapter.is_memory

    def test_supabase_adapter(self, fake_client):
        adapter = DatabaseFactory.create_adapter(DatabaseProvider.SUPABASE, client=fake_client)
        assert isinstance(adapter, SupabaseAdapter)
        assert adapter.client is fake_client

    def test_default_provider_from_settings(self):
        adapter = DatabaseFactory.create_adapter()
        assert isinstance(adapter, SQLiteAdapter)

    def test_instances_are_cached_per_provider(self):
        first = DatabaseFactory.create_adapter("sqlite", database_path=":memory:")
        second = DatabaseFactory.create_adapter("sqlite", database_path="ignored.db")
        assert first is second

    @pytest.mark.parametrize("provider", ["mongodb", "postgres", ""])
    def test_unsupported_provider(self, provider):
        with pytest.raises(ValueError, match="Unsupported database provider"):
            DatabaseFactory.create_adapter(provider)


class TestLifecycle:
    """Tests for initialize, lookup and shutdown."""

    @pytest.mark.asyncio
    async def test_initialize_connects(self):
        adapter = await DatabaseFactory.initialize("sqlite", database_path=":memory:")

        assert DatabaseFactory.is_initialized("sqlite")
        assert DatabaseFactory.get_adapter() is adapter
        assert await DatabaseFactory.health_check() is True

        await DatabaseFactory.shutdown()
        assert not DatabaseFactory.is_initialized("sqlite")

    @pytest.mark.asyncio
    async def test_initialize_with_injected_client(self, fake_client):
        adapter = await DatabaseFactory.initialize("supabase", client=fake_client)

        assert DatabaseFactory.get_adapter("supabase") is adapter
        assert await DatabaseFactory.health_check("supabase") is True
        await DatabaseFactory.shutdown()

    @pytest.mark.asyncio
    async def test_failed_initialize_is_not_cached(self):
        with pytest.raises(DatabaseConnectionError):
            await DatabaseFactory.initialize("supabase", url="", key="")

        assert not DatabaseFactory.is_initialized("supabase")

    def test_get_adapter_before_initialize(self):
        with pytest.raises(RuntimeError, match="not initialized"):
            DatabaseFactory.get_adapter("sqlite")

    @pytest.mark.asyncio
    async def test_health_check_without_adapter(self):
        assert await DatabaseFactory.health_check("supabase") is False

    def test_reset_clears_cache(self):
        DatabaseFactory.create_adapter("sqlite", database_path=":memory:")
        DatabaseFactory.reset()
        assert not DatabaseFactory.is_initialized("sqlite")
