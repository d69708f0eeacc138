# ==============================================================================
# SUPABASE ADAPTER TESTS
# ==============================================================================
# Builder chains issued to the client and PostgREST error translation
# ==============================================================================

import httpx
import pytest
from postgrest.exceptions import APIError

from scaffold_db.core.exceptions import (
    DatabaseConnectionError,
    DatabaseConstraintError,
    DatabaseError,
    DatabaseNotFoundError,
    DatabaseQueryError,
    DatabaseValidationError,
)
from scaffold_db.database.adapters.query_protocols import TableClient
from scaffold_db.database.adapters.supabase_adapter import (
    SupabaseAdapter,
    translate_api_error,
)

from fakes import entities_table

TABLE = "test_entities"


def _api_error(code, message="backend said no"):
    return APIError({"code": code, "message": message, "details": None, "hint": None})


class TestQueryChains:
    """Tests for the fluent calls each operation composes."""

    def test_fake_satisfies_client_protocol(self, fake_client):
        assert isinstance(fake_client, TableClient)

    @pytest.mark.asyncio
    async def test_find_many_chain(self, supabase_adapter, fake_client):
        await supabase_adapter.find_many(
            TABLE,
            filters={"name": "Ann", "age": None},
            order_by={"column": "name", "ascending": False},
            pagination={"page": 3, "limit": 5},
        )

        query = fake_client.executed[-1]
        assert query.calls == [
            ("eq", ("name", "Ann")),
            ("is_", ("deleted_at", "null")),
            ("order", ("name", True)),
            ("order", ("id", False)),
            ("range", (10, 14)),
        ]

    @pytest.mark.asyncio
    async def test_default_order_is_created_at_descending(self, supabase_adapter, fake_client):
        await supabase_adapter.find_many(TABLE)

        calls = fake_client.executed[-1].calls
        assert ("order", ("created_at", True)) in calls
        assert ("order", ("id", False)) in calls

    @pytest.mark.asyncio
    async def test_filter_keys_are_translated(self, supabase_adapter, fake_client):
        await supabase_adapter.count("users", {"emailVerified": True})

        assert fake_client.executed[-1].calls[0] == ("eq", ("email_verified", True))

    @pytest.mark.asyncio
    async def test_count_requests_exact_head_count(self, supabase_adapter, fake_client):
        await supabase_adapter.create(TABLE, {"name": "Ann", "email": "a@x.com"})

        assert await supabase_adapter.count(TABLE) == 1
        options = fake_client.executed[-1]._options
        assert options["head"] is True
        assert options["count"] is not None

    @pytest.mark.asyncio
    async def test_update_targets_live_row(self, supabase_adapter, fake_client):
        created = await supabase_adapter.create(TABLE, {"name": "Ann", "email": "a@x.com"})

        await supabase_adapter.update(TABLE, created["id"], {"name": "Anna"})

        assert fake_client.executed[-1].calls == [
            ("eq", ("id", created["id"])),
            ("is_", ("deleted_at", "null")),
        ]

    @pytest.mark.asyncio
    async def test_hard_delete_ignores_soft_delete_state(self, supabase_adapter, fake_client):
        created = await supabase_adapter.create(TABLE, {"name": "Ann", "email": "a@x.com"})

        await supabase_adapter.hard_delete(TABLE, created["id"])

        assert fake_client.executed[-1].calls == [("eq", ("id", created["id"]))]

    @pytest.mark.asyncio
    async def test_results_are_camel_case(self, supabase_adapter):
        created = await supabase_adapter.create(TABLE, {"name": "Ann", "email": "a@x.com"})
        assert "createdAt" in created
        assert "created_at" not in created

    @pytest.mark.asyncio
    async def test_soft_deleted_row_still_stored(self, supabase_adapter, fake_client):
        created = await supabase_adapter.create(TABLE, {"name": "Ann", "email": "a@x.com"})

        await supabase_adapter.soft_delete(TABLE, created["id"])

        rows = fake_client.rows(TABLE)
        assert len(rows) == 1
        assert rows[0]["deleted_at"] is not None


class TestErrorTranslation:
    """Tests for PostgREST error code mapping."""

    @pytest.mark.parametrize(
        "code, expected",
        [
            ("PGRST116", DatabaseNotFoundError),
            ("PGRST204", DatabaseQueryError),
            ("PGRST301", DatabaseQueryError),
            ("42703", DatabaseQueryError),
            ("42P01", DatabaseQueryError),
            ("PGRST100", DatabaseQueryError),
            ("PGRST103", DatabaseConstraintError),
            ("23505", DatabaseConstraintError),
            ("23503", DatabaseConstraintError),
            ("23502", DatabaseConstraintError),
            ("23514", DatabaseConstraintError),
            ("PGRST202", DatabaseValidationError),
            ("22P02", DatabaseValidationError),
            ("22007", DatabaseValidationError),
            ("22001", DatabaseValidationError),
            ("PGRST000", DatabaseConnectionError),
        ],
    )
    def test_code_mapping(self, code, expected):
        mapped = translate_api_error(_api_error(code), "find_many", TABLE)
        assert type(mapped) is expected
        assert mapped.message == "backend said no"

    def test_unknown_code_maps_to_database_error(self):
        mapped = translate_api_error(_api_error("XX000"), "create", TABLE)
        assert type(mapped) is DatabaseError
        assert mapped.details["code"] == "XX000"
        assert mapped.details["collection"] == TABLE

    @pytest.mark.asyncio
    async def test_no_rows_on_read_path_is_none(self, supabase_adapter, fake_client):
        fake_client.next_error = _api_error("PGRST116")
        assert await supabase_adapter.find_by_id(TABLE, "any") is None

        fake_client.next_error = _api_error("PGRST116")
        assert await supabase_adapter.find_first(TABLE) is None

    @pytest.mark.asyncio
    async def test_no_rows_on_mutation_path_raises(self, supabase_adapter, fake_client):
        fake_client.next_error = _api_error("PGRST116")
        with pytest.raises(DatabaseNotFoundError):
            await supabase_adapter.update(TABLE, "any", {"name": "X"})

    @pytest.mark.asyncio
    async def test_network_error_raises_connection_error(self, supabase_adapter, fake_client):
        fake_client.next_error = httpx.ConnectError("connection refused")

        with pytest.raises(DatabaseConnectionError) as exc_info:
            await supabase_adapter.count(TABLE)

        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_missing_table_raises_query_error(self, supabase_adapter):
        with pytest.raises(DatabaseQueryError):
            await supabase_adapter.find_many("never_created")

    @pytest.mark.asyncio
    async def test_page_past_the_end_is_empty(self, supabase_adapter, fake_client):
        await supabase_adapter.create(TABLE, {"name": "Ann", "email": "a@x.com"})
        fake_client.next_error = _api_error("PGRST103", "Requested range not satisfiable")

        result = await supabase_adapter.find_with_pagination(
            TABLE, pagination={"page": 5, "limit": 10}
        )

        assert result.data == []
        assert result.pagination.total == 1
        assert result.pagination.has_previous is True
        assert result.pagination.has_next is False


class TestLifecycle:
    """Tests for connect and health."""

    @pytest.mark.asyncio
    async def test_connect_without_configuration_fails(self):
        adapter = SupabaseAdapter(url="", key="")

        with pytest.raises(DatabaseConnectionError):
            await adapter.connect()

    @pytest.mark.asyncio
    async def test_operations_before_connect_fail(self):
        adapter = SupabaseAdapter(url="", key="")
        with pytest.raises(DatabaseConnectionError):
            await adapter.count(TABLE)

    @pytest.mark.asyncio
    async def test_health_check(self, supabase_adapter, fake_client):
        assert await supabase_adapter.health_check() is True

        fake_client.next_error = _api_error("PGRST000", "could not connect")
        assert await supabase_adapter.health_check() is False

    @pytest.mark.asyncio
    async def test_ensure_schema_does_not_query(self, supabase_adapter, fake_client):
        await supabase_adapter.ensure_schema(entities_table)

        assert fake_client.executed == []

    @pytest.mark.asyncio
    async def test_injected_client_survives_disconnect(self, supabase_adapter, fake_client):
        await supabase_adapter.disconnect()
        assert supabase_adapter.client is fake_client
