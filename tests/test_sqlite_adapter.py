# ==============================================================================
# SQLITE ADAPTER TESTS
# ==============================================================================
# Backend-specific behavior: pragmas, raw storage shape, error mapping
# ==============================================================================

import json

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError, ProgrammingError

from scaffold_db.core.exceptions import (
    DatabaseConnectionError,
    DatabaseConstraintError,
    DatabaseError,
    DatabaseQueryError,
)
from scaffold_db.database.adapters.sqlite_adapter import (
    SQLiteAdapter,
    to_storage,
    translate_sqlite_error,
)
from scaffold_db.database.tables import webhook_events

from fakes import entities_table


class TestLifecycle:
    """Tests for connect, pragmas and health."""

    @pytest.mark.asyncio
    async def test_connect_creates_missing_directory(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "app.db"
        adapter = SQLiteAdapter(str(path))

        await adapter.connect()
        try:
            assert path.parent.is_dir()
            assert await adapter.health_check() is True
        finally:
            await adapter.disconnect()

    @pytest.mark.asyncio
    async def test_pragmas_applied(self, sqlite_adapter):
        journal = await sqlite_adapter.execute_raw("PRAGMA journal_mode")
        foreign_keys = await sqlite_adapter.execute_raw("PRAGMA foreign_keys")
        timeout = await sqlite_adapter.execute_raw("PRAGMA busy_timeout")

        assert list(journal[0].values())[0].lower() == "wal"
        assert list(foreign_keys[0].values())[0] == 1
        assert list(timeout[0].values())[0] == 5000

    @pytest.mark.asyncio
    async def test_in_memory_database(self):
        adapter = SQLiteAdapter(":memory:")
        await adapter.connect()
        try:
            await adapter.ensure_schema(entities_table)
            await adapter.create("test_entities", {"name": "Ann", "email": "a@x.com"})
            assert await adapter.count("test_entities") == 1
        finally:
            await adapter.disconnect()

    @pytest.mark.asyncio
    async def test_health_check_false_when_disconnected(self):
        adapter = SQLiteAdapter(":memory:")
        assert await adapter.health_check() is False

    @pytest.mark.asyncio
    async def test_operations_require_connect(self):
        adapter = SQLiteAdapter(":memory:")
        with pytest.raises(DatabaseConnectionError):
            await adapter.count("test_entities")

    @pytest.mark.asyncio
    async def test_ensure_schema_is_idempotent(self, sqlite_adapter):
        await sqlite_adapter.ensure_schema(entities_table)
        await sqlite_adapter.ensure_schema(entities_table)

        tables = await sqlite_adapter.execute_raw(
            "SELECT name FROM sqlite_master WHERE type = 'table' AND name = :name",
            {"name": "test_entities"},
        )
        assert len(tables) == 1


class TestStorageShape:
    """Tests for what actually lands in the database file."""

    @pytest.mark.asyncio
    async def test_soft_deleted_row_still_present(self, sqlite_adapter):
        await sqlite_adapter.ensure_schema(entities_table)
        created = await sqlite_adapter.create(
            "test_entities", {"name": "Ann", "email": "a@x.com"}
        )

        await sqlite_adapter.soft_delete("test_entities", created["id"])

        rows = await sqlite_adapter.execute_raw(
            "SELECT * FROM test_entities WHERE id = :id", {"id": created["id"]}
        )
        assert len(rows) == 1
        assert rows[0]["deleted_at"] is not None
        assert rows[0]["deleted_at"] > rows[0]["created_at"]
        assert rows[0]["updated_at"] == rows[0]["deleted_at"]

    @pytest.mark.asyncio
    async def test_json_and_boolean_columns(self, sqlite_adapter):
        await sqlite_adapter.ensure_schema(webhook_events)
        payload = {"id": "evt_1", "data": {"object": {"amount_paid": 500}}}

        created = await sqlite_adapter.create(
            "webhook_events",
            {"stripeEventId": "evt_1", "eventType": "invoice.paid", "payload": payload},
        )

        assert created["payload"] == payload
        assert created["processed"] is False
        assert created["retryCount"] == 0

        raw = await sqlite_adapter.execute_raw(
            "SELECT payload, processed FROM webhook_events WHERE id = :id",
            {"id": created["id"]},
        )
        assert json.loads(raw[0]["payload"]) == payload
        assert raw[0]["processed"] == 0

    @pytest.mark.asyncio
    async def test_missing_table_raises_query_error(self, sqlite_adapter):
        with pytest.raises(DatabaseQueryError):
            await sqlite_adapter.find_many("never_created")

    @pytest.mark.asyncio
    async def test_invalid_table_name_raises_query_error(self, sqlite_adapter):
        with pytest.raises(DatabaseQueryError):
            await sqlite_adapter.count("users; DROP TABLE users")


class TestHelpers:
    """Tests for module-level helpers."""

    @pytest.mark.parametrize(
        "value, stored",
        [
            (True, 1),
            (False, 0),
            ({"a": 1}, '{"a": 1}'),
            ([1, 2], "[1, 2]"),
            ("text", "text"),
            (7, 7),
            (None, None),
        ],
    )
    def test_to_storage(self, value, stored):
        assert to_storage(value) == stored

    def test_integrity_error_maps_to_constraint(self):
        error = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed: users.email"))
        mapped = translate_sqlite_error(error, "create", "users")
        assert isinstance(mapped, DatabaseConstraintError)
        assert mapped.message == "UNIQUE constraint failed: users.email"

    def test_missing_column_maps_to_query(self):
        error = OperationalError("SELECT", {}, Exception("no such column: nope"))
        assert isinstance(translate_sqlite_error(error, "find_many", "users"), DatabaseQueryError)

    def test_locked_database_maps_to_connection(self):
        error = OperationalError("UPDATE", {}, Exception("database is locked"))
        assert isinstance(
            translate_sqlite_error(error, "update", "users"), DatabaseConnectionError
        )

    def test_other_driver_errors_map_to_database_error(self):
        error = ProgrammingError("SELECT", {}, Exception("Cannot operate on a closed database."))
        mapped = translate_sqlite_error(error, "count", "users")
        assert type(mapped) is DatabaseError
        assert mapped.details["operation"] == "count"
