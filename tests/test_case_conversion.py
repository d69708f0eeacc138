# ==============================================================================
# CASE CONVERSION TESTS
# ==============================================================================
# Tests for camelCase <-> snake_case key translation
# ==============================================================================

import pytest

from scaffold_db.database.tables import metadata
from scaffold_db.utils.case_conversion import (
    camel_to_snake,
    camel_to_snake_keys,
    snake_to_camel,
    snake_to_camel_keys,
)

ALL_COLUMNS = sorted(
    {column.name for table in metadata.tables.values() for column in table.columns}
)


class TestNameConversion:
    """Tests for single-name conversion."""

    @pytest.mark.parametrize(
        "camel, snake",
        [
            ("createdAt", "created_at"),
            ("stripePaymentIntentId", "stripe_payment_intent_id"),
            ("id", "id"),
            ("emailVerified", "email_verified"),
        ],
    )
    def test_known_pairs(self, camel, snake):
        assert camel_to_snake(camel) == snake
        assert snake_to_camel(snake) == camel

    @pytest.mark.parametrize("column", ALL_COLUMNS)
    def test_round_trip_every_column(self, column):
        """Every stored column survives snake -> camel -> snake and back."""
        camel = snake_to_camel(column)
        assert camel_to_snake(camel) == column
        assert snake_to_camel(camel_to_snake(camel)) == camel

    def test_already_converted_names_are_unchanged(self):
        assert camel_to_snake("deleted_at") == "deleted_at"
        assert snake_to_camel("deletedAt") == "deletedAt"


class TestKeyConversion:
    """Tests for converting the keys of rows."""

    def test_single_row(self):
        row = {"firstName": "Ann", "lastLogin": None}
        assert camel_to_snake_keys(row) == {"first_name": "Ann", "last_login": None}

    def test_list_of_rows(self):
        rows = [{"user_id": "1"}, {"user_id": "2"}]
        assert snake_to_camel_keys(rows) == [{"userId": "1"}, {"userId": "2"}]

    def test_nested_values_are_untouched(self):
        """JSON documents keep their own key convention."""
        row = {"payload": {"event_type": "invoice.paid", "dataObject": {"a_b": 1}}}
        converted = snake_to_camel_keys(row)
        assert converted == {"payload": {"event_type": "invoice.paid", "dataObject": {"a_b": 1}}}

    def test_input_is_not_mutated(self):
        row = {"created_at": "2024-01-01"}
        snake_to_camel_keys(row)
        assert row == {"created_at": "2024-01-01"}
