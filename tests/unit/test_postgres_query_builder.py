"""Unit tests for PostgreSQL query building."""

from datetime import UTC, datetime

import pytest

from kindstore.application.query.compiled import (
    EQ,
    GE,
    NE,
    CompiledQuery,
    FilterClause,
    SortClause,
)
from kindstore.domain.value_objects import LargeText
from kindstore.infrastructure.persistence.postgres.query_builder import (
    build_filter_condition,
    build_order_by,
    build_query,
    decode_value,
    encode_value,
)


class TestBuildFilterCondition:
    """Tests for build_filter_condition."""

    def test_string_equality(self) -> None:
        sql, params = build_filter_condition(FilterClause("status", EQ, "live"), "f0")
        assert sql.startswith("EXISTS (SELECT 1 FROM entity_property f0")
        assert "f0.key = %s" in sql
        assert 'f0.str_value COLLATE "C" = %s' in sql
        assert params == ["status", ["str"], "live"]

    def test_numeric_comparison_covers_int_and_float(self) -> None:
        sql, params = build_filter_condition(FilterClause("rank", GE, 3), "f1")
        assert "::numeric >= %s::numeric" in sql
        assert params == ["rank", ["int", "float"], 3]

    def test_bool_is_not_numeric(self) -> None:
        sql, params = build_filter_condition(FilterClause("live", EQ, True), "f0")
        assert "f0.bool_value = %s" in sql
        assert params[1] == ["bool"]

    def test_not_equal_excludes_large_text(self) -> None:
        sql, params = build_filter_condition(FilterClause("rank", NE, 3), "f0")
        assert "f0.property_type <> 'text'" in sql
        assert "NOT (f0.property_type = ANY(%s)" in sql
        assert params == ["rank", ["int", "float"], 3]

    def test_naive_datetime_param_taken_as_utc(self) -> None:
        _, params = build_filter_condition(
            FilterClause("t", EQ, datetime(2024, 1, 1)), "f0"
        )
        assert params[2] == datetime(2024, 1, 1, tzinfo=UTC)

    def test_unknown_operator(self) -> None:
        with pytest.raises(ValueError):
            build_filter_condition(FilterClause("t", "LIKE", "x"), "f0")

    def test_unsupported_value(self) -> None:
        with pytest.raises(TypeError):
            build_filter_condition(FilterClause("t", EQ, None), "f0")


class TestBuildQuery:
    """Tests for build_query and the prepared SQL."""

    def test_count_sql(self) -> None:
        query = CompiledQuery("articles", filters=(FilterClause("rank", GE, 3),))
        sql, params = build_query(query, "parentKind/parentKeyName").count_sql()
        assert sql.startswith("SELECT count(*) FROM entity e WHERE e.kind = %s AND e.parent = %s")
        assert params == ["articles", "parentKind/parentKeyName", "rank", ["int", "float"], 3]

    def test_page_sql_joins_sorted_keys_and_breaks_ties_by_name(self) -> None:
        query = CompiledQuery("articles", sorts=(SortClause("rank", descending=True),))
        sql, params = build_query(query, "").page_sql(offset=20, limit=10)
        assert "JOIN entity_property s0" in sql
        assert "s0.property_type <> 'text'" in sql
        assert sql.endswith('e.name COLLATE "C" LIMIT %s OFFSET %s')
        assert params == ["rank", "articles", "", 10, 20]

    def test_order_by_direction(self) -> None:
        columns = build_order_by("s0", descending=False)
        assert all(c.endswith(" ASC") for c in columns)
        assert any("s0.time_value" in c for c in columns)


@pytest.mark.parametrize(
    "value",
    [
        "plain",
        LargeText("long"),
        7,
        1.5,
        True,
        b"\x01",
        datetime(2024, 1, 1, 12, tzinfo=UTC),
        datetime(2024, 1, 1, 12),
    ],
)
def test_encode_decode_value(value: object) -> None:
    restored = decode_value(encode_value(value))
    assert restored == value
    assert type(restored) is type(value)
