"""Unit tests for SchemaValidator and snapshot-aware compilation."""
from __future__ import annotations

import pytest

from sqltree import format_sql
from sqltree.errors import SchemaError, ValidationError
from sqltree.schema.nodes import AtomNode, ComparisonNode
from sqltree.schema.placeholders import DirectPlaceholder, ph
from sqltree.schema.statement import parse_statement
from sqltree.validate.schema_validator import SchemaValidator
from tests.fixtures import load_schema_snapshot

SNAPSHOT = load_schema_snapshot()


def _v() -> SchemaValidator:
    return SchemaValidator(SNAPSHOT)


def _validate(tree: dict) -> None:
    _v().validate(parse_statement(tree))


def test_valid_select():
    _validate(
        {
            "select": ["id", "users.name", "count(*)"],
            "from": ["users"],
            "where": ["and", ["=", "status", "active"], [">", "users.age", 18]],
            "order_by": ["name", "asc"],
        }
    )


def test_star_is_not_checked():
    _validate({"select": ["*"], "from": ["users"]})


def test_unknown_table_raises():
    with pytest.raises(SchemaError) as exc_info:
        _validate({"select": ["*"], "from": ["ghost"]})
    assert exc_info.value.details["table"] == "ghost"
    assert "users" in exc_info.value.details["allowed_tables"]


def test_unknown_column_raises():
    with pytest.raises(SchemaError) as exc_info:
        _validate({"select": ["nonexistent_col"], "from": ["users"]})
    assert "nonexistent_col" in str(exc_info.value)


def test_schema_error_is_validation_error():
    with pytest.raises(ValidationError) as exc_info:
        _validate({"select": ["*"], "from": ["users"], "where": ["=", "ghost", 1]})
    response = exc_info.value.to_error_response()
    assert response["error"] == "SCHEMA_ERROR"
    assert response["details"]["column"] == "ghost"


def test_qualified_column_checks_its_own_table():
    _validate({"select": ["orders.total"], "from": ["users", "orders"]})
    with pytest.raises(SchemaError):
        _validate({"select": ["users.total"], "from": ["users", "orders"]})


def test_qualified_column_with_unknown_table():
    with pytest.raises(SchemaError):
        _validate({"select": ["ghost.id"], "from": ["users"]})


def test_unqualified_column_searches_from_tables():
    _validate({"select": ["total", "email"], "from": ["users", "orders"]})


def test_order_by_column_is_checked():
    with pytest.raises(SchemaError):
        _validate({"select": ["*"], "from": ["users"], "order_by": "ghost"})


def test_insert_table_and_columns():
    _validate({"insert_into": "users", "columns": ["id", "name"], "values": [[1, "a"]]})
    with pytest.raises(SchemaError):
        _validate({"insert_into": "ghosts", "values": [[1]]})
    with pytest.raises(SchemaError):
        _validate({"insert_into": "users", "columns": ["id", "ghost"], "values": [[1, 2]]})


def test_ddl_is_not_validated():
    _validate({"create_table": "brand_new", "with_columns": [["id", "INTEGER"]]})


# ---------------------------------------------------------------------------
# Literal wrapping
# ---------------------------------------------------------------------------


def test_wrap_literals_in_where():
    stmt = _v().wrap_literals(
        parse_statement({"select": ["*"], "from": ["users"], "where": ["=", "age", 30]})
    )
    assert stmt.where == ComparisonNode(
        op="=", column="age", value=AtomNode(value=DirectPlaceholder(value=30))
    )


def test_wrap_literals_keeps_column_refs_nulls_and_placeholders():
    stmt = _v().wrap_literals(
        parse_statement(
            {
                "select": ["*"],
                "from": ["users", "orders"],
                "where": [
                    "and",
                    ["=", "orders.user_id", "users.id"],
                    ["=", "email", None],
                    ["=", "name", ph],
                ],
            }
        )
    )
    values = [operand.value.value for operand in stmt.where.operands]
    assert values == ["users.id", None, ph]


def test_wrap_literals_in_values():
    stmt = _v().wrap_literals(
        parse_statement({"insert_into": "products", "values": [[1, ["*", 10, 2], None]]})
    )
    [row] = stmt.values
    assert row[0].value == DirectPlaceholder(value=1)
    assert row[1].left.value == DirectPlaceholder(value=10)
    assert row[2].value is None


def test_compile_with_snapshot_binds_literals():
    result = format_sql(
        {
            "select": ["id", "name"],
            "from": ["users"],
            "where": ["and", ["=", "status", "active"], [">", "age", ph]],
        },
        [21],
        dialect="pg",
        snapshot=SNAPSHOT,
    )
    assert result.as_tuple() == (
        "SELECT id, name FROM users WHERE status = $1 AND age > $2",
        "active",
        21,
    )


def test_compile_with_snapshot_insert():
    result = format_sql(
        {"insert_into": "users", "columns": ["id", "name"], "values": [[1, "O'Brien"]]},
        snapshot=SNAPSHOT,
    )
    assert result.as_tuple() == ("INSERT INTO users (id, name) VALUES (?, ?)", 1, "O'Brien")


def test_compile_with_snapshot_rejects_unknown_column():
    with pytest.raises(SchemaError):
        format_sql({"select": ["ghost"], "from": ["users"]}, snapshot=SNAPSHOT)
