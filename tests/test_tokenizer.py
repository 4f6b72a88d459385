"""Unit tests for the DML tokenizer."""

from __future__ import annotations

import logging

import pytest

from sqltree.compile.context import PositionalEntry, NamedEntry, sentinel
from sqltree.compile.tokenizer import (
    format_value_expr,
    tokenize_dml,
    tokenize_expr,
    tokenize_logical,
)
from sqltree.errors import CompilationError, StructuralError
from sqltree.schema.placeholders import DirectPlaceholder, ph


def _values(*row):
    tokens = tokenize_dml({"insert_into": "calc", "values": [list(row)]})
    return tokens[1].operand


# ---------------------------------------------------------------------------
# WHERE
# ---------------------------------------------------------------------------


def test_single_comparison():
    assert tokenize_dml({"where": ["=", "id", "1"]}) == [("WHERE", "id = 1")]


def test_bare_atom_predicate():
    assert tokenize_dml({"where": "1"}) == [("WHERE", "1")]


def test_null_and_numeric_values():
    assert tokenize_dml({"where": ["=", "deleted_at", None]}) == [
        ("WHERE", "deleted_at = NULL")
    ]
    assert tokenize_dml({"where": [">", "age", 18]}) == [("WHERE", "age > 18")]


def test_bool_value_renders_keyword():
    assert tokenize_dml({"where": ["=", "active", True]}) == [("WHERE", "active = TRUE")]


@pytest.mark.parametrize("op", ["=", "<>", "<", ">", "<=", ">=", "LIKE"])
def test_comparison_operators(op):
    assert tokenize_dml({"where": [op, "a", "b"]}) == [("WHERE", f"a {op} b")]


def test_like_is_case_insensitive():
    assert tokenize_dml({"where": ["like", "name", "'J%'"]}) == [
        ("WHERE", "name LIKE 'J%'")
    ]


def test_and_keeps_operand_order():
    tokens = tokenize_dml(
        {"where": ["and", ["=", "a", "1"], ["=", "b", "2"], ["=", "c", "3"], ["=", "d", "4"]]}
    )
    assert tokens == [
        ("WHERE", "a = 1"),
        ("AND", "b = 2"),
        ("AND", "c = 3"),
        ("AND", "d = 4"),
    ]


def test_or_at_top_level_is_flat():
    tokens = tokenize_dml(
        {"where": ["or", ["=", "status", "active"], ["=", "status", "pending"]]}
    )
    assert tokens == [("WHERE", "status = active"), ("OR", "status = pending")]


def test_or_inside_and_becomes_nested_group():
    tokens = tokenize_dml(
        {
            "where": [
                "and",
                ["=", "active", "true"],
                ["or", ["=", "role", "admin"], ["=", "role", "mod"]],
            ]
        }
    )
    assert tokens == [
        ("WHERE", "active = true"),
        ("AND", (("", "role = admin"), ("OR", "role = mod"))),
    ]


def test_and_inside_or_is_flattened():
    tokens = tokenize_dml(
        {
            "where": [
                "or",
                ["and", ["=", "status", "active"], [">", "age", "18"]],
                ["=", "role", "admin"],
            ]
        }
    )
    assert tokens == [
        ("WHERE", "status = active"),
        ("AND", "age > 18"),
        ("OR", "role = admin"),
    ]


def test_deeply_nested_groups():
    tokens = tokenize_dml(
        {
            "where": [
                "and",
                ["=", "active", "true"],
                [
                    "or",
                    ["and", ["=", "role", "admin"], ["=", "dept", "IT"]],
                    [
                        "and",
                        ["=", "role", "manager"],
                        ["or", ["=", "dept", "Sales"], ["=", "dept", "Marketing"]],
                    ],
                ],
            ]
        }
    )
    assert tokens == [
        ("WHERE", "active = true"),
        (
            "AND",
            (
                ("", "role = admin"),
                ("AND", "dept = IT"),
                ("OR", "role = manager"),
                ("AND", (("", "dept = Sales"), ("OR", "dept = Marketing"))),
            ),
        ),
    ]


def test_same_operator_nesting_flattens():
    tokens = tokenize_expr(["and", ["=", "a", 1], ["and", ["=", "b", 2], ["=", "c", 3]]])
    assert tokens == [("WHERE", "a = 1"), ("AND", "b = 2"), ("AND", "c = 3")]


def test_tokenize_logical_with_custom_first_keyword():
    tokens = tokenize_logical("OR", [["=", "a", 1], ["=", "b", 2]], "")
    assert tokens == [("", "a = 1"), ("OR", "b = 2")]


def test_arithmetic_in_where_is_rejected():
    with pytest.raises(StructuralError):
        tokenize_dml({"where": ["+", 1, 2]})


# ---------------------------------------------------------------------------
# SELECT / FROM / ORDER BY
# ---------------------------------------------------------------------------


def test_clause_order():
    tokens = tokenize_dml(
        {
            "order_by": ["id", "desc"],
            "where": ["=", "a", 1],
            "from": ["a", "b"],
            "select": ["id", "name", "email"],
        }
    )
    assert [t.keyword for t in tokens] == ["SELECT", "FROM", "WHERE", "ORDER BY"]
    assert tokens[0] == ("SELECT", "id, name, email")
    assert tokens[1] == ("FROM", "a, b")
    assert tokens[3] == ("ORDER BY", "id DESC")


def test_order_by_field_only_and_camel_case_key():
    assert tokenize_dml({"orderBy": "id"}) == [("ORDER BY", "id")]
    assert tokenize_dml({"orderBy": ["id", "asc"]}) == [("ORDER BY", "id ASC")]


def test_empty_select_list():
    assert tokenize_dml({"select": []}) == [("SELECT", "")]


# ---------------------------------------------------------------------------
# INSERT
# ---------------------------------------------------------------------------


def test_insert_without_columns():
    assert tokenize_dml({"insertInto": "users", "values": [[1, "John"]]}) == [
        ("INSERT INTO", "users"),
        ("VALUES", "(1, 'John')"),
    ]


def test_insert_with_columns_and_multiple_rows():
    tokens = tokenize_dml(
        {
            "insert_into": "users",
            "columns": ["id", "name"],
            "values": [[1, "John"], [2, "Jane"], [3, "Bob"]],
        }
    )
    assert tokens == [
        ("INSERT INTO", "users (id, name)"),
        ("VALUES", "(1, 'John'), (2, 'Jane'), (3, 'Bob')"),
    ]


def test_insert_literals():
    assert _values(1, None, "active") == "(1, NULL, 'active')"
    assert _values(1, 99.99, 10) == "(1, 99.99, 10)"
    assert _values("O'Brien") == "('O''Brien')"


def test_insert_requires_table_and_values():
    assert tokenize_dml({"values": [[1, 2]]}) == []
    assert tokenize_dml({"insert_into": "users"}) == []


def test_insert_empty_column_list():
    tokens = tokenize_dml({"insert_into": "users", "columns": [], "values": [[1, "John"]]})
    assert tokens[0] == ("INSERT INTO", "users")


@pytest.mark.parametrize(
    "expr, expected",
    [
        (["+", 10, 5], "10 + 5"),
        (["%", 17, 5], "17 % 5"),
        (["||", "John", " Doe"], "'John' || ' Doe'"),
        (["+", ["*", 2, 3], 5], "2 * 3 + 5"),
        (["+", 2, ["*", 3, 4]], "2 + 3 * 4"),
        (["*", ["+", 2, 3], 4], "(2 + 3) * 4"),
        (["-", 10, ["-", 5, 2]], "10 - (5 - 2)"),
        (["-", ["-", 10, 5], 2], "10 - 5 - 2"),
        (["/", 100, ["/", 20, 4]], "100 / (20 / 4)"),
        (["||", ["+", 2, 3], "x"], "2 + 3 || 'x'"),
        (["*", ["||", "a", "b"], 2], "('a' || 'b') * 2"),
        (["-", ["*", ["+", 2, 3], 4], 5], "(2 + 3) * 4 - 5"),
    ],
)
def test_arithmetic_precedence(expr, expected):
    assert format_value_expr(expr) == expected


def test_mixed_atoms_and_expressions_in_row():
    assert _values(1, ["+", 10, 5], "test") == "(1, 10 + 5, 'test')"


def test_parent_operator_forces_parens():
    assert format_value_expr(["+", 1, 2], parent_op="*") == "(1 + 2)"
    assert format_value_expr(["+", 1, 2], parent_op="-", is_right_operand=True) == "(1 + 2)"
    assert format_value_expr(["+", 1, 2], parent_op="-") == "1 + 2"


def test_predicate_in_values_is_rejected():
    with pytest.raises(StructuralError):
        tokenize_dml({"insert_into": "t", "values": [[["=", "a", 1]]]})


def test_row_must_be_a_list():
    with pytest.raises(StructuralError):
        tokenize_dml({"insert_into": "t", "values": [1, 2]})


# ---------------------------------------------------------------------------
# Placeholders
# ---------------------------------------------------------------------------


def test_positional_placeholder_records_entry(ctx):
    tokens = tokenize_dml({"where": ["=", "id", ph]}, ctx)
    assert tokens == [("WHERE", f"id = {sentinel(0)}")]
    assert ctx.placeholders == [PositionalEntry(0, 0)]


def test_placeholders_recorded_in_encounter_order(ctx):
    tokenize_dml(
        {
            "where": [
                "and",
                ["=", "email", ph("email")],
                ["=", "id", ph],
                ["=", "status", ph("status")],
            ]
        },
        ctx,
    )
    assert ctx.placeholders == [
        NamedEntry(0, "email"),
        PositionalEntry(1, 0),
        NamedEntry(2, "status"),
    ]


def test_repeated_named_key_gets_two_entries(ctx):
    tokenize_dml({"where": ["or", ["=", "a", ph("k")], ["=", "b", ph("k")]]}, ctx)
    assert [e.index for e in ctx.placeholders] == [0, 1]


def test_positional_ordinal_skips_direct_entries(ctx):
    tokenize_dml(
        {
            "where": [
                "and",
                ["=", "a", ph],
                ["=", "b", DirectPlaceholder(value=5)],
                ["=", "c", ph],
            ]
        },
        ctx,
    )
    assert ctx.placeholders[2] == PositionalEntry(2, 1)


def test_placeholder_in_values(ctx):
    tokens = tokenize_dml({"insert_into": "t", "values": [[ph, ["+", ph, 1]]]}, ctx)
    assert tokens[1] == ("VALUES", f"({sentinel(0)}, {sentinel(1)} + 1)")


def test_placeholder_without_context_is_rejected():
    with pytest.raises(StructuralError):
        tokenize_dml({"where": ["=", "id", ph]})


# ---------------------------------------------------------------------------
# Structural errors
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "where",
    [
        [],
        ["=", "a"],
        ["=", "a", 1, 2],
        ["and", ["=", "a", 1]],
        ["xor", ["=", "a", 1], ["=", "b", 2]],
        [1, "a", 2],
        ["=", "a", ["+", 1, 2]],
    ],
)
def test_malformed_predicates(where):
    with pytest.raises(StructuralError):
        tokenize_dml({"where": where})


def test_unknown_statement_key():
    with pytest.raises(StructuralError):
        tokenize_dml({"selec": ["*"]})


def test_ddl_statement_is_rejected():
    with pytest.raises(CompilationError):
        tokenize_dml({"drop_table": "users"})


def test_unknown_comparator_is_echoed_with_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="sqltree"):
        tokens = tokenize_dml({"where": ["and", ["!=", "a", 1], ["between", "b", "x"]]})
    assert tokens == [("WHERE", "a != 1"), ("AND", "b between x")]
    assert "'!='" in caplog.text
    assert "'between'" in caplog.text
