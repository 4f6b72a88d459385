"""sqltree – compile nested statement trees to SQL.

Describe a statement as plain Python data, get SQL text plus bind values.

Public API
----------
``format_sql``
    Single-line SQL with dialect bind markers, for execution.

``format_print``
    One clause per line with bound values shown inline; logged at DEBUG.

``format_pretty`` / ``format_pprint``
    Keyword-aligned text with bound values shown inline, for humans.

Each returns a :class:`~sqltree.compile.base.CompiledSQL` that unpacks as
``(sql, *binds)``::

    from sqltree import format_sql, ph

    sql, *binds = format_sql(
        {"select": ["*"], "from": ["users"], "where": ["=", "id", ph]},
        [42],
        dialect="pg",
    )
    # sql == "SELECT * FROM users WHERE id = $1", binds == [42]

Re-exported types
-----------------
``CompiledSQL``, ``StatementCompiler``, ``SchemaSnapshot``, ``KeywordTable``,
the placeholder types, and all error classes.

Extensibility
-------------
New placeholder dialects can be registered via::

    from sqltree.compile.registry import DialectFactory

    @DialectFactory.register("named")
    class NamedDialect(Dialect):
        ...

After registration, every ``format_*`` function accepts ``dialect="named"``.
"""

from __future__ import annotations

import logging
from typing import Any

from sqltree.compile.base import CompiledSQL, Dialect
from sqltree.compile.bindings import Bindings
from sqltree.compile.builder import StatementCompiler
from sqltree.compile.dialects import CommonDialect, PostgresDialect
from sqltree.compile.registry import DialectFactory
from sqltree.errors import (
    BindingError,
    CompilationError,
    SchemaError,
    SqlTreeError,
    StructuralError,
    ValidationError,
)
from sqltree.keywords import DEFAULT_KEYWORDS, KeywordTable
from sqltree.schema.converters import schema_from_sqlalchemy
from sqltree.schema.placeholders import (
    DirectPlaceholder,
    NamedPlaceholder,
    PositionalPlaceholder,
    ph,
)
from sqltree.schema.snapshot import ColumnInfo, SchemaSnapshot, TableInfo
from sqltree.schema.statement import partial

logging.getLogger(__name__).addHandler(logging.NullHandler())

# ---------------------------------------------------------------------------
# Register built-in dialects with DialectFactory
# ---------------------------------------------------------------------------

DialectFactory.register_class("common", CommonDialect)
DialectFactory.register_class("pg", PostgresDialect)

__all__ = [
    # Entry points
    "format_sql",
    "format_print",
    "format_pretty",
    "format_pprint",
    "partial",
    # Placeholders
    "ph",
    "PositionalPlaceholder",
    "NamedPlaceholder",
    "DirectPlaceholder",
    # Schema
    "SchemaSnapshot",
    "TableInfo",
    "ColumnInfo",
    "schema_from_sqlalchemy",
    # Compilation
    "CompiledSQL",
    "Dialect",
    "DialectFactory",
    "CommonDialect",
    "PostgresDialect",
    "StatementCompiler",
    "KeywordTable",
    "DEFAULT_KEYWORDS",
    # Errors
    "SqlTreeError",
    "StructuralError",
    "ValidationError",
    "SchemaError",
    "BindingError",
    "CompilationError",
]


def _compiler(
    dialect: str | Dialect, snapshot: SchemaSnapshot | None
) -> StatementCompiler:
    return StatementCompiler(dialect, snapshot=snapshot)


def format_sql(
    tree: Any,
    bindings: Bindings | None = None,
    *,
    dialect: str | Dialect = "common",
    snapshot: SchemaSnapshot | None = None,
    validate_bindings: bool | None = None,
) -> CompiledSQL:
    """Compile ``tree`` to single-line SQL for execution.

    Args:
        tree: Statement dict.
        bindings: Sequence (for ``ph``) or mapping (for ``ph("key")``).
        dialect: ``"common"`` (``?``), ``"pg"`` (``$1``) or a registered name.
        snapshot: Optional schema to validate identifiers against.
        validate_bindings: Defaults to ``True``.

    Returns:
        ``CompiledSQL`` unpacking as ``(sql, *binds)``.

    Raises:
        StructuralError: If ``tree`` is malformed.
        SchemaError: If ``snapshot`` is given and an identifier is unknown.
        BindingError: If ``bindings`` do not match the placeholders.
        CompilationError: If ``dialect`` is not registered.
    """
    return _compiler(dialect, snapshot).compile(
        tree,
        bindings,
        validate_bindings=True if validate_bindings is None else validate_bindings,
    )


def format_print(
    tree: Any,
    bindings: Bindings | None = None,
    *,
    dialect: str | Dialect = "common",
    snapshot: SchemaSnapshot | None = None,
    validate_bindings: bool | None = None,
) -> CompiledSQL:
    """One clause per line with bound values (or ``$(i)``) inlined; logs at DEBUG.

    Binding validation defaults to ``False``.
    """
    return _compiler(dialect, snapshot).print(
        tree,
        bindings,
        validate_bindings=False if validate_bindings is None else validate_bindings,
    )


def format_pretty(
    tree: Any,
    bindings: Bindings | None = None,
    *,
    dialect: str | Dialect = "common",
    snapshot: SchemaSnapshot | None = None,
    validate_bindings: bool | None = None,
) -> CompiledSQL:
    """Keyword-aligned rendering with bound values shown inline."""
    return _compiler(dialect, snapshot).pretty(
        tree,
        bindings,
        validate_bindings=True if validate_bindings is None else validate_bindings,
    )


def format_pprint(
    tree: Any,
    bindings: Bindings | None = None,
    *,
    dialect: str | Dialect = "common",
    snapshot: SchemaSnapshot | None = None,
    validate_bindings: bool | None = None,
) -> CompiledSQL:
    """:func:`format_pretty`, and log the result at DEBUG."""
    return _compiler(dialect, snapshot).pprint(
        tree,
        bindings,
        validate_bindings=True if validate_bindings is None else validate_bindings,
    )
