"""Pydantic models for the statement dicts accepted by sqltree.

A statement is a plain dict whose keys name clauses::

    {
        "select": ["id", "name"],
        "from": ["users"],
        "where": ["and", ["=", "active", "true"], [">", "age", 18]],
        "order_by": ["name", "asc"],
    }

    {
        "insert_into": "users",
        "columns": ["id", "name"],
        "values": [[1, "John"], [2, "Jane"]],
    }

    {"create_table": ["users", "if not exists"], "with_columns": [...]}

camelCase keys (``orderBy``, ``insertInto``, ``createTable`` …) are accepted
as aliases.  Expressions inside ``where`` and ``values`` are decoded into typed
nodes while the model is validated, so the compiler never sees raw lists.
"""
from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pydantic
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from sqltree.errors import StructuralError
from sqltree.schema.nodes import Expr, decode_expr

_CONFIG = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

#: camelCase spellings accepted for snake_case statement keys.
KEY_ALIASES: dict[str, str] = {
    "orderBy": "order_by",
    "insertInto": "insert_into",
    "createTable": "create_table",
    "withColumns": "with_columns",
    "createIndex": "create_index",
    "dropTable": "drop_table",
    "dropIndex": "drop_index",
}

#: Keys that mark a statement as DDL.
DDL_KEYS: frozenset[str] = frozenset(
    {"create_table", "with_columns", "create_index", "drop_table", "drop_index"}
)

#: ``name`` or ``[name, modifier]`` (``'if exists'`` / ``'if not exists'``).
NameSpec = str | tuple[str, str]


def _normalize_keys(data: Any) -> Any:
    if isinstance(data, dict):
        return {KEY_ALIASES.get(k, k): v for k, v in data.items()}
    return data


# ---------------------------------------------------------------------------
# DML
# ---------------------------------------------------------------------------


class DmlStatement(BaseModel):
    """A query or insert statement.

    Attributes:
        select: Column expressions, rendered verbatim and comma-joined.
        from_: Table names (JSON key ``"from"``).
        where: Predicate tree.
        order_by: ``field`` or ``[field, direction]``.
        insert_into: Target table of an INSERT.
        columns: Optional INSERT column list.
        values: INSERT rows; each cell is an atom or an arithmetic tree.
    """

    model_config = _CONFIG

    select: list[str] | None = None
    from_: list[str] | None = Field(None, alias="from")
    where: Expr | None = None
    order_by: str | tuple[str, str] | None = None
    insert_into: str | None = None
    columns: list[str] | None = None
    values: tuple[tuple[Expr, ...], ...] | None = None

    @model_validator(mode="before")
    @classmethod
    def _normalize_aliases(cls, data: Any) -> Any:
        return _normalize_keys(data)

    @field_validator("where", mode="before")
    @classmethod
    def _decode_where(cls, v: Any) -> Any:
        return None if v is None else decode_expr(v)

    @field_validator("values", mode="before")
    @classmethod
    def _decode_values(cls, v: Any) -> Any:
        if v is None:
            return None
        if not isinstance(v, (list, tuple)):
            raise StructuralError(f"'values' must be a list of rows, got {v!r}.", node=v)
        rows = []
        for row in v:
            if not isinstance(row, (list, tuple)):
                raise StructuralError(f"INSERT row must be a list, got {row!r}.", node=row)
            rows.append(tuple(decode_expr(cell) for cell in row))
        return tuple(rows)


# ---------------------------------------------------------------------------
# DDL
# ---------------------------------------------------------------------------


class IndexSpec(BaseModel):
    """The body of a ``create_index`` clause.

    Attributes:
        name: Index name, or ``[name, 'if not exists']``.
        on: ``[table, col1, col2, ...]``.
        unique: Emit ``CREATE UNIQUE INDEX``.
        where: Optional partial-index predicate.
    """

    model_config = _CONFIG

    name: NameSpec
    on: list[str] = Field(min_length=2)
    unique: bool = False
    where: Any = None


class DdlStatement(BaseModel):
    """A table / index definition statement.

    ``with_columns`` entries stay as raw lists; their grammar is interpreted
    by :mod:`sqltree.compile.ddl_tokenizer`.
    """

    model_config = _CONFIG

    create_table: NameSpec | None = None
    with_columns: list[list[Any]] | None = None
    create_index: IndexSpec | None = None
    drop_table: NameSpec | None = None
    drop_index: NameSpec | None = None

    @model_validator(mode="before")
    @classmethod
    def _normalize_aliases(cls, data: Any) -> Any:
        return _normalize_keys(data)


Statement = DmlStatement | DdlStatement


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def is_ddl(tree: dict[str, Any]) -> bool:
    """Return ``True`` if the raw statement dict uses any DDL key."""
    return any(KEY_ALIASES.get(k, k) in DDL_KEYS for k in tree)


def parse_statement(tree: Any) -> Statement:
    """Decode a raw statement dict into a typed statement.

    Args:
        tree: The statement dict (or an already parsed statement).

    Returns:
        A :class:`DdlStatement` if any DDL key is present, else a
        :class:`DmlStatement`.

    Raises:
        StructuralError: If the dict has unknown keys or malformed clauses.
    """
    if isinstance(tree, (DmlStatement, DdlStatement)):
        return tree
    if not isinstance(tree, dict):
        raise StructuralError(
            f"Statement must be a dict, got {type(tree).__name__}.", node=tree
        )
    model = DdlStatement if is_ddl(tree) else DmlStatement
    try:
        return model.model_validate(tree)
    except pydantic.ValidationError as exc:
        raise StructuralError(f"Statement structure is invalid: {exc}", node=tree) from exc


def partial(*partials: dict[str, Any]) -> Callable[[dict[str, Any]], dict[str, Any]]:
    """Return a function that merges ``partials`` into a statement dict.

    Later partials win over earlier ones and over the target; the target is
    not mutated::

        select_from_users = partial({"select": ["*"], "from": ["users"]})
        stmt = select_from_users({"where": ["=", "id", 1]})
    """

    def merge(target: dict[str, Any]) -> dict[str, Any]:
        merged = dict(target)
        for p in partials:
            merged.update(p)
        return merged

    return merge
