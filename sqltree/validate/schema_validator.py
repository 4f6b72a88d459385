"""Schema existence validator.

Checks that every table and column a DML statement references exists in
the ``SchemaSnapshot``, and rewrites literal values into bound parameters.

Only plain identifiers (``col`` or ``table.col``) are checked; select items
such as ``count(*)`` or ``*`` are raw SQL and pass through untouched.
DDL statements define the schema rather than reference it and are not
validated.
"""

from __future__ import annotations

import re
from typing import Any

from sqltree.errors import SchemaError
from sqltree.schema.nodes import ArithmeticNode, AtomNode, ComparisonNode, Expr, LogicalNode
from sqltree.schema.placeholders import DirectPlaceholder, is_placeholder
from sqltree.schema.snapshot import SchemaSnapshot
from sqltree.schema.statement import DmlStatement, Statement

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_]\w*(?:\.[A-Za-z_]\w*)?$")


class SchemaValidator:
    """Validates table and column existence against the schema snapshot.

    Args:
        snapshot: The tables and columns statements may reference.
    """

    def __init__(self, snapshot: SchemaSnapshot) -> None:
        self._snapshot = snapshot

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def validate(self, statement: Statement) -> None:
        """Raise :class:`~sqltree.errors.SchemaError` on the first unknown identifier.

        Args:
            statement: A parsed statement.

        Raises:
            SchemaError: If a table or column does not exist.
        """
        if not isinstance(statement, DmlStatement):
            return

        if statement.insert_into:
            self.assert_table_allowed(statement.insert_into)
            for column in statement.columns or ():
                self.assert_column_allowed(column, [statement.insert_into])

        for table in statement.from_ or ():
            self.assert_table_allowed(table)

        scope = self._scope(statement)

        for column in statement.select or ():
            if _IDENTIFIER_RE.match(column):
                self.assert_column_allowed(column, scope)

        if statement.where is not None:
            for column in _comparison_columns(statement.where):
                if _IDENTIFIER_RE.match(column):
                    self.assert_column_allowed(column, scope)

        if statement.order_by:
            field = (
                statement.order_by
                if isinstance(statement.order_by, str)
                else statement.order_by[0]
            )
            if _IDENTIFIER_RE.match(field):
                self.assert_column_allowed(field, scope)

    def assert_table_allowed(self, table_name: str) -> None:
        """Raise :class:`~sqltree.errors.SchemaError` if table not found."""
        if not self._snapshot.has_table(table_name):
            raise SchemaError(
                f"Table '{table_name}' does not exist in the schema snapshot.",
                details={
                    "table": table_name,
                    "allowed_tables": self._snapshot.table_names,
                },
            )

    def assert_column_allowed(self, column: str, tables: list[str]) -> None:
        """Raise if ``column`` (``col`` or ``table.col``) is unknown.

        An unqualified column must exist in at least one of ``tables``.
        """
        if "." in column:
            table_name, column_name = column.split(".", 1)
            self.assert_table_allowed(table_name)
            candidates = [table_name]
        else:
            column_name = column
            candidates = tables

        if any(self._snapshot.has_column(t, column_name) for t in candidates):
            return
        raise SchemaError(
            f"Column '{column}' does not exist in table(s) {candidates}.",
            details={
                "column": column,
                "tables": candidates,
                "allowed_columns": sorted(
                    {c for t in candidates for c in self._snapshot.get_column_names(t)}
                ),
            },
        )

    def wrap_literals(self, statement: Statement) -> Statement:
        """Return ``statement`` with literal values turned into bound parameters.

        Comparison values and INSERT cells that are literals are replaced by
        :class:`~sqltree.schema.placeholders.DirectPlaceholder`, so they are
        sent as bind values instead of being inlined.  A string comparison
        value that names a known column stays a column reference, and
        ``None`` stays ``NULL``.
        """
        if not isinstance(statement, DmlStatement):
            return statement

        update: dict[str, Any] = {}
        scope = self._scope(statement)
        if statement.where is not None:
            update["where"] = self._wrap_predicate(statement.where, scope)
        if statement.values is not None:
            update["values"] = tuple(
                tuple(_wrap_value(cell) for cell in row) for row in statement.values
            )
        return statement.model_copy(update=update) if update else statement

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _scope(statement: DmlStatement) -> list[str]:
        if statement.from_:
            return list(statement.from_)
        if statement.insert_into:
            return [statement.insert_into]
        return []

    def _is_column_ref(self, value: str, scope: list[str]) -> bool:
        if not _IDENTIFIER_RE.match(value):
            return False
        if "." in value:
            table_name, column_name = value.split(".", 1)
            return self._snapshot.has_column(table_name, column_name)
        return any(self._snapshot.has_column(t, value) for t in scope)

    def _wrap_predicate(self, expr: Expr, scope: list[str]) -> Expr:
        if isinstance(expr, LogicalNode):
            return LogicalNode(
                op=expr.op,
                operands=tuple(self._wrap_predicate(o, scope) for o in expr.operands),
            )
        if isinstance(expr, ComparisonNode):
            value = expr.value.value
            if value is None or is_placeholder(value):
                return expr
            if isinstance(value, str) and self._is_column_ref(value, scope):
                return expr
            return ComparisonNode(
                op=expr.op,
                column=expr.column,
                value=AtomNode(value=DirectPlaceholder(value=value)),
            )
        return expr


def _comparison_columns(expr: Expr) -> list[str]:
    if isinstance(expr, ComparisonNode):
        return [expr.column]
    if isinstance(expr, LogicalNode):
        return [c for o in expr.operands for c in _comparison_columns(o)]
    return []


def _wrap_value(expr: Expr) -> Expr:
    if isinstance(expr, AtomNode):
        if expr.value is None or is_placeholder(expr.value):
            return expr
        return AtomNode(value=DirectPlaceholder(value=expr.value))
    if isinstance(expr, ArithmeticNode):
        return ArithmeticNode(
            op=expr.op, left=_wrap_value(expr.left), right=_wrap_value(expr.right)
        )
    return expr
