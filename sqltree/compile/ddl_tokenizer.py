"""DDL tokenizer: table / index definition statements → ``Token`` list.

Column definitions are ``[name, type, *constraints]``::

    ["id", "integer", ["primary key"], ["not", None]]
    ["email", ["varchar", 255], ["unique"]]
    ["age", "integer", ["default", 0], ["check", [">=", "age", 0]]]

Table constraints are recognised by a nested list in first position::

    [["primary key", "user_id", "role_id"]]
    [["unique", ["composite", "first_name", "last_name"]]]
    [["foreign key", "user_id"], ["references", ["users", "id"]]]
    [["check", ["<", "discount_price", "price"]]]

Keywords and type names go through the injected
:class:`~sqltree.keywords.KeywordTable`, so lower-case input is accepted.
"""
from __future__ import annotations

from typing import Any

from sqltree.errors import StructuralError
from sqltree.keywords import DEFAULT_KEYWORDS, KeywordTable
from sqltree.compile.tokenizer import render_literal
from sqltree.schema.nodes import (
    ArithmeticNode,
    AtomNode,
    ComparisonNode,
    Expr,
    LogicalNode,
    Token,
    decode_expr,
)
from sqltree.schema.placeholders import is_placeholder
from sqltree.schema.statement import DdlStatement, IndexSpec, NameSpec, parse_statement

_IF_EXISTS = "if exists"
_IF_NOT_EXISTS = "if not exists"


class DdlTokenizer:
    """Tokenizes CREATE / DROP statements.

    Args:
        keywords: Keyword casing table.
    """

    def __init__(self, keywords: KeywordTable = DEFAULT_KEYWORDS) -> None:
        self._kw = keywords

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def tokenize(self, statement: DdlStatement) -> list[Token]:
        """Tokenize every DDL clause present, in fixed order."""
        tokens: list[Token] = []

        if statement.create_table is not None:
            tokens.append(self._create_table(statement))

        if statement.create_index is not None:
            tokens.extend(self._create_index(statement.create_index))

        if statement.drop_table is not None:
            tokens.append(
                Token("DROP TABLE", self._name_clause(statement.drop_table, _IF_EXISTS))
            )

        if statement.drop_index is not None:
            tokens.append(
                Token("DROP INDEX", self._name_clause(statement.drop_index, _IF_EXISTS))
            )

        return tokens

    def format_expr(self, raw: Any) -> str:
        """Render a CHECK / partial-index predicate with quoted literals."""
        return self._render_expr(decode_expr(raw))

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _create_table(self, statement: DdlStatement) -> Token:
        clause = self._name_clause(statement.create_table, _IF_NOT_EXISTS)

        if statement.with_columns:
            parts = [
                self._table_constraint(item)
                if item and isinstance(item[0], (list, tuple))
                else self._column_def(item)
                for item in statement.with_columns
            ]
            clause += f" ({', '.join(parts)})"

        return Token("CREATE TABLE", clause)

    def _create_index(self, spec: IndexSpec) -> list[Token]:
        keyword = "CREATE UNIQUE INDEX" if spec.unique else "CREATE INDEX"
        table, *columns = spec.on
        tokens = [
            Token(keyword, self._name_clause(spec.name, _IF_NOT_EXISTS)),
            Token("ON", f"{table} ({', '.join(columns)})"),
        ]
        if spec.where is not None:
            tokens.append(Token("WHERE", self.format_expr(spec.where)))
        return tokens

    def _name_clause(self, name: NameSpec | None, modifier: str) -> str:
        if isinstance(name, str):
            return name
        object_name, given = name
        if given.lower() != modifier:
            raise StructuralError(
                f"Expected modifier '{modifier}' for '{object_name}', got '{given}'.",
                node=name,
            )
        return f"{self._kw.upper(modifier)} {object_name}"

    # ------------------------------------------------------------------
    # Columns
    # ------------------------------------------------------------------

    def _column_def(self, column: list[Any]) -> str:
        if len(column) < 2:
            raise StructuralError(
                f"Column definition needs a name and a type: {column!r}", node=column
            )
        name, column_type, *constraints = column
        parts = [name, self._column_type(column_type)]
        parts.extend(self._column_constraint(c) for c in constraints)
        return " ".join(parts)

    def _column_type(self, column_type: Any) -> str:
        if isinstance(column_type, str):
            return self._kw.upper(column_type)
        type_name, *params = column_type
        return f"{self._kw.upper(type_name)}({', '.join(str(p) for p in params)})"

    def _column_constraint(self, constraint: list[Any]) -> str:
        if not constraint:
            raise StructuralError("Empty column constraint.", node=constraint)
        keyword = constraint[0].lower()
        value = constraint[1] if len(constraint) > 1 else None

        if keyword in ("not", "not null"):
            return self._kw.upper("not null")
        if keyword == "default":
            return f"{self._kw.upper('default')} {render_literal(value)}"
        if keyword in ("primary key", "unique"):
            return self._kw.upper(keyword)
        if keyword == "check":
            return f"{self._kw.upper('check')} ({self.format_expr(value)})"
        if keyword == "references":
            return f"{self._kw.upper('references')} {self._reference(value)}"
        if keyword == "foreign key":
            return f"{self._kw.upper('foreign key')} ({value})"

        # Unknown constraint: echo it (upper() logs the diagnostic).
        rendered = self._kw.upper(constraint[0])
        return rendered if value is None else f"{rendered} {value}"

    def _table_constraint(self, item: list[Any]) -> str:
        first, *rest = item
        keyword, *args = first
        keyword = keyword.lower()

        if keyword == "primary key":
            return f"{self._kw.upper(keyword)} ({', '.join(args)})"

        if keyword == "unique":
            columns = args
            if len(args) == 1 and isinstance(args[0], (list, tuple)):
                marker, *columns = args[0]
                if marker.lower() != "composite":
                    raise StructuralError(
                        f"Expected a composite column list, got {args[0]!r}.", node=item
                    )
            return f"{self._kw.upper(keyword)} ({', '.join(columns)})"

        if keyword == "foreign key":
            if not args or not rest:
                raise StructuralError(
                    "FOREIGN KEY needs a column and a REFERENCES clause.", node=item
                )
            ref_keyword, target = rest[0]
            if ref_keyword.lower() != "references":
                raise StructuralError(
                    f"Expected REFERENCES after FOREIGN KEY, got {ref_keyword!r}.",
                    node=item,
                )
            return (
                f"{self._kw.upper(keyword)} ({args[0]}) "
                f"{self._kw.upper('references')} {self._reference(target)}"
            )

        if keyword == "check":
            return f"{self._kw.upper(keyword)} ({self.format_expr(args[0])})"

        raise StructuralError(f"Unknown table constraint: {first[0]!r}", node=item)

    @staticmethod
    def _reference(target: Any) -> str:
        table, column = target
        return f"{table}({column})"

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _render_expr(self, expr: Expr) -> str:
        if isinstance(expr, AtomNode):
            if is_placeholder(expr.value):
                raise StructuralError(
                    "Placeholders are not supported in DDL statements.", node=expr
                )
            return render_literal(expr.value)
        if isinstance(expr, ComparisonNode):
            return f"{expr.column} {expr.op} {self._render_expr(expr.value)}"
        if isinstance(expr, LogicalNode):
            parts = [self._render_expr(o) for o in expr.operands]
            if expr.op == "and":
                return f" {self._kw.upper('and')} ".join(parts)
            return f"({f' {self._kw.upper(expr.op)} '.join(parts)})"
        if isinstance(expr, ArithmeticNode):
            return f"{self._render_expr(expr.left)} {expr.op} {self._render_expr(expr.right)}"
        raise StructuralError(f"Unsupported DDL expression: {expr!r}", node=expr)


def tokenize_ddl(
    statement: DdlStatement | dict[str, Any],
    keywords: KeywordTable = DEFAULT_KEYWORDS,
) -> list[Token]:
    """Tokenize a DDL statement (dict or parsed model)."""
    parsed = parse_statement(statement)
    if not isinstance(parsed, DdlStatement):
        raise StructuralError("tokenize_ddl() received a DML statement.", node=statement)
    return DdlTokenizer(keywords).tokenize(parsed)
