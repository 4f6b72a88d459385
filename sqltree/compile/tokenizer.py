"""DML tokenizer: statement → ordered ``Token`` list.

The tokenizer makes every structural decision about the output; the
formatters only lay the tokens out.

Logical precedence
------------------
``AND`` binds tighter than ``OR``, so an ``or`` nested under an ``and`` must be
parenthesised; it is emitted as a single token whose operand is a nested
token group.  Every other nesting (``and`` under ``or``, or the same operator
repeated) is flattened into the surrounding token sequence::

    ["and", a, ["or", b, c]]  →  WHERE a / AND (b / OR c)
    ["or", a, ["and", b, c]]  →  WHERE a / OR b / AND c

Arithmetic precedence
---------------------
``||`` < ``+ -`` < ``* / %``.  A sub-expression is parenthesised when it binds
looser than its parent, or when it ties with a ``-`` / ``/`` parent as the
right operand (``a - (b - c)`` differs from ``a - b - c``).

Placeholders
------------
Each placeholder atom is replaced by a sentinel from the shared
:class:`~sqltree.compile.context.PlaceholderContext`, in encounter order.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Any

from sqltree.compile.context import PlaceholderContext
from sqltree.errors import CompilationError, StructuralError
from sqltree.schema.expressions import ARITHMETIC_PRECEDENCE, NON_ASSOCIATIVE_OPS
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
from sqltree.schema.statement import DdlStatement, DmlStatement, parse_statement


# ---------------------------------------------------------------------------
# Atom rendering
# ---------------------------------------------------------------------------


def render_number(value: int | float | Decimal) -> str:
    """Render a numeric atom."""
    return str(value)


def quote_string(value: str) -> str:
    """Render a string as a single-quoted SQL literal."""
    escaped = value.replace("'", "''")
    return f"'{escaped}'"


def render_literal(value: Any) -> str:
    """Render a value as a SQL literal (strings quoted)."""
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, (int, float, Decimal)):
        return render_number(value)
    return quote_string(str(value))


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------


class DmlTokenizer:
    """Tokenizes DML statements and renders their expressions.

    Args:
        context: Placeholder accumulator for this compile call.  May be
            ``None`` when the statement contains no placeholders.
    """

    def __init__(self, context: PlaceholderContext | None = None) -> None:
        self._context = context

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def tokenize(self, statement: DmlStatement) -> list[Token]:
        """Tokenize every recognised clause in fixed order."""
        tokens: list[Token] = []

        if statement.insert_into and statement.values is not None:
            tokens.extend(self._tokenize_insert(statement))

        if statement.select is not None:
            tokens.append(Token("SELECT", ", ".join(statement.select)))

        if statement.from_ is not None:
            tokens.append(Token("FROM", ", ".join(statement.from_)))

        if statement.where is not None:
            tokens.extend(self.tokenize_expr(statement.where, "WHERE"))

        if statement.order_by:
            tokens.append(Token("ORDER BY", self._order_by(statement.order_by)))

        return tokens

    def tokenize_expr(self, expr: Expr, keyword: str) -> list[Token]:
        """Tokenize one predicate tree under a leading ``keyword``."""
        if isinstance(expr, AtomNode):
            return [Token(keyword, self._render_atom(expr))]
        if isinstance(expr, ComparisonNode):
            return [Token(keyword, self._render_comparison(expr))]
        if isinstance(expr, LogicalNode):
            return self.tokenize_logical(expr.op, expr.operands, keyword)
        raise StructuralError(
            "Arithmetic expressions are only supported inside VALUES.", node=expr
        )

    def tokenize_logical(
        self,
        operator: str,
        operands: tuple[Expr, ...] | list[Expr],
        first_keyword: str,
    ) -> list[Token]:
        """Tokenize the operands of an ``and`` / ``or`` node.

        The first operand takes ``first_keyword``; the rest take the
        upper-cased operator.
        """
        tokens: list[Token] = []
        keyword = operator.upper()

        for i, operand in enumerate(operands):
            current = first_keyword if i == 0 else keyword

            if isinstance(operand, LogicalNode):
                if operator == "and" and operand.op == "or":
                    nested = self.tokenize_logical(operand.op, operand.operands, "")
                    tokens.append(Token(current, tuple(nested)))
                else:
                    tokens.extend(
                        self.tokenize_logical(operand.op, operand.operands, current)
                    )
            else:
                tokens.extend(self.tokenize_expr(operand, current))

        return tokens

    def format_value_expr(
        self,
        expr: Expr,
        parent_op: str | None = None,
        is_right_operand: bool = False,
    ) -> str:
        """Render an INSERT value: an atom or an arithmetic tree."""
        if isinstance(expr, AtomNode):
            return self._render_value_atom(expr)
        if not isinstance(expr, ArithmeticNode):
            raise StructuralError(
                "Only atoms and arithmetic expressions are allowed in VALUES.",
                node=expr,
            )

        op = expr.op
        left = self.format_value_expr(expr.left, op, False)
        right = self.format_value_expr(expr.right, op, True)
        rendered = f"{left} {op} {right}"

        if parent_op is not None and self._needs_parens(op, parent_op, is_right_operand):
            return f"({rendered})"
        return rendered

    # ------------------------------------------------------------------
    # Clause helpers
    # ------------------------------------------------------------------

    def _tokenize_insert(self, statement: DmlStatement) -> list[Token]:
        target = statement.insert_into
        if statement.columns:
            target = f"{target} ({', '.join(statement.columns)})"
        rows = ", ".join(
            f"({', '.join(self.format_value_expr(cell) for cell in row)})"
            for row in statement.values or ()
        )
        return [Token("INSERT INTO", target), Token("VALUES", rows)]

    @staticmethod
    def _order_by(order_by: str | tuple[str, str]) -> str:
        if isinstance(order_by, str):
            return order_by
        field, direction = order_by
        return f"{field} {direction.upper()}"

    @staticmethod
    def _needs_parens(op: str, parent_op: str, is_right_operand: bool) -> bool:
        precedence = ARITHMETIC_PRECEDENCE[op]
        parent_precedence = ARITHMETIC_PRECEDENCE[parent_op]
        if precedence < parent_precedence:
            return True
        return (
            precedence == parent_precedence
            and is_right_operand
            and parent_op in NON_ASSOCIATIVE_OPS
        )

    # ------------------------------------------------------------------
    # Atom helpers
    # ------------------------------------------------------------------

    def _render_comparison(self, expr: ComparisonNode) -> str:
        return f"{expr.column} {expr.op} {self._render_atom(expr.value)}"

    def _render_atom(self, atom: AtomNode) -> str:
        """Predicate atoms: strings are raw SQL fragments, not literals."""
        value = atom.value
        if is_placeholder(value):
            return self._placeholder(value)
        if value is None:
            return "NULL"
        if isinstance(value, bool):
            return "TRUE" if value else "FALSE"
        if isinstance(value, (int, float, Decimal)):
            return render_number(value)
        return value

    def _render_value_atom(self, atom: AtomNode) -> str:
        value = atom.value
        if is_placeholder(value):
            return self._placeholder(value)
        return render_literal(value)

    def _placeholder(self, value: Any) -> str:
        if self._context is None:
            raise StructuralError(
                "Placeholder found but no placeholder context was supplied.",
                node=value,
            )
        return self._context.add(value)


# ---------------------------------------------------------------------------
# Functional entry points
# ---------------------------------------------------------------------------


def tokenize_dml(
    statement: DmlStatement | dict[str, Any],
    context: PlaceholderContext | None = None,
) -> list[Token]:
    """Tokenize a DML statement (dict or parsed model).

    Raises:
        CompilationError: If ``statement`` is a DDL statement.
    """
    parsed = parse_statement(statement)
    if isinstance(parsed, DdlStatement):
        raise CompilationError("tokenize_dml() received a DDL statement.")
    return DmlTokenizer(context).tokenize(parsed)


def tokenize_expr(
    expr: Any,
    keyword: str = "WHERE",
    context: PlaceholderContext | None = None,
) -> list[Token]:
    """Tokenize a raw or decoded predicate tree."""
    return DmlTokenizer(context).tokenize_expr(decode_expr(expr), keyword)


def tokenize_logical(
    operator: str,
    operands: list[Any],
    first_keyword: str,
    context: PlaceholderContext | None = None,
) -> list[Token]:
    """Tokenize raw or decoded operands of an ``and`` / ``or``."""
    decoded = [decode_expr(o) for o in operands]
    return DmlTokenizer(context).tokenize_logical(operator.lower(), decoded, first_keyword)


def format_value_expr(
    expr: Any,
    parent_op: str | None = None,
    is_right_operand: bool = False,
    context: PlaceholderContext | None = None,
) -> str:
    """Render a raw or decoded INSERT value expression."""
    return DmlTokenizer(context).format_value_expr(
        decode_expr(expr), parent_op, is_right_operand
    )
