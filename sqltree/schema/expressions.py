"""Operator constants and precedence tables for statement trees.

Expressions are written as prefix-form lists (``['=', 'id', 1]``,
``['and', p1, p2]``, ``['+', 2, 3]``).  This module defines the operator
sets used to classify those lists and the precedence table used when
rendering arithmetic.
"""

from __future__ import annotations

from enum import Enum

# ---------------------------------------------------------------------------
# Operator enums
# ---------------------------------------------------------------------------


class ComparisonOp(str, Enum):
    """Binary comparison operators: ``[op, column, value]``."""

    EQ = "="
    NE = "<>"
    LT = "<"
    GT = ">"
    LTE = "<="
    GTE = ">="
    LIKE = "LIKE"


class LogicalOp(str, Enum):
    """Logical connectives: ``[op, expr, expr, ...]``."""

    AND = "and"
    OR = "or"


class ArithmeticOp(str, Enum):
    """Binary arithmetic / concatenation operators: ``[op, left, right]``."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    CAT = "||"


# ---------------------------------------------------------------------------
# Operator groups
# ---------------------------------------------------------------------------

#: Comparison operators.
COMPARISON_OPS: frozenset[str] = frozenset(op.value for op in ComparisonOp)

#: Logical AND / OR.
LOGICAL_OPS: frozenset[str] = frozenset(op.value for op in LogicalOp)

#: Arithmetic operators.
ARITHMETIC_OPS: frozenset[str] = frozenset(op.value for op in ArithmeticOp)

#: Binding strength of each arithmetic operator (higher binds tighter).
ARITHMETIC_PRECEDENCE: dict[str, int] = {
    ArithmeticOp.CAT.value: 1,
    ArithmeticOp.ADD.value: 2,
    ArithmeticOp.SUB.value: 2,
    ArithmeticOp.MUL.value: 3,
    ArithmeticOp.DIV.value: 3,
    ArithmeticOp.MOD.value: 3,
}

#: Operators whose right operand needs parentheses on a precedence tie.
NON_ASSOCIATIVE_OPS: frozenset[str] = frozenset(
    {ArithmeticOp.SUB.value, ArithmeticOp.DIV.value}
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def comparison_op(op: object) -> str | None:
    """Return the canonical comparison operator for ``op`` or ``None``.

    ``LIKE`` is matched case-insensitively; symbols must match exactly.
    """
    if not isinstance(op, str):
        return None
    if op in COMPARISON_OPS:
        return op
    if op.upper() == ComparisonOp.LIKE.value:
        return ComparisonOp.LIKE.value
    return None


def logical_op(op: object) -> str | None:
    """Return the lower-case logical operator for ``op`` or ``None``."""
    if isinstance(op, str) and op.lower() in LOGICAL_OPS:
        return op.lower()
    return None


def arithmetic_op(op: object) -> str | None:
    """Return ``op`` if it is an arithmetic operator, otherwise ``None``."""
    if isinstance(op, str) and op in ARITHMETIC_OPS:
        return op
    return None
