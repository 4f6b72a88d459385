"""Typed expression nodes and the intermediate token representation.

Callers write expressions as plain prefix-form lists.  :func:`decode_expr`
classifies such a list once, at the tree boundary, into a discriminated
union of frozen Pydantic models; the tokenizer then dispatches on the node
type instead of re-inspecting list shapes on every recursive call.

Usage::

    from sqltree.schema.nodes import decode_expr, LogicalNode

    node = decode_expr(["and", ["=", "a", 1], ["=", "b", 2]])
    assert isinstance(node, LogicalNode)
    assert node.op == "and"
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Annotated, Any, Literal, NamedTuple

from pydantic import BaseModel, ConfigDict, Field

from sqltree.errors import StructuralError
from sqltree.schema.expressions import arithmetic_op, comparison_op, logical_op
from sqltree.schema.placeholders import is_placeholder

logger = logging.getLogger(__name__)

_FROZEN = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

#: Python types accepted as atom values (besides placeholders).
ATOM_TYPES: tuple[type, ...] = (str, int, float, bool, Decimal, type(None))


# ---------------------------------------------------------------------------
# Node types
# ---------------------------------------------------------------------------


class AtomNode(BaseModel):
    """A leaf value: string, number, ``None`` or a placeholder."""

    model_config = _FROZEN

    kind: Literal["atom"] = "atom"
    value: Any = None


class ComparisonNode(BaseModel):
    """``[op, column, value]`` with ``op`` one of ``= <> < > <= >= LIKE``.

    An unrecognised operator in comparison position is kept verbatim.
    """

    model_config = _FROZEN

    kind: Literal["comparison"] = "comparison"
    op: str
    column: str
    value: AtomNode


class LogicalNode(BaseModel):
    """``[op, expr, expr, ...]`` with ``op`` one of ``and`` / ``or``."""

    model_config = _FROZEN

    kind: Literal["logical"] = "logical"
    op: Literal["and", "or"]
    operands: tuple[Expr, ...]


class ArithmeticNode(BaseModel):
    """``[op, left, right]`` with ``op`` one of ``+ - * / % ||``."""

    model_config = _FROZEN

    kind: Literal["arithmetic"] = "arithmetic"
    op: str
    left: Expr
    right: Expr


Expr = Annotated[
    AtomNode | ComparisonNode | LogicalNode | ArithmeticNode,
    Field(discriminator="kind"),
]

LogicalNode.model_rebuild()
ArithmeticNode.model_rebuild()

_NODE_TYPES = (AtomNode, ComparisonNode, LogicalNode, ArithmeticNode)


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------


class Token(NamedTuple):
    """A ``(keyword, operand)`` pair produced by the tokenizers.

    ``operand`` is either rendered text or one nested group of tokens
    representing a parenthesised sub-predicate.
    """

    keyword: str
    operand: str | tuple[Token, ...]


def is_single_token(tokens: object) -> bool:
    """Return ``True`` if ``tokens`` is one token rather than a token list."""
    return (
        isinstance(tokens, (list, tuple))
        and len(tokens) == 2
        and isinstance(tokens[0], str)
    )


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def decode_atom(value: Any) -> AtomNode:
    """Wrap a raw leaf value in an :class:`AtomNode`.

    Raises:
        StructuralError: If ``value`` is not a supported atom type.
    """
    if isinstance(value, AtomNode):
        return value
    if is_placeholder(value) or isinstance(value, ATOM_TYPES):
        return AtomNode(value=value)
    raise StructuralError(
        f"Unsupported atom of type {type(value).__name__}: {value!r}", node=value
    )


def decode_expr(raw: Any) -> Expr:
    """Classify a raw expression into a typed node, recursively.

    Args:
        raw: A prefix-form list, a leaf value, or an already decoded node.

    Returns:
        The typed node.

    Raises:
        StructuralError: If the expression shape is malformed.
    """
    if isinstance(raw, _NODE_TYPES):
        return raw
    if not isinstance(raw, (list, tuple)):
        return decode_atom(raw)
    if not raw:
        raise StructuralError("Empty expression.", node=raw)

    head, *args = raw

    op = comparison_op(head)
    if op is not None:
        return _comparison(op, args, raw)

    op = logical_op(head)
    if op is not None:
        if len(args) < 2:
            raise StructuralError(
                f"Logical operator '{op}' requires at least 2 operands, got {len(args)}.",
                node=raw,
            )
        return LogicalNode(op=op, operands=tuple(decode_expr(a) for a in args))

    op = arithmetic_op(head)
    if op is not None:
        if len(args) != 2:
            raise StructuralError(
                f"Arithmetic operator '{op}' takes 2 operands, got {len(args)}.",
                node=raw,
            )
        left, right = args
        return ArithmeticNode(op=op, left=decode_expr(left), right=decode_expr(right))

    # Unknown comparator: echoed unchanged.
    if (
        isinstance(head, str)
        and head
        and len(args) == 2
        and not isinstance(args[1], (list, tuple))
    ):
        logger.warning("No comparison operator for %r, rendering it unchanged", head)
        return _comparison(head, args, raw)

    raise StructuralError(f"Unknown expression operator: {head!r}", node=raw)


def _comparison(op: str, args: list[Any], raw: Any) -> ComparisonNode:
    if len(args) != 2:
        raise StructuralError(
            f"Comparison '{op}' takes 2 operands, got {len(args)}.", node=raw
        )
    column, value = args
    if isinstance(value, (list, tuple)):
        raise StructuralError(
            f"Comparison '{op}' value must be an atom, got {value!r}.", node=raw
        )
    if not isinstance(column, (str, int, float)):
        raise StructuralError(
            f"Comparison '{op}' column must be a name, got {column!r}.", node=raw
        )
    return ComparisonNode(op=op, column=str(column), value=decode_atom(value))
