"""Flat token layout: one ``KEYWORD operand`` per token, joined by a separator.

Used for production SQL (``" "``) and for line-per-clause output (``"\\n"``).
Keywords are emitted exactly as the tokenizer produced them.
"""
from __future__ import annotations

from collections.abc import Sequence

from sqltree.compile.context import PlaceholderContext
from sqltree.format.resolver import resolve_markers
from sqltree.schema.nodes import Token, is_single_token

Tokens = Token | Sequence[Token]


def format_operand(operand: str | Sequence[Token]) -> str:
    """Render an operand; nested groups become ``(a OP b ...)`` on one line."""
    if isinstance(operand, str):
        return operand
    return format_nested(operand)


def format_nested(group: Sequence[Token]) -> str:
    parts = []
    for i, (op, operand) in enumerate(group):
        rendered = format_operand(operand)
        parts.append(rendered if i == 0 else f"{op} {rendered}")
    return f"({' '.join(parts)})"


def _format_token(token: Token) -> str:
    keyword, operand = token
    return f"{keyword} {format_operand(operand)}"


def separator_formatter(
    separator: str,
    tokens: Tokens,
    context: PlaceholderContext | None = None,
) -> str:
    """Render ``tokens`` (one token or a list) joined by ``separator``.

    When ``context`` is given, placeholder sentinels are replaced by the
    context dialect's markers.
    """
    if is_single_token(tokens):
        text = _format_token(tokens)  # type: ignore[arg-type]
    else:
        text = separator.join(_format_token(t) for t in tokens)  # type: ignore[union-attr]
    if context is not None:
        text = resolve_markers(text, context)
    return text
