"""Aligned, human-readable token layout.

Keywords are right-aligned to the longest keyword of the statement::

      SELECT *
        FROM users
       WHERE active = true
         AND (shipping_country = US
           OR shipping_country = CA
           OR shipping_country = MX
         )
    ORDER BY id

A nested group of one or two tokens stays on one line.  Larger groups put
each operator on its own line, right-aligned so that its trailing space lands
just before the column where the first predicate starts, and close the group
on a line of its own under the keyword.  Groups inside a group are always
rendered on one line.
"""
from __future__ import annotations

from collections.abc import Sequence

from sqltree.compile.context import PlaceholderContext
from sqltree.format.resolver import resolve_display
from sqltree.keywords import DEFAULT_KEYWORDS, KeywordTable
from sqltree.schema.nodes import Token, is_single_token

Tokens = Token | Sequence[Token]


class PrettyFormatter:
    """Lays out tokens with right-aligned, upper-cased keywords.

    Args:
        keywords: Keyword casing table.
    """

    def __init__(self, keywords: KeywordTable = DEFAULT_KEYWORDS) -> None:
        self._kw = keywords

    def format(self, tokens: Tokens) -> str:
        if is_single_token(tokens):
            return self._format_single(tokens)  # type: ignore[arg-type]
        return self._format_lines(list(tokens))  # type: ignore[arg-type]

    # ------------------------------------------------------------------
    # Top level
    # ------------------------------------------------------------------

    def _format_single(self, token: Token) -> str:
        keyword, operand = token
        if isinstance(operand, str):
            return f"{self._kw.upper(keyword)} {operand}"
        return self._format_with_nested("", keyword, operand, 0)

    def _format_lines(self, tokens: list[Token]) -> str:
        if not tokens:
            return ""
        width = max(len(keyword) for keyword, _ in tokens)

        lines = []
        for keyword, operand in tokens:
            padding = " " * (width - len(keyword))
            if isinstance(operand, str):
                lines.append(f"{padding}{self._kw.upper(keyword)} {operand}")
            else:
                lines.append(
                    self._format_with_nested(padding, keyword, operand, len(padding))
                )
        return "\n".join(lines)

    # ------------------------------------------------------------------
    # Nested groups
    # ------------------------------------------------------------------

    def _format_with_nested(
        self,
        padding: str,
        keyword: str,
        group: Sequence[Token],
        base_indent: int,
    ) -> str:
        if len(group) <= 2:
            inner = self._single_line(group)
        else:
            inner = self._multi_line(group, base_indent, len(keyword))
        return f"{padding}{self._kw.upper(keyword)} {inner}"

    def _single_line(self, group: Sequence[Token]) -> str:
        parts = []
        for i, (op, operand) in enumerate(group):
            rendered = self._operand(operand)
            parts.append(rendered if i == 0 else f"{self._kw.upper(op)} {rendered}")
        return f"({' '.join(parts)})"

    def _multi_line(
        self, group: Sequence[Token], base_indent: int, keyword_length: int
    ) -> str:
        # Operators end one column before the first predicate.
        operator_end = base_indent + keyword_length

        _, first = group[0]
        result = f"({self._operand(first)}"
        for op, operand in group[1:]:
            op_start = operator_end - len(op) + 1
            result += f"\n{' ' * op_start}{self._kw.upper(op)} {self._operand(operand)}"
        return result + f"\n{' ' * base_indent})"

    def _operand(self, operand: str | Sequence[Token]) -> str:
        if isinstance(operand, str):
            return operand
        return self._single_line(operand)


def pretty_formatter(
    tokens: Tokens,
    context: PlaceholderContext | None = None,
    keywords: KeywordTable = DEFAULT_KEYWORDS,
) -> str:
    """Render ``tokens`` with :class:`PrettyFormatter`.

    When ``context`` is given, placeholder sentinels are replaced by their
    unbound display form (``$(0)``, ``$('key')``).
    """
    text = PrettyFormatter(keywords).format(tokens)
    if context is not None:
        text = resolve_display(text, context)
    return text
