"""Phase 2: replace sentinel markers in rendered text.

Tokenizers embed one sentinel per placeholder occurrence; these helpers
substitute either the dialect's bind marker (production SQL) or a
human-readable rendering (print / pretty output).
"""
from __future__ import annotations

from typing import Any

from sqltree.compile.bindings import MISSING, Bindings, lookup_binding
from sqltree.compile.context import (
    SENTINEL_RE,
    DirectEntry,
    NamedEntry,
    PlaceholderContext,
)


def display_literal(value: Any) -> str:
    """Render a bound value the way it would read inside a SQL statement."""
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, str):
        escaped = value.replace("'", "''")
        return f"'{escaped}'"
    return str(value)


def resolve_markers(text: str, context: PlaceholderContext) -> str:
    """Replace every sentinel with the context dialect's marker."""
    return SENTINEL_RE.sub(
        lambda m: context.format_placeholder(int(m.group(1))), text
    )


def resolve_display(
    text: str,
    context: PlaceholderContext,
    bindings: Bindings | None = None,
) -> str:
    """Replace every sentinel with a display rendering.

    Without bindings, positional placeholders show as ``$(i)`` and named ones
    as ``$('key')``.  With bindings, the bound value is shown as a literal.
    Direct placeholders always show their embedded value.
    """
    have_bindings = bool(bindings)

    def replace(match: Any) -> str:
        entry = context.placeholders[int(match.group(1))]
        if isinstance(entry, DirectEntry):
            return display_literal(entry.value)
        if have_bindings:
            value = lookup_binding(entry, bindings, default=MISSING)
            if value is not MISSING:
                return display_literal(value)
        if isinstance(entry, NamedEntry):
            return f"$('{entry.key}')"
        return f"$({entry.ordinal})"

    return SENTINEL_RE.sub(replace, text)

