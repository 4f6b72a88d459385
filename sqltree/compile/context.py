"""Per-call placeholder accumulator.

A single :class:`PlaceholderContext` is created for each top-level compile
call.  The tokenizers append to it as they discover placeholders (phase 1);
the resolvers only read from it (phase 2).
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from sqltree.compile.base import Dialect
from sqltree.compile.dialects import CommonDialect
from sqltree.schema.placeholders import (
    DirectPlaceholder,
    NamedPlaceholder,
    Placeholder,
    PositionalPlaceholder,
)

#: Matches one sentinel marker; group 1 is the placeholder ordinal.
SENTINEL_RE = re.compile("\x00SQLTREE_PH_(\\d+)\x00")


def sentinel(index: int) -> str:
    """Return the sentinel text for the ``index``-th placeholder."""
    return f"\x00SQLTREE_PH_{index}\x00"


@dataclass(frozen=True)
class PositionalEntry:
    """A bare ``ph``; bound by its ordinal among the bare ``ph`` entries."""

    index: int
    ordinal: int = 0


@dataclass(frozen=True)
class NamedEntry:
    """A ``ph(key)``; bound by key."""

    index: int
    key: str


@dataclass(frozen=True)
class DirectEntry:
    """A placeholder that carries its own value."""

    index: int
    value: Any


PlaceholderEntry = PositionalEntry | NamedEntry | DirectEntry


@dataclass
class PlaceholderContext:
    """Accumulates placeholders discovered while tokenizing one statement.

    Attributes:
        dialect: Marker syntax used when resolving to production SQL.
        placeholders: Entries in first-seen order; this is the bind order.
    """

    dialect: Dialect = field(default_factory=CommonDialect)
    placeholders: list[PlaceholderEntry] = field(default_factory=list)

    def add(self, placeholder: Placeholder) -> str:
        """Record ``placeholder`` and return its sentinel text."""
        index = len(self.placeholders)
        if isinstance(placeholder, NamedPlaceholder):
            entry: PlaceholderEntry = NamedEntry(index, placeholder.key)
        elif isinstance(placeholder, DirectPlaceholder):
            entry = DirectEntry(index, placeholder.value)
        elif isinstance(placeholder, PositionalPlaceholder):
            ordinal = sum(isinstance(e, PositionalEntry) for e in self.placeholders)
            entry = PositionalEntry(index, ordinal)
        else:
            raise TypeError(f"Not a placeholder: {placeholder!r}")
        self.placeholders.append(entry)
        return sentinel(index)

    def format_placeholder(self, index: int) -> str:
        """Return the dialect marker for the ``index``-th placeholder."""
        return self.dialect.placeholder(index)
