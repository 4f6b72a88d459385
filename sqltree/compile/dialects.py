"""Built-in placeholder dialects."""
from __future__ import annotations

from sqltree.compile.base import Dialect


class CommonDialect(Dialect):
    """Question-mark markers: ``?``.

    Compatible with ``sqlite3``, ``libsql`` and other qmark-style drivers.
    """

    @property
    def name(self) -> str:
        return "common"

    def placeholder(self, index: int) -> str:
        return "?"


class PostgresDialect(Dialect):
    """Numbered markers: ``$1``, ``$2``, … (``asyncpg`` / PostgreSQL wire style)."""

    @property
    def name(self) -> str:
        return "pg"

    def placeholder(self, index: int) -> str:
        return f"${index + 1}"
