"""Keyword casing table shared by the pretty formatter and the DDL tokenizer.

The table is an immutable value: it is built once (``DEFAULT_KEYWORDS``) and
handed to the components that need it, rather than read from module state.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

logger = logging.getLogger(__name__)

_DEFAULT_MAPPING: dict[str, str] = {
    # clauses
    "select": "SELECT",
    "from": "FROM",
    "where": "WHERE",
    "order by": "ORDER BY",
    "insert into": "INSERT INTO",
    "values": "VALUES",
    "and": "AND",
    "or": "OR",
    # DDL statements
    "create table": "CREATE TABLE",
    "create index": "CREATE INDEX",
    "create unique index": "CREATE UNIQUE INDEX",
    "drop table": "DROP TABLE",
    "drop index": "DROP INDEX",
    "on": "ON",
    "if exists": "IF EXISTS",
    "if not exists": "IF NOT EXISTS",
    # constraints
    "check": "CHECK",
    "column": "COLUMN",
    "composite": "COMPOSITE",
    "default": "DEFAULT",
    "foreign key": "FOREIGN KEY",
    "not": "NOT",
    "not null": "NOT NULL",
    "primary key": "PRIMARY KEY",
    "references": "REFERENCES",
    "unique": "UNIQUE",
    # column types
    "bigint": "BIGINT",
    "blob": "BLOB",
    "boolean": "BOOLEAN",
    "char": "CHAR",
    "date": "DATE",
    "decimal": "DECIMAL",
    "float": "FLOAT",
    "integer": "INTEGER",
    "numeric": "NUMERIC",
    "real": "REAL",
    "smallint": "SMALLINT",
    "text": "TEXT",
    "timestamp": "TIMESTAMP",
    "varchar": "VARCHAR",
}


class KeywordTable:
    """Case-insensitive lookup from SQL keyword to its canonical spelling.

    Args:
        mapping: Lower-case keyword → canonical text.
    """

    def __init__(self, mapping: Mapping[str, str]) -> None:
        self._mapping = MappingProxyType({k.lower(): v for k, v in mapping.items()})

    def __contains__(self, keyword: object) -> bool:
        return isinstance(keyword, str) and keyword.lower() in self._mapping

    def __len__(self) -> int:
        return len(self._mapping)

    @property
    def mapping(self) -> Mapping[str, str]:
        """Read-only view of the lookup table."""
        return self._mapping

    def upper(self, keyword: str) -> str:
        """Return the canonical spelling of ``keyword``.

        Unknown keywords are returned unchanged and a warning is logged so
        that rendering keeps working while new keywords are added.
        """
        if keyword == "":
            return keyword
        result = self._mapping.get(keyword.lower())
        if result is None:
            logger.warning("No upper case keyword for %r", keyword)
            return keyword
        return result

    def extend(self, **extra: str) -> KeywordTable:
        """Return a new table with ``extra`` entries merged in.

        Keyword arguments use underscores for spaces, e.g.
        ``extend(group_by="GROUP BY")``.
        """
        merged = dict(self._mapping)
        merged.update({k.replace("_", " ").lower(): v for k, v in extra.items()})
        return KeywordTable(merged)


#: The built-in keyword table.
DEFAULT_KEYWORDS = KeywordTable(_DEFAULT_MAPPING)
