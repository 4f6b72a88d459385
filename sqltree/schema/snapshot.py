"""Pydantic models for the SchemaSnapshot used to validate identifiers.

The SchemaSnapshot describes the tables and columns a statement may
reference.  It is produced by the caller (by hand, from JSON, or via
:func:`sqltree.schema.converters.schema_from_sqlalchemy`) and handed to
:class:`~sqltree.validate.schema_validator.SchemaValidator`.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ColumnInfo(BaseModel):
    """Metadata for a single column.

    Attributes:
        name: Column name.
        type: SQL type string (e.g. ``'TEXT'``, ``'INTEGER'``).
        nullable: Whether the column can be NULL.
    """

    model_config = ConfigDict(extra="forbid")

    name: str
    type: str = ""
    nullable: bool = True


class TableInfo(BaseModel):
    """Metadata for a single table.

    Attributes:
        name: Table name.
        columns: Ordered list of column metadata.
    """

    model_config = ConfigDict(extra="forbid")

    name: str
    columns: list[ColumnInfo]

    @property
    def column_names(self) -> list[str]:
        """Returns all column names for this table."""
        return [c.name for c in self.columns]


class SchemaSnapshot(BaseModel):
    """Describes the tables and columns a statement may reference.

    Attributes:
        tables: All known tables.
    """

    model_config = ConfigDict(extra="forbid")

    tables: list[TableInfo]

    def get_table(self, name: str) -> TableInfo | None:
        """Returns the TableInfo for the given table name, or ``None``."""
        for table in self.tables:
            if table.name == name:
                return table
        return None

    def get_column(self, table_name: str, column_name: str) -> ColumnInfo | None:
        """Returns the ColumnInfo for a table.column pair, or ``None``."""
        table = self.get_table(table_name)
        if table is None:
            return None
        for col in table.columns:
            if col.name == column_name:
                return col
        return None

    def get_column_names(self, table_name: str) -> list[str]:
        """Returns column names for ``table_name``, or ``[]`` if not found."""
        table = self.get_table(table_name)
        return table.column_names if table is not None else []

    def has_table(self, name: str) -> bool:
        """Returns ``True`` if ``name`` is a known table."""
        return self.get_table(name) is not None

    def has_column(self, table_name: str, column_name: str) -> bool:
        """Returns ``True`` if ``table_name.column_name`` exists."""
        return self.get_column(table_name, column_name) is not None

    @property
    def table_names(self) -> list[str]:
        """Returns all table names in the snapshot."""
        return [t.name for t in self.tables]
