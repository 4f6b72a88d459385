"""Build a :class:`~sqltree.schema.snapshot.SchemaSnapshot` from SQLAlchemy.

Needs the optional extra: ``pip install "sqltree[sqlalchemy]"``.

Either reflect a live database::

    snapshot = schema_from_sqlalchemy(create_engine("sqlite:///app.db"))

or reuse table declarations the application already has::

    snapshot = schema_from_sqlalchemy(Base.metadata)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqltree.schema.snapshot import ColumnInfo, SchemaSnapshot, TableInfo

if TYPE_CHECKING:
    from sqlalchemy import Engine, MetaData, Table


def schema_from_sqlalchemy(
    source: Engine | MetaData,
    *,
    include_tables: list[str] | None = None,
    schema: str | None = None,
) -> SchemaSnapshot:
    """Snapshot the tables of ``source`` for identifier validation.

    Args:
        source: An engine to reflect, or a ``MetaData`` whose tables are
            taken as declared.
        include_tables: Only snapshot these tables.
        schema: Database schema to reflect (engines only).

    Raises:
        ImportError: If ``sqlalchemy`` is not installed.
    """
    try:
        from sqlalchemy import MetaData
    except ImportError as exc:
        raise ImportError(
            'schema_from_sqlalchemy() needs SQLAlchemy: pip install "sqltree[sqlalchemy]"'
        ) from exc

    if isinstance(source, MetaData):
        metadata = source
    else:
        metadata = MetaData()
        with source.connect() as conn:
            metadata.reflect(bind=conn, only=include_tables, schema=schema)

    return SchemaSnapshot(
        tables=[
            _table_info(table)
            for table in metadata.sorted_tables
            if include_tables is None or table.name in include_tables
        ]
    )


def _table_info(table: Table) -> TableInfo:
    # Reflected columns report nullable as None when the backend does not say.
    return TableInfo(
        name=table.name,
        columns=[
            ColumnInfo(name=c.name, type=str(c.type), nullable=c.nullable is not False)
            for c in table.columns
        ],
    )
