"""sqltree schema models: expression nodes, placeholders, statements, snapshots."""
from sqltree.schema.nodes import (
    ArithmeticNode,
    AtomNode,
    ComparisonNode,
    Expr,
    LogicalNode,
    Token,
    decode_expr,
)
from sqltree.schema.placeholders import (
    DirectPlaceholder,
    NamedPlaceholder,
    Placeholder,
    PositionalPlaceholder,
    ph,
)
from sqltree.schema.snapshot import ColumnInfo, SchemaSnapshot, TableInfo
from sqltree.schema.statement import (
    DdlStatement,
    DmlStatement,
    IndexSpec,
    Statement,
    parse_statement,
    partial,
)

__all__ = [
    "ArithmeticNode",
    "AtomNode",
    "ComparisonNode",
    "Expr",
    "LogicalNode",
    "Token",
    "decode_expr",
    "DirectPlaceholder",
    "NamedPlaceholder",
    "Placeholder",
    "PositionalPlaceholder",
    "ph",
    "ColumnInfo",
    "SchemaSnapshot",
    "TableInfo",
    "DdlStatement",
    "DmlStatement",
    "IndexSpec",
    "Statement",
    "parse_statement",
    "partial",
]
