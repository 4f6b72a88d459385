"""sqltree compilation layer: statement tree → SQL text and bind values."""
from sqltree.compile.base import CompiledSQL, Dialect
from sqltree.compile.builder import StatementCompiler
from sqltree.compile.context import PlaceholderContext
from sqltree.compile.dialects import CommonDialect, PostgresDialect
from sqltree.compile.registry import DialectFactory

__all__ = [
    "CompiledSQL",
    "Dialect",
    "StatementCompiler",
    "PlaceholderContext",
    "CommonDialect",
    "PostgresDialect",
    "DialectFactory",
]
