"""Token layout and placeholder resolution."""
from sqltree.format.pretty import PrettyFormatter, pretty_formatter
from sqltree.format.resolver import display_literal, resolve_display, resolve_markers
from sqltree.format.separator import separator_formatter

__all__ = [
    "PrettyFormatter",
    "display_literal",
    "pretty_formatter",
    "resolve_display",
    "resolve_markers",
    "separator_formatter",
]
