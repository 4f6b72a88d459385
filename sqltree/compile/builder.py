"""Statement tree → SQL compilation.

``StatementCompiler`` is the top-level orchestrator.  Each public method runs
the same two-phase pipeline and differs only in layout and in how
placeholders are resolved:

=========  ================  =======================  =====================
method     layout            placeholders             binding validation
=========  ================  =======================  =====================
compile    one line          dialect markers          on by default
print      line per clause   display values           off by default
pretty     aligned           display values           on by default
pprint     aligned           display values           on by default
=========  ================  =======================  =====================

``print`` and ``pprint`` also log their output at DEBUG.

Runtime context sharing
-----------------------
A single :class:`~sqltree.compile.context.PlaceholderContext` is created per
call and threaded through the tokenizer.  Tokenizing appends to it; the
resolvers only read from it, so one context serves every rendering of the
same call.
"""

from __future__ import annotations

import logging
from typing import Any

from sqltree.compile.base import CompiledSQL, Dialect
from sqltree.compile.bindings import Bindings, extract_binds, validate_bindings
from sqltree.compile.context import PlaceholderContext
from sqltree.compile.ddl_tokenizer import DdlTokenizer
from sqltree.compile.registry import DialectFactory
from sqltree.compile.tokenizer import DmlTokenizer
from sqltree.format.pretty import PrettyFormatter
from sqltree.format.resolver import resolve_display
from sqltree.format.separator import separator_formatter
from sqltree.keywords import DEFAULT_KEYWORDS, KeywordTable
from sqltree.schema.nodes import Token
from sqltree.schema.snapshot import SchemaSnapshot
from sqltree.schema.statement import DdlStatement, Statement, parse_statement
from sqltree.validate.schema_validator import SchemaValidator

logger = logging.getLogger(__name__)


class StatementCompiler:
    """Compiles statement trees to SQL text plus ordered bind values.

    Args:
        dialect: Registered dialect name (``"common"``, ``"pg"``) or a
            :class:`~sqltree.compile.base.Dialect` instance.
        snapshot: Optional schema; when given, identifiers are checked
            against it and literal values are sent as bind parameters.
        keywords: Keyword casing table for pretty output and DDL.
    """

    def __init__(
        self,
        dialect: str | Dialect = "common",
        snapshot: SchemaSnapshot | None = None,
        keywords: KeywordTable = DEFAULT_KEYWORDS,
    ) -> None:
        self._dialect = DialectFactory.create(dialect)
        self._validator = SchemaValidator(snapshot) if snapshot is not None else None
        self._keywords = keywords

    @property
    def dialect(self) -> Dialect:
        return self._dialect

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def compile(
        self,
        tree: Any,
        bindings: Bindings | None = None,
        *,
        validate_bindings: bool = True,
    ) -> CompiledSQL:
        """Compile ``tree`` to single-line SQL with dialect markers.

        Args:
            tree: Statement dict (or parsed statement).
            bindings: Sequence or mapping of bind values.
            validate_bindings: Check ``bindings`` against the placeholders.

        Returns:
            ``CompiledSQL`` with the SQL text and bind values in marker order.

        Raises:
            StructuralError: If the tree is malformed.
            SchemaError: If a snapshot was given and an identifier is unknown.
            BindingError: If validation is on and ``bindings`` do not match.
        """
        context, tokens = self._tokenize(tree)
        sql = separator_formatter(" ", tokens, context)
        return self._finish(sql, context, bindings, validate_bindings)

    def print(
        self,
        tree: Any,
        bindings: Bindings | None = None,
        *,
        validate_bindings: bool = False,
    ) -> CompiledSQL:
        """Compile ``tree`` with one clause per line for reading.

        Placeholders show their bound value, or ``$(i)`` / ``$('key')`` when
        no bindings were supplied.  The text is also logged at DEBUG.
        """
        context, tokens = self._tokenize(tree)
        text = separator_formatter("\n", tokens)
        if bindings is not None:
            self._validate(context, bindings, validate_bindings)
        result = CompiledSQL(
            resolve_display(text, context, bindings),
            extract_binds(context, bindings),
            self._dialect.name,
        )
        logger.debug("%s\n%r", result.sql, result.params)
        return result

    def pretty(
        self,
        tree: Any,
        bindings: Bindings | None = None,
        *,
        validate_bindings: bool = True,
    ) -> CompiledSQL:
        """Render ``tree`` with aligned keywords and bound values shown inline.

        The text is meant for humans: placeholders show their bound value,
        or ``$(i)`` / ``$('key')`` when no bindings were supplied.
        """
        context, tokens = self._tokenize(tree)
        text = PrettyFormatter(self._keywords).format(tokens)
        if bindings:
            self._validate(context, bindings, validate_bindings)
        if context.placeholders:
            text = resolve_display(text, context, bindings)
        return CompiledSQL(text, extract_binds(context, bindings), self._dialect.name)

    def pprint(
        self,
        tree: Any,
        bindings: Bindings | None = None,
        *,
        validate_bindings: bool = True,
    ) -> CompiledSQL:
        """Same as :meth:`pretty`, and log the result at DEBUG."""
        result = self.pretty(tree, bindings, validate_bindings=validate_bindings)
        logger.debug("%s", result.sql)
        return result

    # ------------------------------------------------------------------
    # Pipeline helpers
    # ------------------------------------------------------------------

    def _prepare(self, tree: Any) -> Statement:
        statement = parse_statement(tree)
        if self._validator is not None:
            self._validator.validate(statement)
            statement = self._validator.wrap_literals(statement)
        return statement

    def _tokenize(self, tree: Any) -> tuple[PlaceholderContext, list[Token]]:
        statement = self._prepare(tree)
        context = PlaceholderContext(dialect=self._dialect)
        if isinstance(statement, DdlStatement):
            tokens = DdlTokenizer(self._keywords).tokenize(statement)
        else:
            tokens = DmlTokenizer(context).tokenize(statement)
        return context, tokens

    @staticmethod
    def _validate(
        context: PlaceholderContext, bindings: Bindings, enabled: bool
    ) -> None:
        if enabled and context.placeholders:
            validate_bindings(context, bindings)

    def _finish(
        self,
        sql: str,
        context: PlaceholderContext,
        bindings: Bindings | None,
        enabled: bool,
    ) -> CompiledSQL:
        if bindings is not None:
            self._validate(context, bindings, enabled)
        return CompiledSQL(sql, extract_binds(context, bindings), self._dialect.name)
