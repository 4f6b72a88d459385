"""Compiler abstractions: CompiledSQL and the Dialect ABC.

The Strategy pattern is used: the statement compiler asks the injected
``Dialect`` for each bind-parameter marker, so adding a target placeholder
syntax means adding one subclass.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any


@dataclass
class CompiledSQL:
    """The output of a successful compilation.

    Unpacks as ``(sql, *params)``::

        sql, *binds = format_sql(tree, [123, "active"], dialect="pg")

    Attributes:
        sql: The rendered SQL text.
        params: Bind values in placeholder order.
        dialect: The dialect the markers were rendered for.
    """

    sql: str
    params: list[Any] = field(default_factory=list)
    dialect: str = "common"

    def __iter__(self) -> Iterator[Any]:
        yield self.sql
        yield from self.params

    def __str__(self) -> str:
        return self.sql

    def as_tuple(self) -> tuple[Any, ...]:
        """Return ``(sql, *params)`` as a tuple."""
        return tuple(self)


class Dialect(ABC):
    """Abstract base for placeholder-syntax dialects."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the canonical dialect name (``'common'`` or ``'pg'``)."""

    @abstractmethod
    def placeholder(self, index: int) -> str:
        """Return the bind-parameter marker for the ``index``-th placeholder.

        Args:
            index: Zero-based ordinal of the placeholder in first-seen order.

        Returns:
            Dialect-specific marker text.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
