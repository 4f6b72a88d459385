"""Dialect registry (Open/Closed Principle).

``DialectFactory``
    Central registry for :class:`~sqltree.compile.base.Dialect`
    implementations.  Register a new dialect once; the ``format_*`` entry
    points look it up by name.

Usage::

    from sqltree.compile.registry import DialectFactory

    @DialectFactory.register("named")
    class NamedDialect(Dialect):
        ...
"""

from __future__ import annotations

from collections.abc import Callable
from typing import ClassVar

from sqltree.compile.base import Dialect
from sqltree.errors import CompilationError


class DialectFactory:
    """Registry mapping dialect names to :class:`Dialect` classes.

    Example::

        @DialectFactory.register("named")
        class NamedDialect(Dialect):
            ...

        dialect = DialectFactory.create("named")
    """

    _dialects: ClassVar[dict[str, type[Dialect]]] = {}

    @classmethod
    def register(cls, name: str) -> Callable[[type[Dialect]], type[Dialect]]:
        """Decorator that registers a dialect class under ``name``.

        Args:
            name: The dialect name (e.g. ``"pg"``).

        Returns:
            A decorator that registers and returns the dialect class.
        """

        def decorator(dialect_cls: type[Dialect]) -> type[Dialect]:
            cls._dialects[name] = dialect_cls
            return dialect_cls

        return decorator

    @classmethod
    def register_class(cls, name: str, dialect_cls: type[Dialect]) -> None:
        """Register a dialect class without using the decorator form."""
        cls._dialects[name] = dialect_cls

    @classmethod
    def create(cls, name: str | Dialect) -> Dialect:
        """Instantiate the dialect registered for ``name``.

        A :class:`Dialect` instance is returned unchanged.

        Raises:
            CompilationError: If no dialect is registered for ``name``.
        """
        if isinstance(name, Dialect):
            return name
        dialect_cls = cls._dialects.get(name)
        if dialect_cls is None:
            registered = sorted(cls._dialects)
            raise CompilationError(
                f"Unsupported dialect: '{name}'. Registered dialects: {registered}."
            )
        return dialect_cls()

    @classmethod
    def registered_targets(cls) -> list[str]:
        """Return the sorted list of registered dialect names."""
        return sorted(cls._dialects)
