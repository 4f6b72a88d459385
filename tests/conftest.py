"""Shared pytest fixtures for sqltree unit and integration tests."""
from __future__ import annotations

import pytest

from sqltree.compile.context import PlaceholderContext
from sqltree.compile.dialects import CommonDialect, PostgresDialect
from sqltree.schema.snapshot import SchemaSnapshot
from tests.fixtures import load_schema_snapshot


@pytest.fixture(scope="session")
def snapshot() -> SchemaSnapshot:
    """Canonical schema snapshot shared across all tests."""
    return load_schema_snapshot()


@pytest.fixture
def ctx() -> PlaceholderContext:
    """Fresh placeholder context for the common (``?``) dialect."""
    return PlaceholderContext(dialect=CommonDialect())


@pytest.fixture
def pg_ctx() -> PlaceholderContext:
    """Fresh placeholder context for the numbered (``$1``) dialect."""
    return PlaceholderContext(dialect=PostgresDialect())
