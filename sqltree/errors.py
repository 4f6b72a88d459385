"""Custom exception hierarchy for sqltree.

All public errors inherit from SqlTreeError so callers can catch the base
class for any sqltree-specific failure.

Unknown keywords are not part of this hierarchy: the formatters echo them
unchanged and log a diagnostic instead of raising.
"""
from __future__ import annotations

from typing import Any


class SqlTreeError(Exception):
    """Base exception for all sqltree errors."""


class StructuralError(SqlTreeError):
    """Raised when a statement tree has a malformed shape.

    Args:
        message: Human-readable description.
        node: The offending (raw) node, when available.
    """

    def __init__(self, message: str, node: Any = None) -> None:
        super().__init__(message)
        self.node = node


class ValidationError(SqlTreeError):
    """Raised when a statement references identifiers the schema rejects.

    Args:
        message: Human-readable description.
        code: Machine-readable error code (e.g. UNKNOWN_COLUMN).
        details: Extra context about the failure.
    """

    def __init__(
        self,
        message: str,
        code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details: dict[str, Any] = details or {}

    def to_error_response(self) -> dict[str, Any]:
        """Returns a structured error response."""
        return {
            "error": self.code,
            "message": str(self),
            "details": self.details,
        }


class SchemaError(ValidationError):
    """Raised when the statement references an unknown table or column."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code="SCHEMA_ERROR", details=details or {})


class BindingError(SqlTreeError):
    """Raised when supplied bindings do not match the statement placeholders.

    Args:
        message: Human-readable description.
        key: The missing named key, if the failure is about one.
        expected: Number of bindings the statement needs.
        received: Number of bindings supplied.
    """

    def __init__(
        self,
        message: str,
        key: str | int | None = None,
        expected: int | None = None,
        received: int | None = None,
    ) -> None:
        super().__init__(message)
        self.key = key
        self.expected = expected
        self.received = received


class CompilationError(SqlTreeError):
    """Raised when SQL compilation fails for an unexpected reason.

    Args:
        message: Human-readable description.
        clause: The statement clause being compiled when the error occurred.
    """

    def __init__(self, message: str, clause: str | None = None) -> None:
        super().__init__(message)
        self.clause = clause
