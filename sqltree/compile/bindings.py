"""Bind-value validation and extraction.

Bindings are either a sequence (bare ``ph`` placeholders, bound by ordinal)
or a mapping (``ph("key")`` placeholders bound by key; a bare ``ph`` looks up
its ordinal as an ``int`` key).  Direct placeholders carry their own value
and never consume a binding.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from sqltree.compile.context import (
    DirectEntry,
    NamedEntry,
    PlaceholderContext,
    PlaceholderEntry,
)
from sqltree.errors import BindingError

Bindings = Sequence[Any] | Mapping[Any, Any]

#: Returned by :func:`lookup_binding` when asked to distinguish "absent".
MISSING = object()


def _binding_key(entry: PlaceholderEntry) -> Any:
    if isinstance(entry, NamedEntry):
        return entry.key
    return entry.ordinal


def lookup_binding(
    entry: PlaceholderEntry,
    bindings: Bindings | None,
    default: Any = None,
) -> Any:
    """Return the value ``bindings`` supplies for ``entry``, or ``default``."""
    if isinstance(entry, DirectEntry):
        return entry.value
    if bindings is None:
        return default
    key = _binding_key(entry)
    if isinstance(bindings, Mapping):
        return bindings.get(key, default)
    if isinstance(key, int) and 0 <= key < len(bindings):
        return bindings[key]
    return default


def validate_bindings(context: PlaceholderContext, bindings: Bindings) -> None:
    """Check that ``bindings`` satisfies every placeholder in ``context``.

    Raises:
        BindingError: On a count mismatch, a missing key, or named
            placeholders bound from a sequence.
    """
    entries = [e for e in context.placeholders if not isinstance(e, DirectEntry)]

    if isinstance(bindings, Mapping):
        for entry in entries:
            key = _binding_key(entry)
            if key in bindings:
                continue
            if isinstance(entry, NamedEntry):
                raise BindingError(f"Missing parameter: {key}", key=key)
            raise BindingError(
                f"Missing parameter: {key} (positional placeholder ph #{key} is "
                f"bound from mapping bindings by the int key {key})",
                key=key,
            )
        return

    if isinstance(bindings, (str, bytes)) or not isinstance(bindings, Sequence):
        raise BindingError(
            f"Bindings must be a sequence or a mapping, got {type(bindings).__name__}."
        )

    named = [e.key for e in entries if isinstance(e, NamedEntry)]
    if named:
        raise BindingError(
            f"Named parameter {named[0]!r} requires mapping bindings.", key=named[0]
        )
    if len(bindings) != len(entries):
        raise BindingError(
            f"Parameter count mismatch: expected {len(entries)} parameters "
            f"but received {len(bindings)}",
            expected=len(entries),
            received=len(bindings),
        )


def extract_binds(
    context: PlaceholderContext, bindings: Bindings | None = None
) -> list[Any]:
    """Return the bind values in placeholder order.

    Values that ``bindings`` does not supply come back as ``None``.
    """
    return [lookup_binding(entry, bindings) for entry in context.placeholders]
