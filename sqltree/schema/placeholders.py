"""Bind-parameter placeholders that can appear as atoms in a statement tree.

Usage::

    from sqltree.schema.placeholders import ph

    {"where": ["=", "id", ph]}             # positional, bound by ordinal
    {"where": ["=", "email", ph("email")]}  # named, bound by key

``DirectPlaceholder`` carries its own value; the schema validator produces
it when it wraps literal values so that they are bound rather than inlined.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

_FROZEN = ConfigDict(frozen=True, extra="forbid")


class PositionalPlaceholder(BaseModel):
    """A positional placeholder, bound from the caller's bindings by ordinal.

    Calling the instance with a key returns a :class:`NamedPlaceholder`, so a
    single ``ph`` object covers both forms.
    """

    model_config = _FROZEN

    kind: Literal["positional"] = "positional"

    def __call__(self, key: str) -> NamedPlaceholder:
        return NamedPlaceholder(key=key)


class NamedPlaceholder(BaseModel):
    """A named placeholder: ``ph("email")``."""

    model_config = _FROZEN

    kind: Literal["named"] = "named"
    key: str


class DirectPlaceholder(BaseModel):
    """A placeholder whose value is known when the tree is built."""

    model_config = _FROZEN

    kind: Literal["direct"] = "direct"
    value: Any


Placeholder = PositionalPlaceholder | NamedPlaceholder | DirectPlaceholder

#: The positional placeholder; call it with a key for a named placeholder.
ph = PositionalPlaceholder()


def is_placeholder(value: object) -> bool:
    """Return ``True`` if ``value`` is any kind of placeholder."""
    return isinstance(value, (PositionalPlaceholder, NamedPlaceholder, DirectPlaceholder))
