"""Template interpolation helpers for validation messages."""

from __future__ import annotations

from collections.abc import Iterable
from collections.abc import Mapping
from collections.abc import Set
from enum import Enum
from typing import Any

OptionsInput = Mapping[Any, Any] | Iterable[tuple[Any, Any]]


def symbol_to_string(value: Any) -> str:
    """Return the string form of a symbolic token (Enum member or plain value)."""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def value_to_string(value: Any) -> str:
    """Stringify one option value for substitution into a template."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, type) and issubclass(value, Enum):
        return ",".join(str(member.value) for member in value)
    if isinstance(value, Mapping):
        return ",".join(value_to_string(label) for label in value.values())
    if isinstance(value, str):
        return value
    if isinstance(value, tuple):
        return "-".join(value_to_string(item) for item in value)
    if isinstance(value, (list, Set)):
        return ",".join(value_to_string(item) for item in value)
    return str(value)


def option_pairs(options: OptionsInput | None) -> list[tuple[str, Any]]:
    """Normalize a mapping or a sequence of pairs into ordered ``(key, value)`` pairs."""
    if options is None:
        return []
    items = options.items() if isinstance(options, Mapping) else options
    return [(symbol_to_string(key), value) for key, value in items]


def interpolate_message(template: str, options: OptionsInput | None) -> str:
    """Substitute ``%{name}`` placeholders in ``template`` with option values.

    Options are applied once each, in order, to the running message.
    Placeholders without a matching option are left as they are.

    >>> interpolate_message("length should be between %{one} and %{two}", {"one": "1", "two": "2", "three": "3"})
    'length should be between 1 and 2'
    >>> interpolate_message("is already taken: %{fields}", {"fields": ["one", "two"]})
    'is already taken: one,two'
    """
    message = template
    for key, value in option_pairs(options):
        message = message.replace(f"%{{{key}}}", value_to_string(value))
    return message
