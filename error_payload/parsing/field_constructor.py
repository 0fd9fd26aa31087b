"""Field path construction for nested validation errors."""

from __future__ import annotations

from typing import Protocol
from typing import runtime_checkable


@runtime_checkable
class FieldConstructor(Protocol):
    """Compose a parent field path and a child field name into one path."""

    def build_path(self, parent_field: str | None, field: str | None, *, index: int | None = None) -> str | None:
        ...


class DefaultFieldConstructor:
    """Dotted paths: ``author.name`` and ``tags.0.name`` for collection members."""

    def build_path(self, parent_field: str | None, field: str | None, *, index: int | None = None) -> str | None:
        if field is None:
            return parent_field
        if index is not None:
            return f"{parent_field}.{index}.{field}"
        return f"{parent_field}.{field}"
