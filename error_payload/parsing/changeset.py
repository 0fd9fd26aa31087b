"""Changeset values: the nested error trees handed over by the validation layer."""

from __future__ import annotations

from collections.abc import Mapping
from collections.abc import Sequence
from dataclasses import dataclass
from dataclasses import field
from dataclasses import replace
from enum import Enum
from typing import Any

ErrorDescriptor = tuple[str, Mapping[str, Any]]


class ChangesetAction(str, Enum):
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"
    REPLACE = "replace"


@dataclass(frozen=True)
class Changeset:
    """Pending changes for one record together with their validation errors.

    ``changes`` may hold nested changesets, or lists of them, for associated
    records. ``errors`` maps field names to ``(template, options)`` failures in
    the order they were added. ``action == "replace"`` marks an association
    entry that was swapped out instead of updated.
    """

    changes: Mapping[str, Any] = field(default_factory=dict)
    errors: Mapping[str, Sequence[ErrorDescriptor]] = field(default_factory=dict)
    action: ChangesetAction | None = None

    @property
    def valid(self) -> bool:
        if any(self.errors.values()):
            return False
        return all(child.valid for child in _nested_changesets(self.changes) if not _is_replaced(child))

    def add_error(self, field_name: str, template: str, **options: Any) -> Changeset:
        """Return a copy with one more ``(template, options)`` failure on ``field_name``."""
        errors = {name: list(descriptors) for name, descriptors in self.errors.items()}
        errors.setdefault(field_name, []).append((template, options))
        return replace(self, errors=errors)

    def put_change(self, field_name: str, value: Any) -> Changeset:
        """Return a copy with ``value`` stored as the change for ``field_name``."""
        return replace(self, changes={**self.changes, field_name: value})


def reject_replaced_changes(changeset: Changeset) -> Changeset:
    """Drop nested changesets marked as replaced, at every depth."""
    changes: dict[str, Any] = {}
    for field_name, value in changeset.changes.items():
        if isinstance(value, Changeset):
            if _is_replaced(value):
                continue
            changes[field_name] = reject_replaced_changes(value)
        elif _is_changeset_list(value):
            changes[field_name] = [reject_replaced_changes(item) for item in value if not _is_replaced(item)]
        else:
            changes[field_name] = value
    return replace(changeset, changes=changes)


def traverse_errors(changeset: Changeset) -> dict[str, Any]:
    """Collect the errors of a changeset and its nested changesets into one tree.

    Own field errors come first, in insertion order. A nested changeset with
    errors contributes a mapping; a list of nested changesets contributes one
    mapping per member (empty for clean members) as soon as any member has
    errors.
    """
    tree: dict[str, Any] = {}
    for field_name, descriptors in changeset.errors.items():
        if descriptors:
            tree[field_name] = list(descriptors)

    for field_name, value in changeset.changes.items():
        if isinstance(value, Changeset):
            nested = traverse_errors(value)
            if nested:
                tree[field_name] = nested
        elif _is_changeset_list(value):
            members = [traverse_errors(item) for item in value]
            if any(members):
                tree[field_name] = members
    return tree


def _is_replaced(changeset: Changeset) -> bool:
    return changeset.action == ChangesetAction.REPLACE


def _is_changeset_list(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and bool(value) and all(isinstance(item, Changeset) for item in value)


def _nested_changesets(changes: Mapping[str, Any]) -> list[Changeset]:
    nested: list[Changeset] = []
    for value in changes.values():
        if isinstance(value, Changeset):
            nested.append(value)
        elif _is_changeset_list(value):
            nested.extend(value)
    return nested
