"""Flatten changeset error trees into validation messages."""

from __future__ import annotations

from collections.abc import Mapping
from collections.abc import Sequence
from enum import Enum
from typing import Any

from error_payload.core.config import get_field_constructor
from error_payload.core.exceptions import InvalidMessageKind
from error_payload.parsing.changeset import Changeset
from error_payload.parsing.changeset import reject_replaced_changes
from error_payload.parsing.changeset import traverse_errors
from error_payload.parsing.codes import to_code
from error_payload.parsing.field_constructor import FieldConstructor
from error_payload.parsing.interpolation import interpolate_message
from error_payload.parsing.interpolation import option_pairs
from error_payload.parsing.interpolation import value_to_string
from error_payload.schemas.validation_message import DEFAULT_TEMPLATE
from error_payload.schemas.validation_message import MessageOption
from error_payload.schemas.validation_message import ValidationMessage

# Validator bookkeeping that is never offered as a template variable.
_DROPPED_OPTIONS = frozenset({"validation", "max", "is", "min", "code"})

# Stand-in failure for an association explicitly left empty in a raw tree.
_ABSENT_ASSOCIATION = (DEFAULT_TEMPLATE, {"type": "association"})


def extract_messages(
    source: Changeset | Mapping[str, Any],
    *,
    field_constructor: FieldConstructor | None = None,
) -> list[ValidationMessage]:
    """Generate validation messages for every failure in a changeset or error tree.

    Messages come out depth-first, in field order, with collection members in
    their original order. Nested fields get composed paths (``author.name``,
    ``tags.0.name`` with the default constructor). Association entries that were
    replaced rather than updated never contribute messages.
    """
    constructor = field_constructor or get_field_constructor()
    if isinstance(source, Changeset):
        tree: Mapping[str, Any] = traverse_errors(reject_replaced_changes(source))
    else:
        tree = source

    messages: list[ValidationMessage] = []
    for field_name, value in tree.items():
        messages.extend(_handle_nested_errors(_field_name(field_name), value, constructor))
    return messages


def construct_message(
    field: Any,
    error: tuple[str, Any],
    *,
    field_constructor: FieldConstructor | None = None,
) -> ValidationMessage:
    """Generate a single validation message for one ``(template, options)`` failure.

    The field passes through the field constructor with no child, so custom
    constructors can decorate top-level names.
    """
    constructor = field_constructor or get_field_constructor()
    name = None if field is None else _field_name(field)
    return _build_message(constructor.build_path(name, None), error)


def _handle_nested_errors(field_path: str | None, value: Any, constructor: FieldConstructor) -> list[ValidationMessage]:
    if value is None:
        return [_build_message(field_path, _ABSENT_ASSOCIATION)]

    if isinstance(value, Mapping):
        messages: list[ValidationMessage] = []
        for subfield, subvalue in value.items():
            field_with_parent = constructor.build_path(field_path, _field_name(subfield))
            messages.extend(_handle_nested_errors(field_with_parent, subvalue, constructor))
        return messages

    if _is_leaf(value):
        return [_build_message(field_path, value)]

    if isinstance(value, ValidationMessage):
        return [value.model_copy(update={"field": field_path})]

    if isinstance(value, Sequence) and not isinstance(value, str):
        messages = []
        for index, entry in enumerate(value):
            messages.extend(_handle_nested_error(field_path, entry, index, constructor))
        return messages

    raise InvalidMessageKind(value)


def _handle_nested_error(
    field_path: str | None,
    entry: Any,
    index: int,
    constructor: FieldConstructor,
) -> list[ValidationMessage]:
    if _is_leaf(entry):
        return [_build_message(field_path, entry)]

    if isinstance(entry, ValidationMessage):
        return [entry.model_copy(update={"field": field_path})]

    if isinstance(entry, Mapping):
        messages: list[ValidationMessage] = []
        for subfield, subvalue in entry.items():
            field_with_index = constructor.build_path(field_path, _field_name(subfield), index=index)
            messages.extend(_handle_nested_errors(field_with_index, subvalue, constructor))
        return messages

    raise InvalidMessageKind(entry)


def _build_message(field_path: str | None, error: tuple[str, Any]) -> ValidationMessage:
    template, raw_options = error
    pairs = option_pairs(raw_options)
    metadata = dict(pairs)
    options = {key: value for key, value in metadata.items() if key not in _DROPPED_OPTIONS}

    return ValidationMessage(
        field=field_path,
        code=to_code(template, metadata),
        template=template,
        message=interpolate_message(template, options),
        options=[MessageOption(key=key, value=value_to_string(value)) for key, value in options.items()],
    )


def _is_leaf(value: Any) -> bool:
    return isinstance(value, tuple) and len(value) == 2 and isinstance(value[0], str)


def _field_name(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)
