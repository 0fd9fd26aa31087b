"""Map pydantic validation errors onto error trees and validation messages."""

from __future__ import annotations

from collections.abc import Iterable
from collections.abc import Mapping
from typing import Any

from error_payload.parsing.changeset_parser import extract_messages
from error_payload.parsing.field_constructor import FieldConstructor
from error_payload.schemas.validation_message import DEFAULT_TEMPLATE
from error_payload.schemas.validation_message import ValidationMessage

_LOCATION_PREFIXES = frozenset({"body", "query", "path", "header", "cookie"})

# Field name used when an error is not attached to any field.
ROOT_FIELD = "request"

_LENGTH_TEMPLATES: dict[str, tuple[str, str, str]] = {
    "string_too_short": ("should be at least %{count} character(s)", "min", "string"),
    "string_too_long": ("should be at most %{count} character(s)", "max", "string"),
    "too_short": ("should have at least %{count} item(s)", "min", "list"),
    "too_long": ("should have at most %{count} item(s)", "max", "list"),
}

_NUMBER_TEMPLATES: dict[str, tuple[str, str, str]] = {
    "greater_than": ("must be greater than %{number}", "greater_than", "gt"),
    "greater_than_equal": ("must be greater than or equal to %{number}", "greater_than_or_equal_to", "ge"),
    "less_than": ("must be less than %{number}", "less_than", "lt"),
    "less_than_equal": ("must be less than or equal to %{number}", "less_than_or_equal_to", "le"),
}


def extract_validation_errors(
    errors: Iterable[Mapping[str, Any]],
    *,
    field_constructor: FieldConstructor | None = None,
) -> list[ValidationMessage]:
    """Generate validation messages for pydantic errors, keeping their order."""
    messages: list[ValidationMessage] = []
    for error in errors:
        messages.extend(extract_messages(error_tree(error), field_constructor=field_constructor))
    return messages


def error_tree(error: Mapping[str, Any]) -> dict[str, Any]:
    """Build a single-failure error tree from one pydantic error.

    ``("tags", 1, "name")`` becomes ``{"tags": [{}, {"name": [failure]}]}`` so
    the flattener composes the collection index into the field path. An index
    with no field after it is kept as a plain segment (``tags.1``).
    """
    location = _strip_location(error.get("loc", ()))
    node: Any = [to_descriptor(error)]
    for part in reversed(location[1:]):
        if isinstance(part, int) and isinstance(node, dict):
            members: list[Any] = [{} for _ in range(part)]
            members.append(node)
            node = members
        else:
            node = {str(part): node}

    root = str(location[0]) if location else ROOT_FIELD
    return {root: node}


def to_descriptor(error: Mapping[str, Any]) -> tuple[str, dict[str, Any]]:
    """Translate one pydantic error into a ``(template, options)`` failure."""
    error_type = str(error.get("type", ""))
    context = dict(error.get("ctx") or {})

    if error_type == "missing":
        return "can't be blank", {"validation": "required"}

    if error_type in _LENGTH_TEMPLATES:
        template, kind, value_type = _LENGTH_TEMPLATES[error_type]
        count = context.get("min_length" if kind == "min" else "max_length")
        return template, {"count": count, "validation": "length", "kind": kind, "type": value_type}

    if error_type in _NUMBER_TEMPLATES:
        template, kind, bound = _NUMBER_TEMPLATES[error_type]
        return template, {"validation": "number", "kind": kind, "number": context.get(bound)}

    if error_type == "string_pattern_mismatch":
        return "has invalid format", {"validation": "format"}

    if error_type in {"literal_error", "enum"}:
        return DEFAULT_TEMPLATE, {"validation": "inclusion", "enum": context.get("expected")}

    if error_type.endswith("_type") or error_type.endswith("_parsing"):
        value_type = error_type.rsplit("_", 1)[0]
        return DEFAULT_TEMPLATE, {"validation": "cast", "type": value_type}

    options: dict[str, Any] = {}
    if "code" in context:
        options["code"] = context["code"]
    return str(error.get("msg", DEFAULT_TEMPLATE)), options


def _strip_location(location: Any) -> list[Any]:
    if not isinstance(location, (tuple, list)):
        return [location]
    parts = list(location)
    if parts and parts[0] in _LOCATION_PREFIXES:
        parts = parts[1:]
    return parts
