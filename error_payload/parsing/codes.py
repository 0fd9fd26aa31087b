"""Stable validation codes and the classifier that assigns them."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from error_payload.parsing.interpolation import symbol_to_string


class ValidationCode(str, Enum):
    CAST = "cast"
    ASSOCIATION = "association"
    ACCEPTANCE = "acceptance"
    CONFIRMATION = "confirmation"
    LENGTH = "length"
    MIN = "min"
    MAX = "max"
    LESS_THAN_OR_EQUAL_TO = "less_than_or_equal_to"
    LESS_THAN = "less_than"
    GREATER_THAN_OR_EQUAL_TO = "greater_than_or_equal_to"
    GREATER_THAN = "greater_than"
    EQUAL_TO = "equal_to"
    EXCLUSION = "exclusion"
    INCLUSION = "inclusion"
    FORMAT = "format"
    REQUIRED = "required"
    SUBSET = "subset"
    UNIQUE = "unique"
    FOREIGN = "foreign"
    NO_ASSOC = "no_assoc"
    UNKNOWN = "unknown"


_VALIDATION_CODES: dict[str, ValidationCode] = {
    "cast": ValidationCode.CAST,
    "required": ValidationCode.REQUIRED,
    "format": ValidationCode.FORMAT,
    "inclusion": ValidationCode.INCLUSION,
    "exclusion": ValidationCode.EXCLUSION,
    "subset": ValidationCode.SUBSET,
    "acceptance": ValidationCode.ACCEPTANCE,
    "confirmation": ValidationCode.CONFIRMATION,
}

_LENGTH_CODES: dict[str, ValidationCode] = {
    "is": ValidationCode.LENGTH,
    "min": ValidationCode.MIN,
    "max": ValidationCode.MAX,
}

# Checked in order: longer phrases must win over their prefixes.
_NUMBER_PHRASES: tuple[tuple[str, ValidationCode], ...] = (
    ("less than or equal to", ValidationCode.LESS_THAN_OR_EQUAL_TO),
    ("greater than or equal to", ValidationCode.GREATER_THAN_OR_EQUAL_TO),
    ("less than", ValidationCode.LESS_THAN),
    ("greater than", ValidationCode.GREATER_THAN),
    ("equal to", ValidationCode.EQUAL_TO),
)

_MESSAGE_CODES: dict[str, ValidationCode] = {
    "has already been taken": ValidationCode.UNIQUE,
    "does not exist": ValidationCode.FOREIGN,
    "is still associated with this entry": ValidationCode.NO_ASSOC,
}


def classify(metadata: Mapping[str, Any]) -> str:
    """Return the code for one validation failure.

    ``metadata`` holds the failure's validation options plus a ``message`` key
    with the unsubstituted template. Resolution is first-match-wins:

    1. an explicit ``code`` option is returned verbatim;
    2. a known ``validation`` tag maps to the same-named code;
    3. ``length`` validations branch on ``kind`` (``is``/``min``/``max``), or on
       which of those bounds is present when no kind is given;
    4. ``number`` validations are classified by searching the message text,
       since that validator family only exposes the comparison in its message;
    5. ``"is invalid"`` with a ``type`` option is an association failure;
    6. a few fixed constraint messages map to ``unique``/``foreign``/``no_assoc``.

    Anything else is ``unknown``; this function never raises.
    """
    if "code" in metadata:
        code = metadata["code"]
        return code.value if isinstance(code, Enum) else code

    message = str(metadata.get("message", ""))
    validation = _tag(metadata.get("validation"))

    if validation in _VALIDATION_CODES:
        return _VALIDATION_CODES[validation].value

    if validation == "length":
        length_code = _LENGTH_CODES.get(_length_kind(metadata) or "")
        if length_code is not None:
            return length_code.value

    if validation == "number":
        for phrase, number_code in _NUMBER_PHRASES:
            if phrase in message:
                return number_code.value
        return ValidationCode.UNKNOWN.value

    if message == "is invalid" and "type" in metadata:
        return ValidationCode.ASSOCIATION.value

    message_code = _MESSAGE_CODES.get(message)
    if message_code is not None:
        return message_code.value

    return ValidationCode.UNKNOWN.value


def to_code(template: str, options: Mapping[str, Any]) -> str:
    """Classify a ``(template, options)`` failure descriptor."""
    return classify({"message": template, **options})


def _tag(value: Any) -> str | None:
    if value is None:
        return None
    return symbol_to_string(value)


def _length_kind(metadata: Mapping[str, Any]) -> str | None:
    kind = _tag(metadata.get("kind"))
    if kind is not None:
        return kind
    # Failures without a kind carry the violated bound under its own name.
    for bound in ("is", "min", "max"):
        if bound in metadata:
            return bound
    return None
