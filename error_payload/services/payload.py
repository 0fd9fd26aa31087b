"""Build result payloads from resolver outcomes."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from dataclasses import field
from dataclasses import replace
from enum import Enum
import logging
import re
from typing import Any

from error_payload.core.config import get_payload_settings
from error_payload.core.exceptions import InvalidMessageKind
from error_payload.parsing.changeset import Changeset
from error_payload.parsing.changeset_parser import extract_messages
from error_payload.parsing.codes import ValidationCode
from error_payload.parsing.interpolation import symbol_to_string
from error_payload.schemas.payload import Payload
from error_payload.schemas.validation_message import ValidationMessage

logger = logging.getLogger(__name__)

_PATH_SEGMENT = re.compile(r"[A-Za-z0-9_]+")


@dataclass(frozen=True)
class ErrorResult:
    """Explicit error outcome returned by a resolver.

    ``reason`` may be a validation message, a string, an enum member, a
    changeset, or a list of messages, strings and enum members. A result
    carrying any other reason is not an error and becomes a success payload.
    """

    reason: Any


@dataclass(frozen=True)
class Resolution:
    """Outcome of a resolver as seen by the request-handling layer."""

    value: Any = None
    errors: Sequence[Any] = field(default_factory=list)


def build_payload(resolution: Resolution) -> Resolution:
    """Return a resolution whose value is the payload for its outcome.

    A resolution carrying errors becomes an error payload built from those
    errors; otherwise its value is converted. The returned resolution never
    carries errors.
    """
    errors = list(resolution.errors)
    if len(errors) == 1 and isinstance(errors[0], Changeset):
        payload = convert_to_payload(errors[0])
    elif not errors:
        payload = convert_to_payload(resolution.value)
    else:
        payload = convert_to_payload(ErrorResult(errors))
    return replace(resolution, value=payload, errors=[])


def convert_to_payload(outcome: Any) -> Payload[Any]:
    """Convert any resolver outcome to a payload.

    Validation messages, invalid changesets and error results with a known
    reason produce error payloads. Every other value, valid changesets
    included, is the result of a success payload.
    """
    if isinstance(outcome, ValidationMessage):
        return error_payload(outcome)
    if isinstance(outcome, ErrorResult):
        return _error_result_payload(outcome)
    if isinstance(outcome, Changeset) and not outcome.valid:
        return error_payload(extract_messages(outcome))
    return success_payload(outcome)


def error_payload(
    messages: ValidationMessage | Sequence[ValidationMessage | str | Enum],
    *,
    camelize: bool | None = None,
) -> Payload[Any]:
    """Generate a failed payload from one message or a list of messages.

    Strings and enum members become generic ``unknown`` messages. Any other
    element raises :class:`InvalidMessageKind`.
    """
    if isinstance(messages, ValidationMessage):
        messages = [messages]
    if camelize is None:
        camelize = get_payload_settings().camelize_fields

    prepared = [_prepare_message(message, camelize=camelize) for message in messages]
    logger.debug("Built error payload with %d message(s)", len(prepared))
    return Payload(successful=False, messages=prepared)


def success_payload(result: Any) -> Payload[Any]:
    """Generate a successful payload carrying ``result``."""
    return Payload(successful=True, result=result)


def convert_field_name(message: ValidationMessage) -> ValidationMessage:
    """Convert the message field (and its ``key`` alias) to lowerCamelCase."""
    return message.model_copy(update={"field": camelized_name(message.field)})


def camelized_name(field_path: str | None) -> str | None:
    """Camelize each segment of a field path: ``embedded_tags.0.tag_name`` -> ``embeddedTags.0.tagName``."""
    if field_path is None:
        return None
    return _PATH_SEGMENT.sub(lambda match: _camelize_segment(match.group(0)), field_path)


def generic_validation_message(message: str) -> ValidationMessage:
    return ValidationMessage(
        code=ValidationCode.UNKNOWN,
        field=None,
        template=message,
        message=message,
        options=[],
    )


def _camelize_segment(segment: str) -> str:
    # Leading underscores are kept; only the letter after each inner underscore is capitalized.
    name = segment.lstrip("_")
    prefix = segment[: len(segment) - len(name)]
    first, *rest = name.split("_")
    return prefix + first[:1].lower() + first[1:] + "".join(part[:1].upper() + part[1:] for part in rest)


def _error_result_payload(outcome: ErrorResult) -> Payload[Any]:
    reason = outcome.reason
    if isinstance(reason, ValidationMessage):
        return error_payload(reason)
    if isinstance(reason, str):
        return error_payload(generic_validation_message(reason))
    if isinstance(reason, Enum):
        return error_payload(generic_validation_message(symbol_to_string(reason)))
    if isinstance(reason, Changeset):
        return convert_to_payload(reason)
    if isinstance(reason, (list, tuple)):
        return error_payload(list(reason))
    return success_payload(outcome)


def _prepare_message(message: Any, *, camelize: bool) -> ValidationMessage:
    if isinstance(message, ValidationMessage):
        return convert_field_name(message) if camelize else message
    if isinstance(message, str):
        return generic_validation_message(message)
    if isinstance(message, Enum):
        return generic_validation_message(symbol_to_string(message))
    raise InvalidMessageKind(message)
