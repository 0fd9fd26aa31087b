"""Exceptions raised by payload construction."""

from __future__ import annotations

from typing import Any


class InvalidMessageKind(TypeError):
    """Raised when a value cannot be turned into a validation message.

    This signals a resolver returning an unsupported shape, not a user-facing
    condition. The offending value is kept on ``value`` for diagnostics.
    """

    def __init__(self, value: Any) -> None:
        super().__init__(f"Unexpected validation message: {value!r}")
        self.value = value


class PayloadError(Exception):
    """Raised from an endpoint to answer with an error payload.

    ``reason`` accepts anything an error result accepts: a validation message,
    a string, an enum member, a changeset, or a list of those.
    """

    def __init__(self, reason: Any) -> None:
        super().__init__(str(reason))
        self.reason = reason


class PayloadConfigurationError(ValueError):
    """Raised when payload settings cannot be loaded."""
