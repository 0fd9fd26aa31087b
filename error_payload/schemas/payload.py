"""Result envelope returned for every mutation-style operation."""

from __future__ import annotations

from typing import Generic
from typing import TypeVar

from pydantic import BaseModel
from pydantic import model_validator

from error_payload.schemas.validation_message import ValidationMessage

ResultT = TypeVar("ResultT")


class Payload(BaseModel, Generic[ResultT]):
    """Uniform outcome envelope.

    ``messages`` is always empty when ``successful`` is true and ``result`` is
    always ``None`` when it is false. Parametrize (``Payload[User]``) to get a
    typed response model.
    """

    successful: bool
    messages: list[ValidationMessage] = []
    result: ResultT | None = None

    @model_validator(mode="after")
    def _check_outcome(self) -> Payload[ResultT]:
        if self.successful and self.messages:
            raise ValueError("successful payloads cannot carry messages")
        if not self.successful and self.result is not None:
            raise ValueError("failed payloads cannot carry a result")
        return self
