"""Validation message schemas shared by every error payload."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import computed_field
from pydantic import field_validator
from pydantic import model_validator

DEFAULT_TEMPLATE = "is invalid"


class MessageOption(BaseModel):
    """One substitution variable used to build a message from its template."""

    model_config = ConfigDict(frozen=True)

    key: str
    value: str


class ValidationMessage(BaseModel):
    """A normalized validation failure.

    ``field`` names the input the failure applies to and may be a composed
    path such as ``tags.0.name``; it is ``None`` when no field applies.
    ``code`` is the stable machine-readable classification and is always set.
    ``template`` holds ``%{name}`` placeholders, ``message`` is the template
    with ``options`` substituted. ``key`` is the deprecated name of ``field``
    and always mirrors it.
    """

    model_config = ConfigDict(frozen=True)

    field: str | None = None
    code: str
    template: str = DEFAULT_TEMPLATE
    message: str = DEFAULT_TEMPLATE
    options: list[MessageOption] = []

    @computed_field  # type: ignore[prop-decorator]
    @property
    def key(self) -> str | None:
        return self.field

    @model_validator(mode="before")
    @classmethod
    def _accept_legacy_key(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and "key" in data:
            data = dict(data)
            key = data.pop("key")
            if data.get("field") is None:
                data["field"] = key
        return data

    @field_validator("field", "code", mode="before")
    @classmethod
    def _symbol_to_string(cls, value: Any) -> Any:
        if isinstance(value, Enum):
            return str(value.value)
        if value is None or isinstance(value, str):
            return value
        return str(value)
