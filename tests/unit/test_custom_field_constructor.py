"""Unit tests for pluggable field path construction."""

from __future__ import annotations

import pytest

from error_payload.core.config import get_field_constructor
from error_payload.core.config import load_field_constructor
from error_payload.core.exceptions import PayloadConfigurationError
from error_payload.parsing.changeset import Changeset
from error_payload.parsing.changeset_parser import construct_message
from error_payload.parsing.changeset_parser import extract_messages
from error_payload.parsing.field_constructor import DefaultFieldConstructor


class ArrowFieldConstructor:
    def build_path(self, parent_field: str | None, field: str | None, *, index: int | None = None) -> str | None:
        if field is None:
            return f"@root›{parent_field}"
        if index is not None:
            return f"{parent_field}@{index}›{field}"
        return f"{parent_field}›{field}"


def _required() -> Changeset:
    return Changeset(changes={"name": ""}).add_error("name", "can't be blank", validation="required")


def test_default_constructor_paths() -> None:
    constructor = DefaultFieldConstructor()

    assert constructor.build_path("author", None) == "author"
    assert constructor.build_path("author", "name") == "author.name"
    assert constructor.build_path("tags", "name", index=3) == "tags.3.name"


def test_construct_message_decorates_the_root_field() -> None:
    message = construct_message("title", ("can't be %{illegal}", {"code": "foobar"}), field_constructor=ArrowFieldConstructor())

    assert message.field == "@root›title"


def test_nested_fields_use_the_custom_constructor() -> None:
    changeset = Changeset().put_change("author", _required())

    (message,) = extract_messages(changeset, field_constructor=ArrowFieldConstructor())

    assert (message.code, message.field) == ("required", "author›name")


def test_nested_fields_with_index_use_the_custom_constructor() -> None:
    changeset = Changeset().put_change("tags", [_required(), _required()])

    first, second = extract_messages(changeset, field_constructor=ArrowFieldConstructor())

    assert first.field == "tags@0›name"
    assert second.field == "tags@1›name"


def test_configured_constructor_is_loaded_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ERROR_PAYLOAD_FIELD_CONSTRUCTOR", "error_payload.parsing.field_constructor:DefaultFieldConstructor")

    constructor = get_field_constructor()

    assert isinstance(constructor, DefaultFieldConstructor)
    assert get_field_constructor() is constructor


def test_load_field_constructor_accepts_instances(monkeypatch: pytest.MonkeyPatch) -> None:
    instance = ArrowFieldConstructor()
    monkeypatch.setattr(DefaultFieldConstructor, "shared", instance, raising=False)

    constructor = load_field_constructor("error_payload.parsing.field_constructor:DefaultFieldConstructor.shared")

    assert constructor is instance


@pytest.mark.parametrize(
    "path",
    [
        "error_payload.parsing.missing_module:Constructor",
        "error_payload.parsing.field_constructor:Missing",
        "error_payload.parsing.field_constructor:FieldConstructor.build_path",
    ],
)
def test_load_field_constructor_rejects_bad_paths(path: str) -> None:
    with pytest.raises(PayloadConfigurationError):
        load_field_constructor(path)
