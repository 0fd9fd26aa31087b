"""Unit tests for message template interpolation."""

from __future__ import annotations

from enum import Enum

from error_payload.parsing.interpolation import interpolate_message
from error_payload.parsing.interpolation import option_pairs
from error_payload.parsing.interpolation import value_to_string


class _Language(Enum):
    EN = "en"
    FR = "fr"


def test_interpolates_pairs_and_mappings() -> None:
    assert interpolate_message("Test %{one}", [("one", "1")]) == "Test 1"
    assert interpolate_message("Test %{one}", {"one": "1"}) == "Test 1"


def test_ignores_unused_options_and_keeps_unknown_placeholders() -> None:
    template = "length should be between %{one} and %{two} (%{missing})"

    message = interpolate_message(template, {"one": "1", "two": "2", "three": "3"})

    assert message == "length should be between 1 and 2 (%{missing})"


def test_replaces_every_occurrence() -> None:
    assert interpolate_message("%{n} and %{n}", {"n": 5}) == "5 and 5"


def test_list_values_are_joined_with_commas() -> None:
    assert interpolate_message("is already taken: %{fields}", {"fields": ["one", "two"]}) == "is already taken: one,two"
    assert interpolate_message("is already taken: %{fields}", {"fields": [_Language.EN, _Language.FR]}) == (
        "is already taken: en,fr"
    )


def test_options_apply_left_to_right_on_the_running_message() -> None:
    message = interpolate_message("%{a}", [("a", "%{b}"), ("b", "done")])

    assert message == "done"


def test_value_to_string_rules() -> None:
    assert value_to_string(("array", "map")) == "array-map"
    assert value_to_string(_Language) == "en,fr"
    assert value_to_string({0: "draft", 1: "published"}) == "draft,published"
    assert value_to_string(_Language.FR) == "fr"
    assert value_to_string(None) == ""
    assert value_to_string(10) == "10"
    assert value_to_string("plain") == "plain"
    assert value_to_string(True) == "true"
    assert value_to_string([False, 1]) == "false,1"


def test_option_pairs_keep_order_and_stringify_keys() -> None:
    assert option_pairs({"count": 2, _Language.EN: "x"}) == [("count", 2), ("en", "x")]
    assert option_pairs(None) == []
