"""Tests for LSP payload parsing."""

from __future__ import annotations

import json

import pytest

from rangeedit.core.ranges import Position, Range
from rangeedit.editor.patches import TextEdit
from rangeedit.errors import InvalidParameterError
from rangeedit.protocol import parse_position, parse_range, parse_text_edit, parse_text_edits


def test_parse_position_accepts_mapping_and_json() -> None:
    expected = Position(1, 2)

    assert parse_position({"line": 1, "character": 2}) == expected
    assert parse_position('{"line": 1, "character": 2}') == expected
    assert parse_position(b'{"line": 1, "character": 2}') == expected


def test_parse_position_rejects_missing_fields() -> None:
    with pytest.raises(InvalidParameterError) as excinfo:
        parse_position({"line": 1})

    assert excinfo.value.parameter == "position"
    assert "'character' is a required property" in excinfo.value.message


def test_parse_position_rejects_negative_values() -> None:
    with pytest.raises(InvalidParameterError) as excinfo:
        parse_position({"line": -1, "character": 0})

    assert excinfo.value.message.startswith("line:")


def test_parse_range_reports_nested_paths(sample_range: dict) -> None:
    assert parse_range(sample_range) == Range(Position(0, 2), Position(2, 3))

    broken = {"start": {"line": 0, "character": "2"}, "end": {"line": 0, "character": 3}}
    with pytest.raises(InvalidParameterError) as excinfo:
        parse_range(broken)

    assert excinfo.value.message.startswith("start.character:")
    assert excinfo.value.parameter == "range"


def test_parse_range_leaves_ordering_to_the_editing_operations() -> None:
    span = parse_range({"start": {"line": 3, "character": 0}, "end": {"line": 1, "character": 0}})

    assert not span.is_ordered


def test_parse_text_edit_accepts_either_text_key(sample_range: dict) -> None:
    camel = parse_text_edit({"range": sample_range, "newText": "x"})
    snake = parse_text_edit({"range": sample_range, "new_text": "x"})

    assert camel == snake == TextEdit(Range.from_value(sample_range), "x")


def test_parse_text_edit_requires_replacement_text(sample_range: dict) -> None:
    with pytest.raises(InvalidParameterError):
        parse_text_edit({"range": sample_range})
    with pytest.raises(InvalidParameterError):
        parse_text_edit({"range": sample_range, "newText": 5})


def test_parse_text_edits_from_json(sample_range: dict) -> None:
    payload = json.dumps([{"range": sample_range, "newText": "a"}, {"range": sample_range, "newText": ""}])

    edits = parse_text_edits(payload)

    assert [edit.new_text for edit in edits] == ["a", ""]


def test_parse_text_edits_rejects_non_lists(sample_range: dict) -> None:
    with pytest.raises(InvalidParameterError) as excinfo:
        parse_text_edits({"range": sample_range, "newText": "a"})

    assert excinfo.value.parameter == "text_edits"


def test_invalid_json_is_reported_as_parameter_error() -> None:
    with pytest.raises(InvalidParameterError) as excinfo:
        parse_range("{not json")

    assert "not valid JSON" in excinfo.value.message
