"""Unit tests for batch text edit application."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from rangeedit.core.ranges import Position, Range
from rangeedit.editor.patches import EditResult, TextEdit, apply_text_edits
from rangeedit.errors import EditOverlapError, InvalidParameterError, InvalidRangeError, OutOfRangeError


def _edit(start_line: int, start_char: int, end_line: int, end_char: int, new_text: str) -> TextEdit:
    return TextEdit(Range(Position(start_line, start_char), Position(end_line, end_char)), new_text)


def test_apply_text_edits_rewrites_all_ranges_against_original_text():
    result = apply_text_edits(
        "hello world",
        [_edit(0, 0, 0, 5, "goodbye"), _edit(0, 6, 0, 11, "there")],
    )

    assert result.text == "goodbye there"
    assert result.applied == 2
    assert result.spans == ((0, 7), (8, 13))
    assert result.summary == "edit: +2 chars"


def test_apply_text_edits_ignores_input_order():
    edits = [_edit(0, 6, 0, 11, "there"), _edit(0, 0, 0, 5, "goodbye")]

    result = apply_text_edits("hello world", edits)

    assert result.text == "goodbye there"
    assert result.spans == ((0, 7), (8, 13))


def test_apply_text_edits_spans_multiple_lines():
    text = "one\r\ntwo\r\nthree"
    edits = [_edit(0, 0, 0, 3, "ONE"), _edit(1, 1, 2, 2, "")]

    result = apply_text_edits(text, edits, "\r\n")

    assert result.text == "ONE\r\ntree"
    assert result.summary == "edit: -6 chars"


def test_apply_text_edits_accepts_lsp_payloads():
    edits = [
        {"range": {"start": {"line": 1, "character": 0}, "end": {"line": 1, "character": 3}}, "newText": "TWO"},
        {"range": ((0, 3), (0, 3)), "new_text": "!"},
    ]

    result = apply_text_edits("one\ntwo", edits)

    assert result.text == "one!\nTWO"


def test_apply_text_edits_rejects_overlapping_ranges():
    edits = [_edit(0, 0, 0, 5, "a"), _edit(0, 3, 0, 8, "b")]

    with pytest.raises(EditOverlapError) as excinfo:
        apply_text_edits("hello world", edits)

    assert excinfo.value.first == 0
    assert excinfo.value.second == 1


def test_apply_text_edits_rejects_insert_inside_replaced_span():
    with pytest.raises(EditOverlapError):
        apply_text_edits("abcdef", [_edit(0, 0, 0, 4, "X"), _edit(0, 2, 0, 2, "Y")])


def test_apply_text_edits_allows_adjacent_ranges():
    result = apply_text_edits("abcdef", [_edit(0, 2, 0, 4, "Y"), _edit(0, 0, 0, 2, "X")])

    assert result.text == "XYef"
    assert result.spans == ((0, 1), (1, 2))


def test_apply_text_edits_keeps_order_of_inserts_at_same_point():
    result = apply_text_edits("ab", [_edit(0, 1, 0, 1, "1"), _edit(0, 1, 0, 1, "2")])

    assert result.text == "a12b"
    assert result.spans == ((1, 2), (2, 3))


def test_apply_text_edits_with_no_edits_returns_text_unchanged():
    result = apply_text_edits("unchanged", [])

    assert result == EditResult(text="unchanged", applied=0, spans=(), summary="edit: Δ0")


def test_apply_text_edits_reports_range_errors():
    with pytest.raises(OutOfRangeError):
        apply_text_edits("short", [_edit(0, 0, 0, 9, "x")])
    with pytest.raises(InvalidRangeError):
        apply_text_edits("a\nb", [_edit(1, 0, 0, 0, "x")])


def test_apply_text_edits_uses_position_encoding():
    text = "\U0001f600 ok"

    result = apply_text_edits(text, [_edit(0, 3, 0, 5, "OK")], encoding="utf-16")

    assert result.text == "\U0001f600 OK"


def test_text_edit_coerces_range_and_serializes_like_lsp():
    edit = TextEdit(((0, 1), (0, 2)), "x")  # type: ignore[arg-type]

    assert edit.range == Range(Position(0, 1), Position(0, 2))
    assert edit.to_dict() == {
        "range": {"start": {"line": 0, "character": 1}, "end": {"line": 0, "character": 2}},
        "newText": "x",
    }
    assert TextEdit.from_value(edit.to_dict()) == edit
    assert TextEdit.from_value(SimpleNamespace(range=edit.range, new_text="x")) == edit


def test_text_edit_rejects_bad_input():
    with pytest.raises(InvalidParameterError):
        TextEdit(Range.caret(0, 0), 42)  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        TextEdit.from_value({"range": [0, 0, 0, 0]})
    with pytest.raises(TypeError):
        TextEdit.from_value(42)
