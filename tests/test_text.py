"""Tests for line terminator and position-encoding helpers."""

from __future__ import annotations

import pytest

from rangeedit.core import text as text_utils
from rangeedit.errors import InvalidParameterError, OutOfRangeError

EMOJI = "\U0001f600"


@pytest.mark.parametrize(
    ("sample", "expected"),
    [
        ("a\r\nb\nc", "\r\n"),
        ("a\nb", "\n"),
        ("a\rb", "\r"),
        ("single line", "\n"),
    ],
)
def test_detect_eol(sample: str, expected: str) -> None:
    assert text_utils.detect_eol(sample) == expected


def test_detect_eol_uses_default_without_terminators() -> None:
    assert text_utils.detect_eol("abc", default="\r\n") == "\r\n"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, "\n"),
        ("lf", "\n"),
        ("CRLF", "\r\n"),
        (" cr ", "\r"),
        ("\r\n", "\r\n"),
        ("\\r\\n", "\r\n"),
    ],
)
def test_resolve_eol(value: str | None, expected: str) -> None:
    assert text_utils.resolve_eol(value) == expected


def test_resolve_eol_auto_detects_from_text() -> None:
    assert text_utils.resolve_eol("auto", text="one\r\ntwo") == "\r\n"
    assert text_utils.resolve_eol("auto") == "\n"


def test_resolve_eol_rejects_unknown_names() -> None:
    with pytest.raises(InvalidParameterError) as excinfo:
        text_utils.resolve_eol("newline")

    assert excinfo.value.parameter == "eol"


def test_split_rows_keeps_empty_rows() -> None:
    assert text_utils.split_rows("") == [""]
    assert text_utils.split_rows("a\n") == ["a", ""]
    assert text_utils.split_rows("a\r\n\r\nb", "\r\n") == ["a", "", "b"]


@pytest.mark.parametrize("eol", ["", None, 5])
def test_split_rows_rejects_unusable_terminators(eol: object) -> None:
    with pytest.raises(InvalidParameterError):
        text_utils.split_rows("abc", eol)  # type: ignore[arg-type]


def test_normalize_encoding() -> None:
    assert text_utils.normalize_encoding(None) == "utf-32"
    assert text_utils.normalize_encoding("UTF16") == "utf-16"
    assert text_utils.normalize_encoding("utf-8") == "utf-8"
    assert text_utils.normalize_encoding("codepoint") == "utf-32"
    with pytest.raises(InvalidParameterError):
        text_utils.normalize_encoding("latin-1")


def test_row_length_per_encoding() -> None:
    row = f"a{EMOJI}é"

    assert text_utils.row_length(row, "utf-32") == 3
    assert text_utils.row_length(row, "utf-16") == 4
    assert text_utils.row_length(row, "utf-8") == 7


def test_column_to_index_utf16() -> None:
    row = f"a{EMOJI}b"

    assert text_utils.column_to_index(row, 0, "utf-16") == 0
    assert text_utils.column_to_index(row, 1, "utf-16") == 1
    assert text_utils.column_to_index(row, 3, "utf-16") == 2
    assert text_utils.column_to_index(row, 4, "utf-16") == 3


def test_column_to_index_rejects_split_code_points() -> None:
    with pytest.raises(OutOfRangeError) as excinfo:
        text_utils.column_to_index(f"a{EMOJI}b", 2, "utf-16", line=7)

    assert excinfo.value.line == 7
    assert excinfo.value.character == 2


def test_column_to_index_rejects_columns_past_the_row() -> None:
    with pytest.raises(OutOfRangeError) as excinfo:
        text_utils.column_to_index(f"a{EMOJI}b", 5, "utf-16")

    assert excinfo.value.limit == 4


def test_column_to_index_utf8() -> None:
    assert text_utils.column_to_index("é!", 2, "utf-8") == 1
    with pytest.raises(OutOfRangeError):
        text_utils.column_to_index("é!", 1, "utf-8")


def test_index_to_column() -> None:
    row = f"a{EMOJI}b"

    assert text_utils.index_to_column(row, 2, "utf-16") == 3
    assert text_utils.index_to_column(row, 2, "utf-8") == 5
    assert text_utils.index_to_column(row, 2, "utf-32") == 2
