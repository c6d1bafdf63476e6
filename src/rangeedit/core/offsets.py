"""Conversions between line/character positions and absolute string offsets."""

from __future__ import annotations

from typing import Any

from ..errors import OutOfRangeError
from .ranges import Position, Range, TextRange
from .text import (
    DEFAULT_ENCODING,
    DEFAULT_EOL,
    column_to_index,
    index_to_column,
    normalize_encoding,
    split_rows,
)


def position_to_offset(
    text: str,
    position: Any,
    eol: str = DEFAULT_EOL,
    *,
    encoding: str = DEFAULT_ENCODING,
) -> int:
    """Return the absolute offset of ``position`` inside ``text``."""

    point = Position.from_value(position)
    unit = normalize_encoding(encoding)
    rows = split_rows(text, eol)
    if point.line >= len(rows):
        raise OutOfRangeError(
            message=f"Line {point.line} is past the last line of the text ({len(rows) - 1})",
            line=point.line,
            character=point.character,
            limit=len(rows) - 1,
        )
    index = column_to_index(rows[point.line], point.character, unit, line=point.line)
    preceding = sum(len(row) for row in rows[: point.line])
    return preceding + point.line * len(eol) + index


def offset_to_position(
    text: str,
    offset: int,
    eol: str = DEFAULT_EOL,
    *,
    encoding: str = DEFAULT_ENCODING,
) -> Position:
    """Return the position of absolute ``offset`` inside ``text``.

    Offsets that fall between the characters of a multi-character terminator
    do not address a position and raise :class:`OutOfRangeError`.
    """

    unit = normalize_encoding(encoding)
    rows = split_rows(text, eol)
    if offset < 0 or offset > len(text):
        raise OutOfRangeError(
            message=f"Offset {offset} is outside the text (length {len(text)})",
            limit=len(text),
        )
    cursor = 0
    for line, row in enumerate(rows):
        row_end = cursor + len(row)
        if offset <= row_end:
            return Position(line, index_to_column(row, offset - cursor, unit))
        if offset < row_end + len(eol):
            raise OutOfRangeError(
                message=f"Offset {offset} falls inside the line terminator after line {line}",
                line=line,
            )
        cursor = row_end + len(eol)
    raise OutOfRangeError(  # pragma: no cover - offset bound checked above
        message=f"Offset {offset} is outside the text (length {len(text)})",
        limit=len(text),
    )


def range_to_text_range(
    text: str,
    target_range: Any,
    eol: str = DEFAULT_EOL,
    *,
    encoding: str = DEFAULT_ENCODING,
) -> TextRange:
    """Convert ``target_range`` into an absolute :class:`TextRange`."""

    span = Range.from_value(target_range).validate()
    start = position_to_offset(text, span.start, eol, encoding=encoding)
    end = position_to_offset(text, span.end, eol, encoding=encoding)
    return TextRange(start, end)


def end_position(text: str, eol: str = DEFAULT_EOL, *, encoding: str = DEFAULT_ENCODING) -> Position:
    """Return the position just past the last character of ``text``."""

    rows = split_rows(text, eol)
    last = rows[-1]
    return Position(len(rows) - 1, index_to_column(last, len(last), normalize_encoding(encoding)))


def full_range(text: str, eol: str = DEFAULT_EOL, *, encoding: str = DEFAULT_ENCODING) -> Range:
    """Return the range covering all of ``text``."""

    return Range(Position(0, 0), end_position(text, eol, encoding=encoding))


__all__ = [
    "position_to_offset",
    "offset_to_position",
    "range_to_text_range",
    "end_position",
    "full_range",
]
