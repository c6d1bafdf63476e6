"""Read and rewrite regions of a text buffer addressed by line/character ranges."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ..core.ranges import Range
from ..core.text import (
    DEFAULT_ENCODING,
    DEFAULT_EOL,
    column_to_index,
    normalize_encoding,
    split_rows,
    validate_eol,
)
from ..errors import InvalidParameterError, OutOfRangeError

LOGGER = logging.getLogger(__name__)


def slice_by_range(
    text: str,
    target_range: Any,
    eol: str = DEFAULT_EOL,
    return_rows: bool = False,
    *,
    encoding: str = DEFAULT_ENCODING,
) -> str | list[str]:
    """Return the text covered by ``target_range``.

    Args:
        text: Buffer to read from. It is never modified.
        target_range: A :class:`Range` or anything :meth:`Range.from_value` accepts.
        eol: Line terminator used to split ``text`` into rows.
        return_rows: Return the covered row fragments as a list instead of a
            single string joined with ``eol``.
        encoding: Unit in which ``character`` offsets are counted.

    Raises:
        InvalidRangeError: ``start`` comes after ``end``.
        OutOfRangeError: a line or character index is outside the buffer.
    """

    span = Range.from_value(target_range).validate()
    unit = normalize_encoding(encoding)
    rows = split_rows(text, eol)
    start_char, end_char = _locate(rows, span, unit)

    start_row = rows[span.start.line]
    if span.is_single_line:
        segment = start_row[start_char:end_char]
        return [segment] if return_rows else segment

    pieces = [
        start_row[start_char:],
        *rows[span.start.line + 1 : span.end.line],
        rows[span.end.line][:end_char],
    ]
    if return_rows:
        return pieces
    return eol.join(pieces)


def replace_by_range(
    text: str,
    target_range: Any,
    new_text: str,
    eol: str = DEFAULT_EOL,
    *,
    encoding: str = DEFAULT_ENCODING,
) -> str:
    """Return a copy of ``text`` with ``target_range`` replaced by ``new_text``.

    Rows strictly inside a multi-line range are dropped and the tail of the
    end row is appended directly after ``new_text``. Terminators embedded in
    ``new_text`` become real rows. An empty ``new_text`` deletes the span; an
    empty range inserts at that point.

    Raises:
        InvalidRangeError: ``start`` comes after ``end``.
        OutOfRangeError: a line or character index is outside the buffer.
    """

    if not isinstance(new_text, str):
        raise InvalidParameterError(
            message="new_text must be a string",
            parameter="new_text",
            value=new_text,
            expected="str",
        )
    span = Range.from_value(target_range).validate()
    unit = normalize_encoding(encoding)
    rows = split_rows(text, eol)
    start_char, end_char = _locate(rows, span, unit)

    merged = rows[span.start.line][:start_char] + new_text + rows[span.end.line][end_char:]
    result = eol.join([*rows[: span.start.line], merged, *rows[span.end.line + 1 :]])
    LOGGER.debug(
        "Replaced %s..%s (%d rows) with %d chars; length %d -> %d",
        span.start.to_tuple(),
        span.end.to_tuple(),
        span.line_count,
        len(new_text),
        len(text),
        len(result),
    )
    return result


def _locate(rows: list[str], span: Range, encoding: str) -> tuple[int, int]:
    """Bounds-check ``span`` against ``rows`` and return code-point columns."""

    last_line = len(rows) - 1
    for position in (span.start, span.end):
        if position.line > last_line:
            raise OutOfRangeError(
                message=f"Line {position.line} is past the last line of the text ({last_line})",
                line=position.line,
                character=position.character,
                limit=last_line,
            )
    start_char = column_to_index(rows[span.start.line], span.start.character, encoding, line=span.start.line)
    end_char = column_to_index(rows[span.end.line], span.end.character, encoding, line=span.end.line)
    return start_char, end_char


@dataclass(slots=True, frozen=True)
class RangeEditor:
    """Binds a line terminator and position encoding to the range operations."""

    eol: str = DEFAULT_EOL
    encoding: str = DEFAULT_ENCODING

    def __post_init__(self) -> None:
        validate_eol(self.eol)
        object.__setattr__(self, "encoding", normalize_encoding(self.encoding))

    @classmethod
    def from_settings(cls, settings: Any) -> RangeEditor:
        """Build an editor from a settings object exposing ``eol``/``position_encoding``."""

        return cls(eol=settings.eol, encoding=settings.position_encoding)

    def slice(self, text: str, target_range: Any, *, return_rows: bool = False) -> str | list[str]:
        return slice_by_range(text, target_range, self.eol, return_rows, encoding=self.encoding)

    def replace(self, text: str, target_range: Any, new_text: str) -> str:
        return replace_by_range(text, target_range, new_text, self.eol, encoding=self.encoding)


__all__ = ["slice_by_range", "replace_by_range", "RangeEditor"]
