"""Line terminator and position-encoding helpers shared by the editing operations."""

from __future__ import annotations

from typing import Final, Literal

from ..errors import InvalidParameterError, OutOfRangeError

LF: Final = "\n"
CRLF: Final = "\r\n"
CR: Final = "\r"
DEFAULT_EOL: Final = LF

EOL_ALIASES: Final[dict[str, str]] = {
    "lf": LF,
    "crlf": CRLF,
    "cr": CR,
    "\\n": LF,
    "\\r\\n": CRLF,
    "\\r": CR,
}

UTF8: Final = "utf-8"
UTF16: Final = "utf-16"
UTF32: Final = "utf-32"
DEFAULT_ENCODING: Final = UTF32
POSITION_ENCODINGS: Final[tuple[str, ...]] = (UTF8, UTF16, UTF32)
PositionEncoding = Literal["utf-8", "utf-16", "utf-32"]

_ENCODING_ALIASES: Final[dict[str, str]] = {
    "utf8": UTF8,
    "utf16": UTF16,
    "utf32": UTF32,
    "codepoint": UTF32,
    "code-point": UTF32,
}


def detect_eol(text: str, *, default: str = DEFAULT_EOL) -> str:
    """Return the first line terminator style found in ``text``."""

    if CRLF in text:
        return CRLF
    if LF in text:
        return LF
    if CR in text:
        return CR
    return default


def resolve_eol(value: str | None, *, text: str | None = None) -> str:
    """Map a terminator name (``lf``/``crlf``/``cr``/``auto``) or literal to a terminator."""

    if value is None:
        return DEFAULT_EOL
    if value in (LF, CRLF, CR):
        return value
    key = value.strip().lower()
    if key == "auto":
        return detect_eol(text or "")
    eol = EOL_ALIASES.get(key)
    if eol is None:
        raise InvalidParameterError(
            message=f"Unknown line terminator {value!r}",
            parameter="eol",
            value=value,
            expected="lf, crlf, cr or auto",
        )
    return eol


def validate_eol(eol: str) -> str:
    """Return ``eol`` or raise :class:`InvalidParameterError` when it cannot split rows."""

    if not isinstance(eol, str) or not eol:
        raise InvalidParameterError(
            message="eol must be a non-empty string",
            parameter="eol",
            value=eol,
        )
    return eol


def split_rows(text: str, eol: str = DEFAULT_EOL) -> list[str]:
    """Split ``text`` on ``eol``; an empty buffer is a single empty row."""

    return text.split(validate_eol(eol))


def normalize_encoding(value: str | None) -> str:
    """Return the canonical position-encoding name for ``value``."""

    if value is None:
        return DEFAULT_ENCODING
    key = value.strip().lower()
    key = _ENCODING_ALIASES.get(key, key)
    if key not in POSITION_ENCODINGS:
        raise InvalidParameterError(
            message=f"Unsupported position encoding {value!r}",
            parameter="encoding",
            value=value,
            expected=", ".join(POSITION_ENCODINGS),
        )
    return key


def _unit_width(char: str, encoding: str) -> int:
    if encoding == UTF16:
        return 2 if ord(char) > 0xFFFF else 1
    return len(char.encode("utf-8", "surrogatepass"))


def row_length(row: str, encoding: str = DEFAULT_ENCODING) -> int:
    """Return the length of ``row`` measured in ``encoding`` units."""

    if encoding == UTF32:
        return len(row)
    if encoding == UTF16 and row.isascii():
        return len(row)
    return sum(_unit_width(char, encoding) for char in row)


def column_to_index(
    row: str,
    column: int,
    encoding: str = DEFAULT_ENCODING,
    *,
    line: int | None = None,
) -> int:
    """Translate ``column`` (in ``encoding`` units) into a code-point index within ``row``.

    Raises :class:`OutOfRangeError` when the column is past the end of the row
    or falls inside a single code point.
    """

    if encoding == UTF32 or row.isascii():
        if column > len(row):
            raise _column_error(column, len(row), line)
        return column

    consumed = 0
    for index, char in enumerate(row):
        if consumed == column:
            return index
        consumed += _unit_width(char, encoding)
        if consumed > column:
            raise OutOfRangeError(
                message=f"Character {column} on line {line} splits a code point",
                line=line,
                character=column,
            )
    if consumed == column:
        return len(row)
    raise _column_error(column, consumed, line)


def index_to_column(row: str, index: int, encoding: str = DEFAULT_ENCODING) -> int:
    """Translate a code-point ``index`` within ``row`` into ``encoding`` units."""

    if encoding == UTF32 or row.isascii():
        return index
    return row_length(row[:index], encoding)


def _column_error(column: int, limit: int, line: int | None) -> OutOfRangeError:
    return OutOfRangeError(
        message=f"Character {column} is past the end of line {line} (length {limit})",
        line=line,
        character=column,
        limit=limit,
    )


__all__ = [
    "LF",
    "CRLF",
    "CR",
    "DEFAULT_EOL",
    "UTF8",
    "UTF16",
    "UTF32",
    "DEFAULT_ENCODING",
    "POSITION_ENCODINGS",
    "PositionEncoding",
    "detect_eol",
    "resolve_eol",
    "validate_eol",
    "split_rows",
    "normalize_encoding",
    "row_length",
    "column_to_index",
    "index_to_column",
]
