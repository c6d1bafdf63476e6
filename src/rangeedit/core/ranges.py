"""Structured helpers for representing text positions and spans."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Iterator

from ..errors import InvalidRangeError, OutOfRangeError


def _coerce_index(value: Any, label: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{label} must be an integer")
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{label} must be an integer") from exc
    if number != value and not isinstance(value, str):
        raise ValueError(f"{label} must be an integer")
    if number < 0:
        raise OutOfRangeError(message=f"{label} must be non-negative, got {number}")
    return number


@dataclass(slots=True, frozen=True, order=True)
class Position(Sequence[int]):
    """Zero-based ``(line, character)`` coordinate inside a buffer.

    Positions order lexicographically, line first.
    """

    line: int
    character: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "line", _coerce_index(self.line, "Position line"))
        object.__setattr__(self, "character", _coerce_index(self.character, "Position character"))

    def __len__(self) -> int:
        return 2

    def __getitem__(self, index: int | slice) -> int | tuple[int, ...]:
        if isinstance(index, slice):
            return self.to_tuple()[index]
        if index == 0:
            return self.line
        if index == 1:
            return self.character
        raise IndexError("Position index out of range")

    def __iter__(self) -> Iterator[int]:
        yield self.line
        yield self.character

    def to_tuple(self) -> tuple[int, int]:
        """Return the position as a ``(line, character)`` tuple."""

        return (self.line, self.character)

    def to_dict(self) -> dict[str, int]:
        """Return the position as an LSP ``Position`` object."""

        return {"line": self.line, "character": self.character}

    @classmethod
    def from_value(cls, value: Any) -> Position:
        """Coerce ``value`` into a :class:`Position`."""

        if isinstance(value, Position):
            return value
        if isinstance(value, Mapping):
            line = value.get("line")
            character = value.get("character")
            if line is None or character is None:
                raise ValueError("Position mappings require line and character keys")
            return cls(line, character)
        if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
            seq = list(value)
            if len(seq) != 2:
                raise ValueError("Position sequences must have exactly two entries")
            return cls(seq[0], seq[1])
        line = getattr(value, "line", None)
        character = getattr(value, "character", None)
        if line is not None and character is not None:
            return cls(line, character)
        raise TypeError("Unsupported Position input")


@dataclass(slots=True, frozen=True)
class Range:
    """Span between two positions, end exclusive.

    A range may be built with ``start`` after ``end`` (it is a plain value
    decoded from a request); :meth:`validate` and every editing operation
    reject such ranges with :class:`InvalidRangeError`.
    """

    start: Position
    end: Position

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", Position.from_value(self.start))
        object.__setattr__(self, "end", Position.from_value(self.end))

    @property
    def is_ordered(self) -> bool:
        return self.start <= self.end

    @property
    def is_empty(self) -> bool:
        """Return ``True`` when the range collapses to an insertion point."""

        return self.start == self.end

    @property
    def is_single_line(self) -> bool:
        return self.start.line == self.end.line

    @property
    def line_count(self) -> int:
        """Return the number of rows touched by the range (inclusive)."""

        return abs(self.end.line - self.start.line) + 1

    def validate(self) -> Range:
        """Return ``self`` or raise :class:`InvalidRangeError` when unordered."""

        if not self.is_ordered:
            raise InvalidRangeError(
                message=(
                    f"Range start {self.start.to_tuple()} comes after end {self.end.to_tuple()}"
                ),
                start=self.start.to_tuple(),
                end=self.end.to_tuple(),
            )
        return self

    def contains(self, position: Position) -> bool:
        """Return ``True`` when ``position`` lies in ``[start, end]``."""

        return self.start <= Position.from_value(position) <= self.end

    def to_tuple(self) -> tuple[tuple[int, int], tuple[int, int]]:
        return (self.start.to_tuple(), self.end.to_tuple())

    def to_dict(self) -> dict[str, dict[str, int]]:
        """Return the range as an LSP ``Range`` object."""

        return {"start": self.start.to_dict(), "end": self.end.to_dict()}

    @classmethod
    def from_value(cls, value: Any) -> Range:
        """Coerce ``value`` into a :class:`Range`.

        Accepts ranges, ``{"start": ..., "end": ...}`` mappings, pairs of
        positions, flat ``(line, char, line, char)`` sequences, and objects
        exposing ``start``/``end`` attributes.
        """

        if isinstance(value, Range):
            return value
        if value is None:
            raise ValueError("Range value is required")
        if isinstance(value, Mapping):
            start = value.get("start")
            end = value.get("end")
            if start is None or end is None:
                raise ValueError("Range mappings require start and end keys")
            return cls(Position.from_value(start), Position.from_value(end))
        if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
            seq = list(value)
            if len(seq) == 4:
                return cls(Position(seq[0], seq[1]), Position(seq[2], seq[3]))
            if len(seq) != 2:
                raise ValueError("Range sequences must have two positions or four integers")
            return cls(Position.from_value(seq[0]), Position.from_value(seq[1]))
        start = getattr(value, "start", None)
        end = getattr(value, "end", None)
        if start is not None and end is not None:
            return cls(Position.from_value(start), Position.from_value(end))
        raise TypeError("Unsupported Range input")

    @classmethod
    def caret(cls, line: int, character: int) -> Range:
        """Return an empty range at ``(line, character)``."""

        position = Position(line, character)
        return cls(position, position)


@dataclass(slots=True, frozen=True)
class TextRange(Sequence[int]):
    """Canonical representation of a text span using absolute offsets."""

    start: int
    end: int

    def __post_init__(self) -> None:
        start = _coerce_index(self.start, "TextRange start")
        end = _coerce_index(self.end, "TextRange end")
        if end < start:
            raise InvalidRangeError(
                message=f"TextRange start {start} comes after end {end}",
            )
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    def __len__(self) -> int:
        return 2

    def __getitem__(self, index: int | slice) -> int | tuple[int, ...]:
        if isinstance(index, slice):
            return self.to_tuple()[index]
        if index == 0:
            return self.start
        if index == 1:
            return self.end
        raise IndexError("TextRange index out of range")

    def __iter__(self) -> Iterator[int]:
        yield self.start
        yield self.end

    @property
    def length(self) -> int:
        """Return the width of the span."""

        return self.end - self.start

    @property
    def is_caret(self) -> bool:
        return self.start == self.end

    def to_tuple(self) -> tuple[int, int]:
        return (self.start, self.end)

    def to_dict(self) -> dict[str, int]:
        return {"start": self.start, "end": self.end}


__all__ = ["Position", "Range", "TextRange"]
