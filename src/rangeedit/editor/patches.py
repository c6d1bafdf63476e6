"""Batch application of range-addressed text edits."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Sequence, Tuple

from ..core.offsets import range_to_text_range
from ..core.ranges import Range, TextRange
from ..core.text import DEFAULT_ENCODING, DEFAULT_EOL, normalize_encoding, validate_eol
from ..errors import EditOverlapError, InvalidParameterError

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class TextEdit:
    """Replacement of ``range`` with ``new_text``, shaped like an LSP ``TextEdit``."""

    range: Range
    new_text: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "range", Range.from_value(self.range))
        if not isinstance(self.new_text, str):
            raise InvalidParameterError(
                message="TextEdit new_text must be a string",
                parameter="new_text",
                value=self.new_text,
                expected="str",
            )

    def to_dict(self) -> dict[str, Any]:
        return {"range": self.range.to_dict(), "newText": self.new_text}

    @classmethod
    def from_value(cls, value: Any) -> TextEdit:
        """Coerce ``value`` into a :class:`TextEdit`."""

        if isinstance(value, TextEdit):
            return value
        if isinstance(value, Mapping):
            new_text = value.get("newText", value.get("new_text"))
            if "range" not in value or new_text is None:
                raise ValueError("TextEdit mappings require range and newText keys")
            return cls(Range.from_value(value["range"]), new_text)
        target = getattr(value, "range", None)
        new_text = getattr(value, "new_text", None)
        if target is not None and new_text is not None:
            return cls(Range.from_value(target), new_text)
        raise TypeError("Unsupported TextEdit input")


@dataclass(slots=True)
class EditResult:
    """Result of applying a batch of text edits to a buffer."""

    text: str
    applied: int
    spans: Tuple[Tuple[int, int], ...]
    summary: str


@dataclass(slots=True)
class _ResolvedEdit:
    index: int
    span: TextRange
    new_text: str


def apply_text_edits(
    text: str,
    edits: Sequence[Any],
    eol: str = DEFAULT_EOL,
    *,
    encoding: str = DEFAULT_ENCODING,
) -> EditResult:
    """Apply ``edits`` computed against ``text`` and return the new buffer.

    All ranges refer to the original ``text``. Edits are ordered by start
    position; inserts at the same point keep the order they were given in.
    ``spans`` holds the offsets of each inserted ``new_text`` in the result,
    in document order.

    Raises:
        InvalidRangeError: an edit range starts after it ends.
        OutOfRangeError: an edit range is outside ``text``.
        EditOverlapError: two edits touch the same characters.
    """

    validate_eol(eol)
    unit = normalize_encoding(encoding)
    resolved: list[_ResolvedEdit] = []
    for index, raw in enumerate(edits):
        edit = TextEdit.from_value(raw)
        span = range_to_text_range(text, edit.range, eol, encoding=unit)
        resolved.append(_ResolvedEdit(index=index, span=span, new_text=edit.new_text))

    ordered = sorted(resolved, key=lambda item: (item.span.start, item.span.end, item.index))
    _ensure_non_overlapping(ordered)

    updated = text
    for entry in reversed(ordered):
        updated = updated[: entry.span.start] + entry.new_text + updated[entry.span.end :]

    spans = _compute_spans(ordered)
    summary = _summarize_edits(text, updated)
    LOGGER.debug("Applied %d text edits (%s)", len(ordered), summary)
    return EditResult(text=updated, applied=len(ordered), spans=spans, summary=summary)


def _ensure_non_overlapping(ordered: Sequence[_ResolvedEdit]) -> None:
    previous: _ResolvedEdit | None = None
    for entry in ordered:
        if previous is not None and entry.span.start < previous.span.end:
            raise EditOverlapError(
                message=(
                    f"Edit {entry.index} at offset {entry.span.start} overlaps edit {previous.index} "
                    f"ending at offset {previous.span.end}"
                ),
                first=previous.index,
                second=entry.index,
            )
        if previous is None or entry.span.end >= previous.span.end:
            previous = entry


def _compute_spans(ordered: Sequence[_ResolvedEdit]) -> Tuple[Tuple[int, int], ...]:
    spans: list[tuple[int, int]] = []
    shift = 0
    for entry in ordered:
        start = entry.span.start + shift
        spans.append((start, start + len(entry.new_text)))
        shift += len(entry.new_text) - entry.span.length
    return tuple(spans)


def _summarize_edits(before: str, after: str) -> str:
    delta = len(after) - len(before)
    if delta == 0:
        return "edit: Δ0"
    sign = "+" if delta > 0 else "-"
    return f"edit: {sign}{abs(delta)} chars"


__all__ = ["TextEdit", "EditResult", "apply_text_edits"]
