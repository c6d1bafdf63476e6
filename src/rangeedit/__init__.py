"""Range-addressed text editing primitives.

Positions and ranges use zero-based ``(line, character)`` coordinates, the
same model as Language Server Protocol ``Position``/``Range`` objects.
"""

from .core.offsets import (
    end_position,
    full_range,
    offset_to_position,
    position_to_offset,
    range_to_text_range,
)
from .core.ranges import Position, Range, TextRange
from .core.text import CR, CRLF, LF, detect_eol
from .editor.patches import EditResult, TextEdit, apply_text_edits
from .editor.range_edits import RangeEditor, replace_by_range, slice_by_range
from .errors import (
    EditOverlapError,
    ErrorCode,
    InvalidParameterError,
    InvalidRangeError,
    OutOfRangeError,
    RangeEditError,
)

__version__ = "0.1.0"

__all__ = [
    "CR",
    "CRLF",
    "LF",
    "EditOverlapError",
    "EditResult",
    "ErrorCode",
    "InvalidParameterError",
    "InvalidRangeError",
    "OutOfRangeError",
    "Position",
    "Range",
    "RangeEditError",
    "RangeEditor",
    "TextEdit",
    "TextRange",
    "apply_text_edits",
    "detect_eol",
    "end_position",
    "full_range",
    "offset_to_position",
    "position_to_offset",
    "range_to_text_range",
    "replace_by_range",
    "slice_by_range",
]
