"""Editing operations over line/character addressed text buffers."""

from .patches import EditResult, TextEdit, apply_text_edits
from .range_edits import RangeEditor, replace_by_range, slice_by_range

__all__ = [
    "EditResult",
    "RangeEditor",
    "TextEdit",
    "apply_text_edits",
    "replace_by_range",
    "slice_by_range",
]
