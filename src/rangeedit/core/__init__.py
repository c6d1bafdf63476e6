"""Core domain types and utilities.

This package contains the coordinate model shared by the editing operations.
"""

from .ranges import Position, Range, TextRange

__all__ = ["Position", "Range", "TextRange"]
