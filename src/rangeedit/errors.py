"""Standardized error types for range-addressed editing.

Every error carries a machine-readable code and serializes to a JSON-friendly
mapping so editor integrations can forward failures without string parsing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


# -----------------------------------------------------------------------------
# Error Code Constants
# -----------------------------------------------------------------------------

class ErrorCode:
    """Constants for error codes used in error payloads."""

    # Range errors
    INVALID_RANGE = "invalid_range"
    OUT_OF_RANGE = "out_of_range"
    EDIT_OVERLAP = "edit_overlap"

    # General errors
    INVALID_PARAMETER = "invalid_parameter"
    INTERNAL_ERROR = "internal_error"


# -----------------------------------------------------------------------------
# Base Error Class
# -----------------------------------------------------------------------------

@dataclass
class RangeEditError(Exception):
    """Base exception class for all range editing errors.

    Attributes:
        error_code: Machine-readable error identifier.
        message: Human-readable error description.
        details: Additional structured error information.
        suggestion: Actionable guidance for recovery.
    """

    error_code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)
    suggestion: str = ""

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary for JSON responses."""
        result: dict[str, Any] = {
            "error": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["details"] = dict(self.details)
        if self.suggestion:
            result["suggestion"] = self.suggestion
        return result

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


# -----------------------------------------------------------------------------
# Range Errors
# -----------------------------------------------------------------------------

@dataclass
class InvalidRangeError(RangeEditError):
    """Error raised when a range starts after it ends."""

    error_code: str = field(default=ErrorCode.INVALID_RANGE)
    message: str = field(default="Range start must not come after range end")
    details: dict[str, Any] = field(default_factory=dict)
    suggestion: str = field(default="Order the positions so that start <= end")

    start: tuple[int, int] | None = field(default=None)
    end: tuple[int, int] | None = field(default=None)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.start is not None:
            result["start"] = list(self.start)
        if self.end is not None:
            result["end"] = list(self.end)
        return result


@dataclass
class OutOfRangeError(RangeEditError):
    """Error raised when a line or character index is outside the buffer."""

    error_code: str = field(default=ErrorCode.OUT_OF_RANGE)
    message: str = field(default="Position is outside the addressable text")
    details: dict[str, Any] = field(default_factory=dict)
    suggestion: str = field(default="Recompute the position against the current text")

    line: int | None = field(default=None)
    character: int | None = field(default=None)
    limit: int | None = field(default=None)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.line is not None:
            result["line"] = self.line
        if self.character is not None:
            result["character"] = self.character
        if self.limit is not None:
            result["limit"] = self.limit
        return result


@dataclass
class EditOverlapError(RangeEditError):
    """Error raised when edits in one batch touch the same region."""

    error_code: str = field(default=ErrorCode.EDIT_OVERLAP)
    message: str = field(default="Text edits may not overlap")
    details: dict[str, Any] = field(default_factory=dict)
    suggestion: str = field(default="Merge overlapping edits before applying them")

    first: int | None = field(default=None)
    second: int | None = field(default=None)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.first is not None:
            result["first"] = self.first
        if self.second is not None:
            result["second"] = self.second
        return result


# -----------------------------------------------------------------------------
# General Errors
# -----------------------------------------------------------------------------

@dataclass
class InvalidParameterError(RangeEditError):
    """Error raised when a parameter value is invalid."""

    error_code: str = field(default=ErrorCode.INVALID_PARAMETER)
    message: str = field(default="Invalid parameter value")
    details: dict[str, Any] = field(default_factory=dict)
    suggestion: str = field(default="Check the parameter requirements")

    parameter: str | None = field(default=None)
    value: Any = field(default=None)
    expected: str | None = field(default=None)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.parameter is not None:
            result["parameter"] = self.parameter
        if self.value is not None:
            result["value"] = repr(self.value)
        if self.expected is not None:
            result["expected"] = self.expected
        return result


_ERRORS_BY_CODE: dict[str, type[RangeEditError]] = {
    ErrorCode.INVALID_RANGE: InvalidRangeError,
    ErrorCode.OUT_OF_RANGE: OutOfRangeError,
    ErrorCode.EDIT_OVERLAP: EditOverlapError,
    ErrorCode.INVALID_PARAMETER: InvalidParameterError,
}


def error_from_dict(data: Mapping[str, Any]) -> RangeEditError:
    """Reconstruct an error from its dictionary representation.

    Known codes map back to their specific subclass; anything else becomes a
    plain :class:`RangeEditError`. Subclass-specific fields are not restored.
    """
    code = data.get("error", ErrorCode.INTERNAL_ERROR)
    message = data.get("message", "Unknown error")
    details = dict(data.get("details", {}))
    suggestion = data.get("suggestion", "")
    error_cls = _ERRORS_BY_CODE.get(code)
    if error_cls is None:
        return RangeEditError(error_code=code, message=message, details=details, suggestion=suggestion)
    error = error_cls(message=message, details=details)
    if suggestion:
        error.suggestion = suggestion
    return error


__all__ = [
    "ErrorCode",
    "RangeEditError",
    "InvalidRangeError",
    "OutOfRangeError",
    "EditOverlapError",
    "InvalidParameterError",
    "error_from_dict",
]
