"""Parsing and validation helpers for LSP-shaped position, range and edit payloads."""

from __future__ import annotations

import json
from collections.abc import Mapping
from json import JSONDecodeError
from typing import Any, Dict

from jsonschema import Draft7Validator, ValidationError

from .core.ranges import Position, Range
from .editor.patches import TextEdit
from .errors import InvalidParameterError

POSITION_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "line": {"type": "integer", "minimum": 0},
        "character": {"type": "integer", "minimum": 0},
    },
    "required": ["line", "character"],
}

RANGE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "start": POSITION_SCHEMA,
        "end": POSITION_SCHEMA,
    },
    "required": ["start", "end"],
}

TEXT_EDIT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "range": RANGE_SCHEMA,
        "newText": {"type": "string"},
        "new_text": {"type": "string"},
    },
    "required": ["range"],
    "anyOf": [
        {"required": ["newText"]},
        {"required": ["new_text"]},
    ],
}

TEXT_EDIT_LIST_SCHEMA: Dict[str, Any] = {
    "type": "array",
    "items": TEXT_EDIT_SCHEMA,
}

_POSITION_VALIDATOR = Draft7Validator(POSITION_SCHEMA)
_RANGE_VALIDATOR = Draft7Validator(RANGE_SCHEMA)
_TEXT_EDIT_VALIDATOR = Draft7Validator(TEXT_EDIT_SCHEMA)
_TEXT_EDIT_LIST_VALIDATOR = Draft7Validator(TEXT_EDIT_LIST_SCHEMA)


def parse_position(payload: Mapping[str, Any] | str | bytes) -> Position:
    """Validate an LSP ``Position`` payload and return a :class:`Position`."""

    data = _validate(_coerce_payload(payload), _POSITION_VALIDATOR, "position")
    return Position(data["line"], data["character"])


def parse_range(payload: Mapping[str, Any] | str | bytes) -> Range:
    """Validate an LSP ``Range`` payload and return a :class:`Range`.

    The ordering of ``start``/``end`` is not checked here; the editing
    operations reject reversed ranges themselves.
    """

    data = _validate(_coerce_payload(payload), _RANGE_VALIDATOR, "range")
    return Range.from_value(data)


def parse_text_edit(payload: Mapping[str, Any] | str | bytes) -> TextEdit:
    """Validate an LSP ``TextEdit`` payload (``newText`` or ``new_text``)."""

    data = _validate(_coerce_payload(payload), _TEXT_EDIT_VALIDATOR, "text_edit")
    return TextEdit.from_value(data)


def parse_text_edits(payload: Any) -> list[TextEdit]:
    """Validate a list of ``TextEdit`` payloads (or its JSON encoding)."""

    data = _validate(_coerce_payload(payload), _TEXT_EDIT_LIST_VALIDATOR, "text_edits")
    return [TextEdit.from_value(item) for item in data]


def _coerce_payload(payload: Any) -> Any:
    if isinstance(payload, bytes):
        payload = payload.decode("utf-8")
    if isinstance(payload, str):
        try:
            return json.loads(payload)
        except JSONDecodeError as exc:
            raise InvalidParameterError(
                message=f"Payload is not valid JSON: {exc.msg}",
                value=payload,
                expected="JSON document",
            ) from exc
    return payload


def _validate(data: Any, validator: Draft7Validator, parameter: str) -> Any:
    try:
        validator.validate(data)
    except ValidationError as error:
        raise InvalidParameterError(
            message=_format_validation_error(error),
            parameter=parameter,
        ) from error
    return data


def _format_validation_error(error: ValidationError) -> str:
    path = ".".join(str(part) for part in error.path)
    if path:
        return f"{path}: {error.message}"
    return error.message


__all__ = [
    "POSITION_SCHEMA",
    "RANGE_SCHEMA",
    "TEXT_EDIT_SCHEMA",
    "parse_position",
    "parse_range",
    "parse_text_edit",
    "parse_text_edits",
]
