"""
Parameter set parsing.

The model answers with a JSON object whose values can be any JSON type.
The request builder only deals in strings, so every value is classified
into a closed set of kinds and then stringified explicitly:

    null     -> ""
    string   -> unchanged
    number   -> integral values without a fraction ("42"), others via repr
    boolean  -> "true" / "false"
    raw_json -> compact JSON text for objects and arrays

A key the model leaves out is simply absent from the parameter set; an
empty string only ever comes from an explicit null.
"""

from __future__ import annotations

import json
import math
from enum import Enum
from typing import Any

from callsmith.errors import ResponseParseError
from callsmith.utils.json_parser import load_json_object

ParameterSet = dict[str, str]


class ValueKind(str, Enum):
    """Kinds of JSON values the model may produce."""

    NULL = "null"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    RAW_JSON = "raw_json"


def classify_value(value: Any) -> ValueKind:
    """Classify a decoded JSON value."""
    if value is None:
        return ValueKind.NULL
    # bool before number: bool is a subclass of int
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    return ValueKind.RAW_JSON


def _format_number(value: int | float) -> str:
    if isinstance(value, int):
        return str(value)
    if math.isfinite(value) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def stringify_value(value: Any) -> str:
    """Render a decoded JSON value as a parameter string."""
    kind = classify_value(value)

    if kind is ValueKind.NULL:
        return ""
    if kind is ValueKind.STRING:
        return value
    if kind is ValueKind.BOOLEAN:
        return "true" if value else "false"
    if kind is ValueKind.NUMBER:
        return _format_number(value)
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def parse_parameters(answer: str, *, action_id: str | None = None) -> ParameterSet:
    """
    Parse a model answer into a flat, string-valued parameter set.

    Markdown code fences around the JSON are tolerated.

    Args:
        answer: Raw model answer
        action_id: Action being prepared, for error context

    Returns:
        Mapping of parameter name to string value

    Raises:
        ResponseParseError: If the answer holds no JSON object. The raw
            answer is attached so the malformed output can be inspected.
    """
    try:
        decoded = load_json_object(answer)
    except ValueError as e:
        raise ResponseParseError(
            f"failed to unmarshal response from inference API: {e}",
            raw=answer,
            action_id=action_id,
        ) from e

    return {str(key): stringify_value(value) for key, value in decoded.items()}
