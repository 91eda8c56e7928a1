"""
JSON extraction utilities for LLM responses.

Handles common issues with LLM-generated JSON:
- Markdown code blocks (```json ... ```)
- Trailing commas
- Comments
- JSON embedded in surrounding prose

Unlike a lenient parser, load_json_object never falls back to a default:
if no JSON object can be recovered, the caller gets the decode error.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any

logger = logging.getLogger(__name__)


def extract_json_from_text(text: str) -> str:
    """
    Extract JSON from text that may contain markdown or other content.

    Handles:
    - ```json ... ``` code blocks
    - ``` ... ``` code blocks
    - Raw JSON objects/arrays
    - JSON embedded in other text

    Args:
        text: Raw text that may contain JSON

    Returns:
        Extracted JSON string (may still need parsing)
    """
    text = text.strip()

    # Handle ```json first, then plain ```
    patterns = [
        r"```json\s*([\s\S]*?)\s*```",
        r"```\s*([\s\S]*?)\s*```",
    ]

    for pattern in patterns:
        match = re.search(pattern, text, re.IGNORECASE)
        if match:
            return match.group(1).strip()

    json_patterns = [
        r"(\{[\s\S]*\})",  # Object
        r"(\[[\s\S]*\])",  # Array
    ]

    for pattern in json_patterns:
        match = re.search(pattern, text)
        if match:
            candidate = match.group(1)
            if _looks_like_json(candidate):
                return candidate

    return text


def _looks_like_json(text: str) -> bool:
    """Quick check if text looks like JSON."""
    text = text.strip()
    return (
        (text.startswith("{") and text.endswith("}"))
        or (text.startswith("[") and text.endswith("]"))
    )


_STRING = r'"(?:\\.|[^"\\])*"'
# Group 1 is the replacement for whatever is not a string literal
_STRING_OR_COMMENT = re.compile(rf"{_STRING}|//[^\n]*()|/\*[\s\S]*?\*/()")
_STRING_OR_TRAILING_COMMA = re.compile(rf"{_STRING}|,\s*([\}}\]])")


def _keep_strings(match: re.Match[str]) -> str:
    if match.group(0).startswith('"'):
        return match.group(0)
    return next(g for g in match.groups() if g is not None)


def clean_json_string(text: str) -> str:
    """
    Clean common JSON issues from LLM output.

    Handles:
    - Trailing commas
    - JavaScript-style comments

    Args:
        text: JSON-like string

    Returns:
        Cleaned JSON string
    """
    # String literals are matched first so their contents are never touched
    text = _STRING_OR_COMMENT.sub(_keep_strings, text)
    text = _STRING_OR_TRAILING_COMMA.sub(_keep_strings, text)

    return text.strip()


def load_json_object(text: str) -> dict[str, Any]:
    """
    Parse a JSON object out of an LLM answer.

    Tries in order:
    1. Direct JSON parsing
    2. Extract from markdown/prose + parse
    3. Clean comments and trailing commas + parse

    Args:
        text: LLM answer

    Returns:
        Parsed JSON object

    Raises:
        ValueError: If no JSON object can be recovered (json.JSONDecodeError
            for syntax problems)
    """
    if not text or not text.strip():
        raise ValueError("empty response")

    # Strategy 1: Direct parse
    try:
        return _ensure_object(json.loads(text))
    except json.JSONDecodeError:
        pass

    # Strategy 2: Extract from markdown then parse
    extracted = extract_json_from_text(text)
    if extracted != text:
        try:
            return _ensure_object(json.loads(extracted))
        except json.JSONDecodeError:
            pass

    # Strategy 3: Clean common issues then parse (errors propagate)
    cleaned = clean_json_string(extracted)
    result = _ensure_object(json.loads(cleaned))
    logger.debug("JSON parsed after cleaning")
    return result


def _ensure_object(value: Any) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"expected a JSON object, got {type(value).__name__}")
    return value


__all__ = [
    "extract_json_from_text",
    "clean_json_string",
    "load_json_object",
]
