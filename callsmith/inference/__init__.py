"""
Parameter inference.

Turns (tool, conversation, action) into a flat string-valued parameter set
with a single language model call.
"""

from .engine import ParameterInferenceEngine
from .params import ParameterSet, ValueKind, classify_value, parse_parameters, stringify_value
from .prompts import DEFAULT_USER_TEMPLATE, SYSTEM_PROMPT, render_user_prompt

__all__ = [
    "ParameterInferenceEngine",
    "ParameterSet",
    "ValueKind",
    "classify_value",
    "parse_parameters",
    "stringify_value",
    "DEFAULT_USER_TEMPLATE",
    "SYSTEM_PROMPT",
    "render_user_prompt",
]
