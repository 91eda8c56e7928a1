"""
OpenAPI schema handling.

- index: resolve actions and list them
- filter: minimal per-action documents for prompts
- document: loading and deterministic traversal
"""

from .document import HTTP_METHODS, OperationEntry, iter_operations, load_schema
from .filter import filter_schema, filter_tool_schema
from .index import (
    ParameterClassification,
    ParameterLocation,
    ResolvedAction,
    list_actions,
    resolve_action,
)

__all__ = [
    "HTTP_METHODS",
    "OperationEntry",
    "iter_operations",
    "load_schema",
    "filter_schema",
    "filter_tool_schema",
    "ParameterClassification",
    "ParameterLocation",
    "ResolvedAction",
    "list_actions",
    "resolve_action",
]
