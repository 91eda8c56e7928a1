"""
Schema Filter - minimal API description for one action.

Prompts stay small by sending the model only the operation it has to fill
in. The filtered document keeps:

- the "openapi" version string and "info" metadata
- the matched operation at its original path and method (path-level
  parameters carried along, parameter and requestBody $refs inlined)
- components.schemas entries referenced directly by the operation's
  application/json response schemas

Reference resolution is one hop: a copied component schema that itself
references other components is copied verbatim and those nested references
are not followed.
"""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from callsmith.errors import ActionNotFoundError, MissingSchemaError

from .document import find_operation, load_schema, operation_parameters, ref_name, resolve_ref

if TYPE_CHECKING:
    from callsmith.config.schemas import Tool

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


def _response_schema_refs(document: Mapping[str, Any], operation: Mapping[str, Any]) -> list[str]:
    """Component names referenced directly by JSON response schemas."""
    refs: list[str] = []

    responses = operation.get("responses") or {}
    for status in responses:
        response = resolve_ref(document, responses[status])
        if not isinstance(response, dict):
            continue

        json_body = (response.get("content") or {}).get(JSON_CONTENT_TYPE)
        if not isinstance(json_body, dict):
            continue

        schema = json_body.get("schema")
        if not isinstance(schema, dict):
            continue

        ref = schema.get("$ref")
        if isinstance(ref, str) and ref:
            name = ref_name(ref)
            if name not in refs:
                refs.append(name)

    return refs


def filter_schema(document: str | bytes | Mapping[str, Any], action_id: str) -> dict[str, Any]:
    """
    Build a minimal document containing only one action.

    The source document is never mutated.

    Args:
        document: OpenAPI document (text or parsed mapping)
        action_id: operationId to keep

    Returns:
        The filtered document

    Raises:
        SchemaParseError: If the document is malformed
        ActionNotFoundError: If no operation has this identifier
    """
    spec = load_schema(document)

    entry = find_operation(spec, action_id)
    if entry is None:
        raise ActionNotFoundError(action_id)

    operation = copy.deepcopy(entry.operation)
    parameters = operation_parameters(spec, entry)
    if parameters:
        operation["parameters"] = parameters
    if "requestBody" in operation:
        operation["requestBody"] = copy.deepcopy(resolve_ref(spec, entry.operation["requestBody"]))

    filtered: dict[str, Any] = {}
    if "openapi" in spec:
        filtered["openapi"] = spec["openapi"]
    if "info" in spec:
        filtered["info"] = copy.deepcopy(spec["info"])
    filtered["paths"] = {entry.path: {entry.method: operation}}
    filtered["components"] = {}

    used_refs = _response_schema_refs(spec, entry.operation)
    if used_refs:
        source_schemas = (spec.get("components") or {}).get("schemas") or {}
        schemas: dict[str, Any] = {}
        for name in used_refs:
            if name not in source_schemas:
                logger.warning(f"[schema_filter] Referenced schema '{name}' not found in components")
                continue
            schemas[name] = copy.deepcopy(source_schemas[name])
        filtered["components"]["schemas"] = schemas

    logger.debug(
        f"[schema_filter] Filtered {action_id}: {entry.method.upper()} {entry.path}, "
        f"schemas={used_refs}"
    )
    return filtered


def filter_tool_schema(tool: Tool, action_id: str) -> str:
    """
    Filter a tool's schema for one action and render it as JSON text.

    Raises:
        MissingSchemaError: If the tool has no API schema configured
        SchemaParseError: If the schema is malformed
        ActionNotFoundError: If the action is absent
    """
    if tool.api is None or not tool.api.api_schema:
        raise MissingSchemaError(tool.id, action_id=action_id)

    filtered = filter_schema(tool.api.api_schema, action_id)
    # YAML documents may carry dates in info; render them as text
    return json.dumps(filtered, indent=2, ensure_ascii=False, default=str)


__all__ = ["filter_schema", "filter_tool_schema"]
