"""
OpenAPI document loading and traversal.

Shared by the schema index and the schema filter:

- load_schema(): parse JSON or YAML text into a plain dict
- iter_operations(): enumerate operations in a fixed, deterministic order
- resolve_ref(): one-hop lookup of local "#/..." references
- operation_parameters(): merge path-level and operation-level parameters

Enumeration order is lexical by path, then lexical by HTTP method, so the
first match for a duplicated operationId is the same on every run.
"""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

import yaml

from callsmith.errors import SchemaParseError

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

_EXCERPT_LENGTH = 200


@dataclass(frozen=True, slots=True)
class OperationEntry:
    """
    One (path, method) operation of a document.

    Attributes:
        path: Path template as written in the document
        method: Lower-case HTTP method key
        operation: The operation object (not copied)
        path_item: The enclosing path item (not copied)
    """

    path: str
    method: str
    operation: dict[str, Any]
    path_item: dict[str, Any]

    @property
    def operation_id(self) -> str:
        return self.operation.get("operationId") or ""


def load_schema(raw: str | bytes | Mapping[str, Any]) -> dict[str, Any]:
    """
    Parse an OpenAPI document.

    JSON is tried first, then YAML. Mappings are accepted as already parsed
    and returned as-is (callers must not mutate them).

    Args:
        raw: Document text, bytes, or parsed mapping

    Returns:
        The document as a dict

    Raises:
        SchemaParseError: If the text is not a valid JSON/YAML mapping with
            a mapping-valued "paths" member
    """
    if isinstance(raw, Mapping):
        document = dict(raw)
        text = ""
    else:
        text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
        if not text.strip():
            raise SchemaParseError("failed to load openapi spec: document is empty")
        document = _parse_text(text)

    if not isinstance(document, dict):
        raise SchemaParseError(
            f"failed to load openapi spec: expected a mapping, got {type(document).__name__}",
            excerpt=text[:_EXCERPT_LENGTH],
        )

    paths = document.get("paths")
    if paths is not None and not isinstance(paths, dict):
        raise SchemaParseError(
            "failed to load openapi spec: 'paths' must be a mapping",
            excerpt=text[:_EXCERPT_LENGTH],
        )

    return document


def _parse_text(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise SchemaParseError(
            f"failed to load openapi spec: {e}",
            excerpt=text[:_EXCERPT_LENGTH],
        ) from e


def iter_operations(document: Mapping[str, Any]) -> Iterator[OperationEntry]:
    """
    Yield every operation of the document in deterministic order.

    Raises:
        SchemaParseError: If a path item or operation is not a mapping
    """
    paths = document.get("paths") or {}

    for path in sorted(paths):
        path_item = paths[path]
        if path_item is None:
            continue
        if not isinstance(path_item, dict):
            raise SchemaParseError(f"failed to load openapi spec: path item {path} is not a mapping")

        for method in sorted(m for m in path_item if m in HTTP_METHODS):
            operation = path_item[method]
            if not isinstance(operation, dict):
                raise SchemaParseError(
                    f"failed to load openapi spec: {method.upper()} {path} is not a mapping"
                )
            yield OperationEntry(path=path, method=method, operation=operation, path_item=path_item)


def find_operation(document: Mapping[str, Any], operation_id: str) -> OperationEntry | None:
    """Return the first operation whose operationId matches, or None."""
    for entry in iter_operations(document):
        if entry.operation_id == operation_id:
            return entry
    return None


def resolve_ref(document: Mapping[str, Any], obj: Any) -> Any:
    """
    Resolve a local $ref one hop.

    Handles local references like:
    - #/components/schemas/Task
    - #/components/parameters/workspace_slug

    Nested references inside the target are left untouched. Unsupported or
    dangling references are returned unchanged.
    """
    if not isinstance(obj, dict) or "$ref" not in obj:
        return obj

    ref = obj["$ref"]
    if not isinstance(ref, str) or not ref.startswith("#/"):
        logger.warning(f"[ref_resolver] Unsupported $ref: {ref}")
        return obj

    current: Any = document
    for part in ref[2:].split("/"):
        part = part.replace("~1", "/").replace("~0", "~")
        if isinstance(current, dict) and part in current:
            current = current[part]
        else:
            logger.warning(f"[ref_resolver] Could not resolve: {ref}")
            return obj

    return current


def ref_name(ref: str) -> str:
    """Last segment of a reference, e.g. '#/components/schemas/Widget' -> 'Widget'."""
    return ref.rsplit("/", 1)[-1]


def operation_parameters(
    document: Mapping[str, Any], entry: OperationEntry
) -> list[dict[str, Any]]:
    """
    Resolved parameters of an operation (deep copies).

    Path-level parameters come first; an operation-level parameter with the
    same (name, in) replaces the path-level one in place.
    """
    merged: dict[tuple[str, str], dict[str, Any]] = {}

    for source in (entry.path_item.get("parameters") or [], entry.operation.get("parameters") or []):
        for param in source:
            resolved = resolve_ref(document, param)
            if not isinstance(resolved, dict) or "$ref" in resolved:
                logger.warning(
                    f"[schema] Skipping unresolvable parameter on "
                    f"{entry.method.upper()} {entry.path}: {param}"
                )
                continue
            key = (resolved.get("name", ""), resolved.get("in", ""))
            merged[key] = copy.deepcopy(resolved)

    return list(merged.values())
