"""
Schema Index - resolve actions to HTTP operations.

Given an OpenAPI document and an action identifier (operationId), the index
finds the operation and classifies its declared parameters by location:

    resolve_action(document, "getProject")
        -> ResolvedAction(method="GET", path="/projects/{projectId}",
                          parameters=ParameterClassification(path={"projectId"}))

Only path and query parameters are classified. Header and cookie
parameters are intentionally left out, so they are never auto-substituted.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from callsmith.config.schemas import ToolApiAction
from callsmith.errors import ActionNotFoundError, MissingIdentifierError

from .document import (
    OperationEntry,
    find_operation,
    iter_operations,
    load_schema,
    operation_parameters,
    resolve_ref,
)

logger = logging.getLogger(__name__)


class ParameterLocation(str, Enum):
    """Where a classified parameter is transmitted."""

    PATH = "path"
    QUERY = "query"


@dataclass(frozen=True, slots=True)
class ParameterClassification:
    """Parameter names of an operation grouped by location."""

    path: frozenset[str] = field(default_factory=frozenset)
    query: frozenset[str] = field(default_factory=frozenset)

    def locations_of(self, name: str) -> tuple[ParameterLocation, ...]:
        """
        Every location a parameter is declared in.

        Parameters are unique per (name, in), so one name may be both a path
        and a query parameter. Unclassified names yield an empty tuple.
        """
        locations: list[ParameterLocation] = []
        if name in self.path:
            locations.append(ParameterLocation.PATH)
        if name in self.query:
            locations.append(ParameterLocation.QUERY)
        return tuple(locations)


@dataclass(frozen=True, slots=True)
class ResolvedAction:
    """
    An action resolved against a schema document.

    Attributes:
        action_id: The requested operationId
        method: Upper-case HTTP method
        path: Path template (may contain {param} placeholders)
        parameters: Path/query classification of declared parameters
        description: Operation summary, falling back to its description
        has_request_body: Whether the operation declares a requestBody
        request_body_required: Whether that requestBody is required
    """

    action_id: str
    method: str
    path: str
    parameters: ParameterClassification
    description: str = ""
    has_request_body: bool = False
    request_body_required: bool = False


def _describe(operation: Mapping[str, Any]) -> str:
    return operation.get("summary") or operation.get("description") or ""


def classify_parameters(
    document: Mapping[str, Any], entry: OperationEntry
) -> ParameterClassification:
    """Split an operation's declared parameters into path and query sets."""
    path_params: set[str] = set()
    query_params: set[str] = set()

    for param in operation_parameters(document, entry):
        name = param.get("name")
        if not name:
            continue
        location = param.get("in")
        if location == ParameterLocation.PATH.value:
            path_params.add(name)
        elif location == ParameterLocation.QUERY.value:
            query_params.add(name)

    return ParameterClassification(path=frozenset(path_params), query=frozenset(query_params))


def resolve_action(document: str | bytes | Mapping[str, Any], action_id: str) -> ResolvedAction:
    """
    Resolve an action identifier to its method, path and parameters.

    Args:
        document: OpenAPI document (text or parsed mapping)
        action_id: operationId to look for

    Returns:
        ResolvedAction for the first matching operation

    Raises:
        SchemaParseError: If the document is malformed
        ActionNotFoundError: If no operation has this identifier
    """
    spec = load_schema(document)

    entry = find_operation(spec, action_id)
    if entry is None:
        raise ActionNotFoundError(action_id)

    request_body = resolve_ref(spec, entry.operation.get("requestBody"))
    has_body = isinstance(request_body, dict)

    resolved = ResolvedAction(
        action_id=action_id,
        method=entry.method.upper(),
        path=entry.path,
        parameters=classify_parameters(spec, entry),
        description=_describe(entry.operation),
        has_request_body=has_body,
        request_body_required=has_body and bool(request_body.get("required", False)),
    )

    logger.debug(
        f"[schema_index] Resolved {action_id} -> {resolved.method} {resolved.path} "
        f"(path={sorted(resolved.parameters.path)}, query={sorted(resolved.parameters.query)})"
    )
    return resolved


def list_actions(document: str | bytes | Mapping[str, Any]) -> list[ToolApiAction]:
    """
    List every action of a document.

    Every operation must be addressable, so an operation without an
    operationId is an error rather than being skipped. Duplicated
    identifiers keep their first occurrence.

    Raises:
        SchemaParseError: If the document is malformed
        MissingIdentifierError: If an operation has no operationId
    """
    spec = load_schema(document)

    actions: list[ToolApiAction] = []
    seen: set[str] = set()

    for entry in iter_operations(spec):
        operation_id = entry.operation_id
        if not operation_id:
            raise MissingIdentifierError(entry.path, entry.method)

        if operation_id in seen:
            logger.warning(
                f"[schema_index] Duplicate operationId '{operation_id}' at "
                f"{entry.method.upper()} {entry.path} ignored"
            )
            continue
        seen.add(operation_id)

        actions.append(
            ToolApiAction(
                name=operation_id,
                description=_describe(entry.operation),
                path=entry.path,
                method=entry.method.upper(),
            )
        )

    logger.info(f"[schema_index] Listed {len(actions)} actions")
    return actions
