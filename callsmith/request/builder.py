"""
Request Builder - turn an inferred parameter set into an HTTP request.

For every inferred (key, value):
- path parameters replace every literal "{key}" in the path template
- query parameters are appended to the query string
- anything else is dropped (it is neither a path nor a query match)

The tool's static query parameters are appended after the inferred ones,
its static headers are copied verbatim, and two trace headers identify the
tool and the action.

The built request is not sent. Request bodies are not constructed: an
action with a required body raises RequestBodyNotSupportedError instead of
guessing one.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from urllib.parse import quote

import httpx

from callsmith.config.schemas import Tool
from callsmith.errors import MissingSchemaError, RequestBodyNotSupportedError
from callsmith.schema.index import ParameterLocation, ResolvedAction

logger = logging.getLogger(__name__)

TOOL_ID_HEADER = "X-Callsmith-Tool-Id"
ACTION_ID_HEADER = "X-Callsmith-Action-Id"

_PLACEHOLDER = re.compile(r"\{([^{}]+)\}")


@dataclass(frozen=True, slots=True)
class BuiltRequest:
    """
    A fully built, unsent HTTP request.

    Attributes:
        method: Upper-case HTTP method
        url: Absolute URL (path substituted, query merged)
        headers: Static headers plus the trace headers
        tool_id: Tool the request belongs to
        action_id: Action the request was built for
    """

    method: str
    url: httpx.URL
    headers: httpx.Headers
    tool_id: str
    action_id: str

    @property
    def path(self) -> str:
        return self.url.path

    @property
    def query_params(self) -> httpx.QueryParams:
        return self.url.params

    def to_httpx(self) -> httpx.Request:
        """Create an httpx.Request ready to be sent by a client."""
        return httpx.Request(self.method, self.url, headers=self.headers)

    def __str__(self) -> str:
        return f"{self.method} {self.url}"


def substitute_path(path: str, key: str, value: str) -> str:
    """Replace every "{key}" placeholder with the percent-encoded value."""
    return path.replace(f"{{{key}}}", quote(value, safe="/"))


def build_request(
    tool: Tool,
    action: ResolvedAction,
    params: Mapping[str, str],
) -> BuiltRequest:
    """
    Build the HTTP request for a resolved action.

    Args:
        tool: Tool whose API configuration supplies URL, headers and query
        action: Resolved action (method, path template, classification)
        params: Inferred parameter set

    Returns:
        BuiltRequest

    Raises:
        MissingSchemaError: If the tool has no API configuration
        RequestBodyNotSupportedError: If the action requires a request body
    """
    api = tool.api
    if api is None:
        raise MissingSchemaError(tool.id, action_id=action.action_id)

    if action.request_body_required:
        raise RequestBodyNotSupportedError(action.action_id, action.method, action.path)
    if action.has_request_body:
        logger.info(
            f"[request_builder] {action.action_id}: optional request body not constructed"
        )

    path = action.path
    inferred_query: list[tuple[str, str]] = []

    for key, value in params.items():
        # A name declared both in the path and in the query goes to both
        locations = action.parameters.locations_of(key)
        if ParameterLocation.PATH in locations:
            path = substitute_path(path, key, value)
        if ParameterLocation.QUERY in locations:
            inferred_query.append((key, value))
        if not locations:
            logger.debug(f"[request_builder] {action.action_id}: dropping undeclared param '{key}'")

    leftover = [name for name in _PLACEHOLDER.findall(path) if name in action.parameters.path]
    if leftover:
        logger.warning(f"[request_builder] {action.action_id}: missing path params {leftover}")

    url = httpx.URL(api.url + path)

    # Query already on the base URL first, then inferred, then static
    query = [*url.params.multi_items(), *inferred_query, *api.query.items()]
    if query:
        url = url.copy_with(params=query)

    # Static headers may carry non-ASCII values
    headers = httpx.Headers(api.headers, encoding="utf-8")
    headers[TOOL_ID_HEADER] = tool.id
    headers[ACTION_ID_HEADER] = action.action_id

    request = BuiltRequest(
        method=action.method,
        url=url,
        headers=headers,
        tool_id=tool.id,
        action_id=action.action_id,
    )
    logger.info(
        f"[request_builder] Built {request.method} {request.path} "
        f"params={list(request.query_params.keys()) or None}"
    )
    return request
