"""
Callsmith - schema-driven tool invocation for LLM agents.

Given an OpenAPI description and a conversation, callsmith:

- **Resolves** a named action to its HTTP method, path and parameters
- **Infers** concrete parameter values from the conversation with an LLM
- **Builds** a well-formed HTTP request the caller can execute

Quick Start:
    >>> from callsmith import ApiRequestPreparer, Tool, ToolHistoryMessage
    >>> from callsmith.providers import OpenAILLMProvider
    >>>
    >>> preparer = ApiRequestPreparer(OpenAILLMProvider(api_key="..."))
    >>> request = await preparer.prepare(
    ...     tool,
    ...     "getProject",
    ...     [ToolHistoryMessage(role="user", content="Get project prj_1234 details")],
    ... )
    >>> request.url
    URL('https://api.example.com/projects/prj_1234')

Requests are built, never sent; executing them is up to the caller.
"""

__version__ = "0.1.0"
__license__ = "MIT"

from callsmith.config import CallsmithSettings, Tool, ToolApiAction, ToolApiConfig, ToolConfig, ToolHistoryMessage
from callsmith.errors import (
    ActionNotFoundError,
    InferenceError,
    MissingIdentifierError,
    MissingSchemaError,
    RequestBodyNotSupportedError,
    ResponseParseError,
    SchemaParseError,
    TemplateError,
    ToolInvocationError,
)
from callsmith.inference import ParameterInferenceEngine
from callsmith.preparer import ApiRequestPreparer
from callsmith.request import BuiltRequest, build_request
from callsmith.schema import filter_schema, list_actions, resolve_action

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Entry point
    "ApiRequestPreparer",
    # Components
    "ParameterInferenceEngine",
    "BuiltRequest",
    "build_request",
    "filter_schema",
    "list_actions",
    "resolve_action",
    # Models and settings
    "CallsmithSettings",
    "Tool",
    "ToolApiAction",
    "ToolApiConfig",
    "ToolConfig",
    "ToolHistoryMessage",
    # Errors
    "ToolInvocationError",
    "SchemaParseError",
    "MissingSchemaError",
    "ActionNotFoundError",
    "MissingIdentifierError",
    "TemplateError",
    "InferenceError",
    "ResponseParseError",
    "RequestBodyNotSupportedError",
]
