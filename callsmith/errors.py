"""
Error taxonomy for callsmith.

Every failure in resolving, templating, inferring or building aborts the
whole invocation. Errors carry enough context (action, document location,
raw offending text) to diagnose the problem without re-parsing anything.
"""

from __future__ import annotations


class ToolInvocationError(Exception):
    """Base exception for tool invocation errors."""

    def __init__(
        self,
        message: str,
        *,
        action_id: str | None = None,
    ):
        super().__init__(message)
        self.action_id = action_id

    @property
    def message(self) -> str:
        return self.args[0]

    def __str__(self) -> str:
        if self.action_id:
            return f"[{self.action_id}] {self.message}"
        return self.message


class SchemaParseError(ToolInvocationError):
    """Raised when an API description cannot be parsed."""

    def __init__(self, message: str, *, excerpt: str = "", **kwargs):
        super().__init__(message, **kwargs)
        self.excerpt = excerpt


class MissingSchemaError(ToolInvocationError):
    """Raised when a tool has no API schema configured."""

    def __init__(self, tool_id: str, **kwargs):
        super().__init__(f"tool '{tool_id}' does not have an API schema", **kwargs)
        self.tool_id = tool_id


class ActionNotFoundError(ToolInvocationError):
    """Raised when no operation matches the requested action identifier."""

    def __init__(self, action_id: str):
        super().__init__(
            f"failed to find path and method for action '{action_id}'",
            action_id=action_id,
        )


class MissingIdentifierError(ToolInvocationError):
    """Raised when an operation has no operationId during listing."""

    def __init__(self, path: str, method: str):
        super().__init__(f"operationId is missing for {method.upper()} {path}")
        self.path = path
        self.method = method.upper()


class TemplateError(ToolInvocationError):
    """Raised when the request preparation prompt template is malformed."""

    def __init__(
        self,
        message: str,
        *,
        template_name: str,
        lineno: int | None = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.template_name = template_name
        self.lineno = lineno

    def __str__(self) -> str:
        location = self.template_name
        if self.lineno is not None:
            location = f"{location}:{self.lineno}"
        return f"{super().__str__()} (template={location})"


class InferenceError(ToolInvocationError):
    """Raised when the model call fails or returns no choices."""


class ResponseParseError(ToolInvocationError):
    """Raised when the model answer is not a JSON object."""

    def __init__(self, message: str, *, raw: str, **kwargs):
        super().__init__(message, **kwargs)
        self.raw = raw

    def __str__(self) -> str:
        return f"{super().__str__()} ({self.raw})"


class RequestBodyNotSupportedError(ToolInvocationError):
    """Raised when an action requires a request body.

    Request body construction is not implemented; actions that declare a
    required body cannot be prepared.
    """

    def __init__(self, action_id: str, method: str, path: str):
        super().__init__(
            f"{method} {path} requires a request body, which is not supported",
            action_id=action_id,
        )
        self.method = method
        self.path = path


__all__ = [
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
