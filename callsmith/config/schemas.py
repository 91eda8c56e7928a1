"""
Tool and Conversation Schemas.

Pydantic models for the data callsmith consumes and produces:

- Tool / ToolConfig / ToolApiConfig: persisted tool configuration, owned by
  the caller and immutable during one invocation
- ToolHistoryMessage: one conversation turn (order is meaningful)
- ToolApiAction: one addressable operation of an API description

Field names are snake_case, but the capitalised names used by stored tool
JSON (URL, Schema, Headers, Query, RequestPrepTemplate, API, Role, Content)
are accepted as well.

Usage:
    tool = Tool.model_validate({
        "id": "tool_123",
        "name": "Projects API",
        "config": {
            "API": {
                "URL": "https://api.example.com",
                "Schema": openapi_text,
                "Headers": {"Authorization": "Bearer ..."},
            }
        },
    })
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class ToolApiConfig(BaseModel):
    """
    HTTP API configuration of a tool.

    Attributes:
        url: Base URL prepended to every operation path
        api_schema: Raw OpenAPI document text (JSON or YAML)
        headers: Static headers sent with every request
        query: Static query parameters added to every request
        request_prep_template: Optional custom prompt template
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    url: str = Field(..., validation_alias=AliasChoices("url", "URL"))
    api_schema: str = Field(
        default="",
        validation_alias=AliasChoices("api_schema", "schema", "Schema"),
        description="Raw OpenAPI document",
    )
    headers: dict[str, str] = Field(
        default_factory=dict, validation_alias=AliasChoices("headers", "Headers")
    )
    query: dict[str, str] = Field(
        default_factory=dict, validation_alias=AliasChoices("query", "Query")
    )
    request_prep_template: str = Field(
        default="",
        validation_alias=AliasChoices("request_prep_template", "RequestPrepTemplate"),
        description="Custom prompt template for parameter inference",
    )

    @field_validator("headers", "query", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any) -> Any:
        # Stored tools may carry null for an unset map
        return {} if value is None else value


class ToolConfig(BaseModel):
    """Tool configuration. Only API tools are supported."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    api: ToolApiConfig | None = Field(
        default=None, validation_alias=AliasChoices("api", "API")
    )


class Tool(BaseModel):
    """
    A configured tool the caller wants to invoke.

    Attributes:
        id: Tool identifier (sent as a trace header)
        name: Human-readable name
        description: What the tool does
        config: Tool configuration
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., validation_alias=AliasChoices("id", "ID"))
    name: str = Field(default="", validation_alias=AliasChoices("name", "Name"))
    description: str = Field(
        default="", validation_alias=AliasChoices("description", "Description")
    )
    config: ToolConfig = Field(
        default_factory=ToolConfig,
        validation_alias=AliasChoices("config", "Config"),
    )

    @property
    def api(self) -> ToolApiConfig | None:
        """Shortcut for config.api."""
        return self.config.api


class ToolHistoryMessage(BaseModel):
    """A single conversation turn."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    role: str = Field(..., validation_alias=AliasChoices("role", "Role"))
    content: str = Field(..., validation_alias=AliasChoices("content", "Content"))


class ToolApiAction(BaseModel):
    """
    An addressable operation of an API description.

    Attributes:
        name: The operationId
        description: Operation summary, falling back to its description
        path: Path template (may contain {param} placeholders)
        method: Upper-case HTTP method
    """

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    path: str
    method: str
