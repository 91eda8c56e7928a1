"""
Pytest configuration and fixtures for callsmith tests.
"""

import json
import sys
from pathlib import Path

import pytest

# Add the repository root to path for imports
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from callsmith.config.schemas import Tool, ToolHistoryMessage  # noqa: E402
from callsmith.providers.llm import LLMConfig, LLMResponse, Message  # noqa: E402


class MockLLMProvider:
    """Mock LLM provider that returns a canned answer and records calls."""

    def __init__(self, content: str = "{}"):
        self.content = content
        self.calls: list[tuple[list[Message], LLMConfig | None]] = []

    @property
    def name(self) -> str:
        return "mock_llm"

    async def complete(
        self,
        messages: list[Message],
        config: LLMConfig | None = None,
    ) -> LLMResponse:
        self.calls.append((messages, config))
        return LLMResponse(content=self.content, model="mock-model", provider=self.name)


@pytest.fixture
def projects_spec():
    """OpenAPI spec for a small projects API."""
    return {
        "openapi": "3.0.0",
        "info": {"title": "Projects API", "version": "1.0.0"},
        "servers": [{"url": "https://api.example.com"}],
        "paths": {
            "/projects": {
                "get": {
                    "operationId": "listProjects",
                    "summary": "List projects",
                    "parameters": [
                        {
                            "name": "status",
                            "in": "query",
                            "schema": {"type": "string", "enum": ["active", "archived"]},
                        },
                        {
                            "name": "limit",
                            "in": "query",
                            "schema": {"type": "integer"},
                        },
                        {
                            "name": "X-Request-Id",
                            "in": "header",
                            "schema": {"type": "string"},
                        },
                    ],
                    "responses": {
                        "200": {
                            "description": "Projects",
                            "content": {
                                "application/json": {
                                    "schema": {"$ref": "#/components/schemas/ProjectList"}
                                }
                            },
                        }
                    },
                },
                "post": {
                    "operationId": "createProject",
                    "summary": "Create a project",
                    "requestBody": {
                        "required": True,
                        "content": {
                            "application/json": {
                                "schema": {"$ref": "#/components/schemas/ProjectCreate"}
                            }
                        },
                    },
                    "responses": {"201": {"description": "Created"}},
                },
            },
            "/projects/{projectId}": {
                "get": {
                    "operationId": "getProject",
                    "summary": "Get a project",
                    "description": "Returns a single project by its identifier.",
                    "parameters": [
                        {
                            "name": "projectId",
                            "in": "path",
                            "required": True,
                            "schema": {"type": "string"},
                        },
                        {
                            "name": "expand",
                            "in": "query",
                            "schema": {"type": "boolean"},
                        },
                    ],
                    "responses": {
                        "200": {
                            "description": "Project",
                            "content": {
                                "application/json": {
                                    "schema": {"$ref": "#/components/schemas/Project"}
                                }
                            },
                        },
                        "404": {"description": "Not found"},
                    },
                },
                "patch": {
                    "operationId": "renameProject",
                    "description": "Rename a project",
                    "parameters": [
                        {"$ref": "#/components/parameters/ProjectId"},
                    ],
                    "requestBody": {
                        "content": {
                            "application/json": {
                                "schema": {"type": "object", "properties": {"name": {"type": "string"}}}
                            }
                        },
                    },
                    "responses": {"200": {"description": "Renamed"}},
                },
            },
        },
        "components": {
            "parameters": {
                "ProjectId": {
                    "name": "projectId",
                    "in": "path",
                    "required": True,
                    "schema": {"type": "string"},
                }
            },
            "schemas": {
                "Project": {
                    "type": "object",
                    "properties": {
                        "id": {"type": "string"},
                        "name": {"type": "string"},
                        "owner": {"$ref": "#/components/schemas/User"},
                    },
                },
                "ProjectList": {
                    "type": "array",
                    "items": {"$ref": "#/components/schemas/Project"},
                },
                "ProjectCreate": {
                    "type": "object",
                    "properties": {"name": {"type": "string"}},
                },
                "User": {
                    "type": "object",
                    "properties": {"email": {"type": "string"}},
                },
            },
        },
    }


@pytest.fixture
def projects_spec_text(projects_spec):
    """The projects spec as raw JSON text."""
    return json.dumps(projects_spec)


@pytest.fixture
def tool(projects_spec_text):
    """Tool configured with the projects API."""
    return Tool(
        id="tool_projects",
        name="Projects",
        config={
            "api": {
                "url": "https://api.example.com",
                "schema": projects_spec_text,
                "headers": {"Authorization": "Bearer secret"},
                "query": {"api_version": "2"},
            }
        },
    )


@pytest.fixture
def history():
    """A short conversation ending with the request to act on."""
    return [
        ToolHistoryMessage(role="user", content="Hi, I need help with my projects"),
        ToolHistoryMessage(role="assistant", content="Sure, which project?"),
        ToolHistoryMessage(role="user", content="Get project prj_1234 details"),
    ]


@pytest.fixture
def mock_llm():
    """Mock LLM answering with a fenced JSON object."""
    return MockLLMProvider('```json\n{"projectId": "prj_1234"}\n```')
