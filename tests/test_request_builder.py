"""
Tests for the request builder.
"""

import httpx
import pytest

from callsmith.config.schemas import Tool
from callsmith.errors import MissingSchemaError, RequestBodyNotSupportedError
from callsmith.request import ACTION_ID_HEADER, TOOL_ID_HEADER, BuiltRequest, build_request
from callsmith.request.builder import substitute_path
from callsmith.schema import ParameterClassification, ResolvedAction, resolve_action


def _action(path="/items/{id}", method="GET", path_params=("id",), query_params=(), **kwargs):
    return ResolvedAction(
        action_id="getItem",
        method=method,
        path=path,
        parameters=ParameterClassification(
            path=frozenset(path_params), query=frozenset(query_params)
        ),
        **kwargs,
    )


def _tool(url="https://api.example.com", headers=None, query=None):
    return Tool(
        id="tool_items",
        config={"api": {"url": url, "headers": headers or {}, "query": query or {}}},
    )


class TestSubstitutePath:
    def test_replaces_every_occurrence(self):
        assert substitute_path("/a/{id}/b/{id}", "id", "7") == "/a/7/b/7"

    def test_percent_encodes_value(self):
        assert substitute_path("/files/{name}", "name", "my file?.txt") == "/files/my%20file%3F.txt"

    def test_keeps_slashes(self):
        assert substitute_path("/files/{name}", "name", "dir/a.txt") == "/files/dir/a.txt"


class TestBuildRequest:
    def test_path_and_query_from_fixture(self, tool, projects_spec):
        action = resolve_action(projects_spec, "getProject")

        request = build_request(tool, action, {"projectId": "prj_1234", "expand": "true"})

        assert request.method == "GET"
        assert request.path == "/projects/prj_1234"
        assert str(request.url) == "https://api.example.com/projects/prj_1234?expand=true&api_version=2"

    def test_undeclared_params_are_dropped(self):
        request = build_request(_tool(), _action(), {"id": "1", "unknown": "x"})

        assert str(request.url) == "https://api.example.com/items/1"

    def test_header_params_are_not_substituted(self, tool, projects_spec):
        action = resolve_action(projects_spec, "listProjects")

        request = build_request(tool, action, {"X-Request-Id": "abc", "limit": "5"})

        assert "X-Request-Id" not in request.headers
        assert request.query_params.get("limit") == "5"
        assert "X-Request-Id" not in request.query_params

    def test_inferred_query_precedes_static_query(self):
        tool = _tool(query={"key": "static"})
        action = _action(path="/search", path_params=(), query_params=("q", "key"))

        request = build_request(tool, action, {"q": "cats", "key": "inferred"})

        assert request.query_params.multi_items() == [
            ("q", "cats"),
            ("key", "inferred"),
            ("key", "static"),
        ]

    def test_name_declared_in_path_and_query_fills_both(self):
        action = _action(path="/items/{id}", path_params=("id",), query_params=("id",))

        request = build_request(_tool(url="https://x.test"), action, {"id": "7"})

        assert request.path == "/items/7"
        assert request.query_params.get("id") == "7"
        assert str(request.url) == "https://x.test/items/7?id=7"

    def test_base_url_path_is_kept(self):
        request = build_request(_tool(url="https://api.example.com/v2"), _action(), {"id": "9"})

        assert str(request.url) == "https://api.example.com/v2/items/9"

    def test_missing_path_param_leaves_placeholder(self):
        request = build_request(_tool(), _action(), {})

        assert "%7Bid%7D" in str(request.url) or "{id}" in str(request.url)

    def test_empty_value_from_null(self):
        action = _action(path="/search", path_params=(), query_params=("q",))

        request = build_request(_tool(), action, {"q": ""})

        assert request.query_params.get("q") == ""

    def test_static_headers_and_trace_headers(self):
        tool = _tool(headers={"Authorization": "Bearer t", "Accept": "application/json"})

        request = build_request(tool, _action(), {"id": "1"})

        assert request.headers["Authorization"] == "Bearer t"
        assert request.headers["Accept"] == "application/json"
        assert request.headers[TOOL_ID_HEADER] == "tool_items"
        assert request.headers[ACTION_ID_HEADER] == "getItem"

    def test_non_ascii_header_values(self):
        tool = Tool(
            id="tool_josé",
            config={"api": {"url": "https://api.example.com", "headers": {"X-User": "José"}}},
        )

        request = build_request(tool, _action(), {"id": "1"})

        assert request.headers["X-User"] == "José"
        assert request.headers[TOOL_ID_HEADER] == "tool_josé"
        assert request.to_httpx().headers["X-User"] == "José"

    def test_method_is_preserved(self):
        action = _action(method="DELETE")

        assert build_request(_tool(), action, {"id": "1"}).method == "DELETE"

    def test_required_body_raises(self):
        action = _action(method="POST", has_request_body=True, request_body_required=True)

        with pytest.raises(RequestBodyNotSupportedError) as exc_info:
            build_request(_tool(), action, {"id": "1"})

        assert exc_info.value.action_id == "getItem"
        assert exc_info.value.method == "POST"

    def test_optional_body_is_skipped(self):
        action = _action(method="PATCH", has_request_body=True)

        request = build_request(_tool(), action, {"id": "1"})

        assert request.method == "PATCH"
        assert request.to_httpx().content == b""

    def test_tool_without_api_raises(self):
        with pytest.raises(MissingSchemaError):
            build_request(Tool(id="bare"), _action(), {"id": "1"})


class TestBuiltRequest:
    def test_to_httpx(self):
        built = build_request(_tool(headers={"X-Key": "k"}), _action(), {"id": "1"})

        request = built.to_httpx()

        assert isinstance(request, httpx.Request)
        assert request.method == "GET"
        assert request.url == built.url
        assert request.headers["X-Key"] == "k"

    def test_str(self):
        built = build_request(_tool(), _action(), {"id": "1"})

        assert str(built) == "GET https://api.example.com/items/1"

    def test_is_immutable(self):
        built = build_request(_tool(), _action(), {"id": "1"})

        assert isinstance(built, BuiltRequest)
        with pytest.raises(AttributeError):
            built.method = "POST"
