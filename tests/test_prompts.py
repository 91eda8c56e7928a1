"""
Tests for prompt template rendering.
"""

import pytest

from callsmith.config.schemas import Tool, ToolHistoryMessage
from callsmith.errors import TemplateError
from callsmith.inference import DEFAULT_USER_TEMPLATE, SYSTEM_PROMPT, render_user_prompt
from callsmith.inference.prompts import select_template


def _tool_with_template(template: str) -> Tool:
    return Tool(
        id="tool_custom",
        config={"api": {"url": "https://api.example.com", "schema": "{}", "RequestPrepTemplate": template}},
    )


class TestSelectTemplate:
    def test_default_when_no_custom_template(self, tool):
        assert select_template(tool) == ("default", DEFAULT_USER_TEMPLATE)

    def test_custom_template_wins(self):
        assert select_template(_tool_with_template("Hi {{ message }}")) == (
            "custom",
            "Hi {{ message }}",
        )


class TestRenderUserPrompt:
    def test_default_template_includes_schema_and_history(self, tool, history):
        prompt = render_user_prompt(tool, '{"paths": {}}', history)

        assert 'OpenAPI schema: {"paths": {}}' in prompt
        assert "<user_message>Hi, I need help with my projects</user_message>" in prompt
        assert "<assistant_message>Sure, which project?</assistant_message>" in prompt
        assert "<user_message>Get project prj_1234 details</user_message>" in prompt

    def test_history_order_is_preserved(self, tool, history):
        prompt = render_user_prompt(tool, "{}", history)

        first = prompt.index("Hi, I need help")
        second = prompt.index("Sure, which project?")
        third = prompt.index("Get project prj_1234 details</user_message>")
        assert first < second < third

    def test_custom_template_receives_last_message(self, history):
        tool = _tool_with_template("Schema={{ schema }} Last={{ message }}")

        prompt = render_user_prompt(tool, "S", history)
        assert prompt == "Schema=S Last=Get project prj_1234 details"

    def test_custom_template_can_loop_over_interactions(self, history):
        tool = _tool_with_template(
            "{% for i in interactions %}{{ i.role }}:{{ i.content }};{% endfor %}"
        )

        prompt = render_user_prompt(tool, "", history[:2])
        assert prompt == "user:Hi, I need help with my projects;assistant:Sure, which project?;"

    def test_single_message_history(self):
        tool = _tool_with_template("{{ message }}")
        history = [ToolHistoryMessage(role="user", content="only one")]

        assert render_user_prompt(tool, "", history) == "only one"

    def test_empty_history_raises(self, tool):
        with pytest.raises(ValueError):
            render_user_prompt(tool, "{}", [])

    def test_syntax_error_raises_template_error(self, history):
        tool = _tool_with_template("line one\n{% for x in %}")

        with pytest.raises(TemplateError) as exc_info:
            render_user_prompt(tool, "{}", history, action_id="getProject")

        error = exc_info.value
        assert error.template_name == "custom"
        assert error.lineno == 2
        assert error.action_id == "getProject"
        assert "template=custom:2" in str(error)

    def test_unknown_variable_raises_template_error(self, history):
        tool = _tool_with_template("{{ mesage }}")

        with pytest.raises(TemplateError) as exc_info:
            render_user_prompt(tool, "{}", history)
        assert exc_info.value.template_name == "custom"

    def test_go_template_syntax_must_be_ported(self, history):
        tool = _tool_with_template("Schema: {{ .Schema }}")

        with pytest.raises(TemplateError) as exc_info:
            render_user_prompt(tool, "{}", history)
        assert exc_info.value.template_name == "custom"

    def test_sandbox_blocks_unsafe_attribute_access(self, history):
        tool = _tool_with_template("{{ message.__class__.__mro__ }}")

        with pytest.raises(TemplateError):
            render_user_prompt(tool, "{}", history)


def test_system_prompt_mentions_json():
    assert "json" in SYSTEM_PROMPT
