"""
Prompts for request parameter inference.

The system prompt is fixed. The user prompt is rendered from a Jinja2
template: the tool's custom template when it has one, otherwise
DEFAULT_USER_TEMPLATE. Templates see three variables:

    schema        filtered OpenAPI document (JSON text)
    message       content of the most recent conversation message
    interactions  the full ordered history (each has .role and .content)

Custom templates are rendered in a sandbox with strict undefined handling,
so a typo in a variable name fails loudly instead of rendering blank.

Templates stored in Go text/template syntax are not understood and must
be ported before use: {{ .Schema }} becomes {{ schema }}, {{ .Message }}
becomes {{ message }} and {{ range .Interactions }} becomes
{% for interaction in interactions %} ... {% endfor %}. An unported
template fails with TemplateError.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from jinja2 import StrictUndefined
from jinja2 import TemplateError as JinjaTemplateError
from jinja2 import TemplateSyntaxError
from jinja2.sandbox import SandboxedEnvironment

from callsmith.config.schemas import Tool, ToolHistoryMessage
from callsmith.errors import TemplateError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an intelligent machine learning model that can produce REST API's "
    "params / query params in json format, given the json schema, user input, data "
    "from previous api calls, and current application state."
)

DEFAULT_USER_TEMPLATE = """
Your output must be a valid json, without any commentary or additional formatting.

Examples:

**User Input:** Get project prj_1234 details
**OpenAPI schema path:** /projects/{projectId}
**Verdict:** response should be {"projectId": "prj_1234"}

**User Input:** List all users with status "active"
**OpenAPI schema path:** /users/findByStatus
**OpenAPI schema parameters:** [
    {
        "name": "status",
        "in": "query",
        "description": "Status values that need to be considered for filter",
        "required": true,
        "type": "array",
        "items": {
            "type": "string",
            "enum": ["active", "pending", "sold"],
            "default": "available"
        }
    }
]
**Verdict:** response should be:

```json
{
  "status": "active"
}
```

**Response Format:** Always respond with JSON without any commentary, wrapped in markdown json tags, for example:
```json
{
  "parameterName": "parameterValue",
  "parameterName2": "parameterValue2"
}
```

===END EXAMPLES===
OpenAPI schema: {{ schema }}

Conversation so far:
{% for interaction in interactions %}
<{{ interaction.role }}_message>{{ interaction.content }}</{{ interaction.role }}_message>
{% endfor %}

Based on the information provided, construct a valid JSON object. In cases where user input does not contain information for a query, DO NOT add that specific query parameter to the output. If a user doesn't provide a required parameter, use sensible defaults for required params, and leave optional params.
"""

_environment = SandboxedEnvironment(
    undefined=StrictUndefined,
    autoescape=False,
    keep_trailing_newline=True,
)


def select_template(tool: Tool) -> tuple[str, str]:
    """Return (template_name, source) for a tool."""
    if tool.api is not None and tool.api.request_prep_template:
        return "custom", tool.api.request_prep_template
    return "default", DEFAULT_USER_TEMPLATE


def render_user_prompt(
    tool: Tool,
    schema: str,
    history: Sequence[ToolHistoryMessage],
    *,
    action_id: str | None = None,
) -> str:
    """
    Render the user prompt for parameter inference.

    Only the last message is exposed as `message`; the whole history is
    available as `interactions` for templates that want it.

    Args:
        tool: Tool whose template to use
        schema: Filtered schema document as text
        history: Conversation so far (must not be empty)
        action_id: Action being prepared, for error context

    Returns:
        Rendered prompt text

    Raises:
        ValueError: If history is empty
        TemplateError: If the template is malformed or fails to render
    """
    if not history:
        raise ValueError("history must contain at least one message")

    template_name, source = select_template(tool)

    try:
        template = _environment.from_string(source)
    except TemplateSyntaxError as e:
        raise TemplateError(
            f"failed to parse prompt template: {e.message}",
            template_name=template_name,
            lineno=e.lineno,
            action_id=action_id,
        ) from e

    try:
        rendered = template.render(
            schema=schema,
            message=history[-1].content,
            interactions=list(history),
        )
    except JinjaTemplateError as e:
        raise TemplateError(
            f"failed to render prompt template: {e}",
            template_name=template_name,
            action_id=action_id,
        ) from e

    logger.debug(f"[inference] Rendered {template_name} template ({len(rendered)} chars)")
    return rendered
