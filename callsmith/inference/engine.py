"""
Parameter Inference Engine.

Infers concrete request parameters for an action from the conversation:

    1. Fixed system prompt describing the extraction task
    2. User prompt rendered from the (custom or default) template with the
       filtered schema, the latest message and the full history
    3. One non-streaming model call carrying exactly these two messages
    4. The answer parsed into a flat, string-valued parameter set

The model call is the only suspension point. Cancelling the awaiting task
aborts the invocation with asyncio.CancelledError; a configured timeout
surfaces as asyncio.TimeoutError. No retries are performed here.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from callsmith.config.schemas import Tool, ToolHistoryMessage
from callsmith.errors import InferenceError
from callsmith.providers.llm import (
    EmptyCompletionError,
    LLMCallContext,
    LLMConfig,
    LLMProvider,
    LLMResponse,
    Message,
)
from callsmith.schema.filter import filter_tool_schema

from .params import ParameterSet, parse_parameters
from .prompts import SYSTEM_PROMPT, render_user_prompt

logger = logging.getLogger(__name__)


class ParameterInferenceEngine:
    """
    Infers API request parameters with a language model.

    The engine holds no state that spans invocations, so one instance can
    serve concurrent invocations for different tools and actions.

    Example:
        engine = ParameterInferenceEngine(llm, model="gpt-4o-mini")
        params = await engine.infer(
            tool,
            [ToolHistoryMessage(role="user", content="Get project prj_1234")],
            "getProject",
        )
        # {"projectId": "prj_1234"}
    """

    def __init__(
        self,
        llm: LLMProvider,
        *,
        model: str | None = None,
        temperature: float = 0.0,
        max_tokens: int = 1024,
        timeout: float | None = None,
    ):
        """
        Args:
            llm: Language model provider
            model: Model override (provider default if None)
            temperature: Sampling temperature
            max_tokens: Maximum tokens for the answer
            timeout: Seconds to wait for the model (no limit if None)
        """
        self._llm = llm
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._timeout = timeout

    def build_messages(
        self,
        tool: Tool,
        history: Sequence[ToolHistoryMessage],
        action: str,
    ) -> list[Message]:
        """
        Build the system and user messages for an action.

        Raises:
            MissingSchemaError, SchemaParseError, ActionNotFoundError:
                From filtering the tool's schema
            TemplateError: If the prompt template is malformed
            ValueError: If history is empty
        """
        if not history:
            raise ValueError("history must contain at least one message")

        schema = filter_tool_schema(tool, action)
        user_prompt = render_user_prompt(tool, schema, history, action_id=action)

        return [Message.system(SYSTEM_PROMPT), Message.user(user_prompt)]

    async def infer(
        self,
        tool: Tool,
        history: Sequence[ToolHistoryMessage],
        action: str,
        *,
        call_context: LLMCallContext | None = None,
    ) -> ParameterSet:
        """
        Infer parameters for an action from the conversation.

        Args:
            tool: Tool whose API is being called
            history: Ordered conversation; the last message is authoritative
            action: Action identifier (operationId)
            call_context: Attribution for observability

        Returns:
            Mapping of parameter name to string value

        Raises:
            InferenceError: If the model call fails or returns no choices
            ResponseParseError: If the answer is not a JSON object
            asyncio.CancelledError: If the invocation is cancelled
            asyncio.TimeoutError: If the configured timeout elapses
        """
        messages = self.build_messages(tool, history, action)

        if call_context is None:
            call_context = LLMCallContext()

        config = LLMConfig(
            model=self._model,
            temperature=self._temperature,
            max_tokens=self._max_tokens,
            metadata=call_context.as_metadata(),
        )

        logger.info(
            f"[inference] Inferring parameters for {tool.id}/{action} with {self._llm.name} "
            f"(history={len(history)}, session={call_context.session_id or '-'})"
        )

        response = await self._complete(messages, config, action)
        logger.debug(
            f"[inference] {response.provider or self._llm.name} answered for {action} "
            f"(model={response.model or '-'}, finish={response.finish_reason}, usage={response.usage})"
        )

        params = parse_parameters(response.content, action_id=action)
        logger.info(f"[inference] Inferred parameters for {action}: {sorted(params)}")
        return params

    async def _complete(
        self,
        messages: list[Message],
        config: LLMConfig,
        action: str,
    ) -> LLMResponse:
        call = self._llm.complete(messages, config)
        try:
            if self._timeout is not None:
                return await asyncio.wait_for(call, timeout=self._timeout)
            return await call
        except asyncio.TimeoutError as e:
            if self._timeout is None:
                raise InferenceError(
                    f"failed to get response from inference API: {str(e) or 'timed out'}",
                    action_id=action,
                ) from e
            logger.warning(f"[inference] Model call for {action} timed out after {self._timeout}s")
            raise
        except EmptyCompletionError as e:
            raise InferenceError("no response from inference API", action_id=action) from e
        except Exception as e:
            raise InferenceError(
                f"failed to get response from inference API: {e}", action_id=action
            ) from e
