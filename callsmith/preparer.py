"""
API Request Preparer.

Entry point tying the components together for one invocation:

    (tool, action, history)
        -> Schema Index      resolve method, path, parameter classification
        -> Inference Engine  infer a string-valued parameter set
        -> Request Builder   substitute path, merge query/headers
        -> BuiltRequest      returned to the caller, never sent

Resolution runs before the model call, so unknown actions and actions that
need a request body fail without spending a model call. Any failure aborts
the whole invocation; a request is either fully built or not returned.

Usage:
    preparer = ApiRequestPreparer.from_settings(CallsmithSettings())
    request = await preparer.prepare(
        tool,
        "getProject",
        [ToolHistoryMessage(role="user", content="Show me project prj_1234")],
        session_id="ses_1",
        interaction_id="int_7",
    )
    async with httpx.AsyncClient() as client:
        response = await client.send(request.to_httpx())
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Sequence

from callsmith.config.schemas import Tool, ToolHistoryMessage
from callsmith.config.settings import CallsmithSettings
from callsmith.errors import MissingSchemaError, RequestBodyNotSupportedError
from callsmith.inference import ParameterInferenceEngine
from callsmith.observability import PreparationLogger
from callsmith.providers import LLMCallContext, LLMCallStep, LLMProvider, create_llm_provider
from callsmith.request import BuiltRequest, build_request
from callsmith.schema import ResolvedAction, resolve_action

logger = logging.getLogger(__name__)


class ApiRequestPreparer:
    """
    Prepares HTTP requests for tool actions from conversation context.

    Holds no per-invocation state; concurrent prepare() calls are
    independent.
    """

    def __init__(
        self,
        llm: LLMProvider,
        settings: CallsmithSettings | None = None,
    ):
        """
        Args:
            llm: Language model provider used for parameter inference
            settings: Model and timeout settings (defaults if None)
        """
        self._settings = settings or CallsmithSettings()
        self._engine = ParameterInferenceEngine(
            llm,
            model=self._settings.tools_model,
            temperature=self._settings.temperature,
            max_tokens=self._settings.max_tokens,
            timeout=self._settings.inference_timeout,
        )

    @classmethod
    def from_settings(cls, settings: CallsmithSettings) -> "ApiRequestPreparer":
        """Create a preparer with the provider selected by settings."""
        return cls(create_llm_provider(settings), settings)

    @property
    def engine(self) -> ParameterInferenceEngine:
        return self._engine

    def resolve(self, tool: Tool, action: str) -> ResolvedAction:
        """
        Resolve an action against the tool's schema.

        Raises:
            MissingSchemaError: If the tool has no API schema
            SchemaParseError: If the schema is malformed
            ActionNotFoundError: If the action is absent
        """
        if tool.api is None or not tool.api.api_schema:
            raise MissingSchemaError(tool.id, action_id=action)
        return resolve_action(tool.api.api_schema, action)

    async def prepare(
        self,
        tool: Tool,
        action: str,
        history: Sequence[ToolHistoryMessage],
        *,
        session_id: str = "",
        interaction_id: str = "",
    ) -> BuiltRequest:
        """
        Prepare the HTTP request for a tool action.

        Args:
            tool: Tool to call
            action: Action identifier (operationId)
            history: Ordered conversation; the last message is authoritative
            session_id: Session identifier for attribution
            interaction_id: Interaction identifier for attribution

        Returns:
            BuiltRequest ready to be executed by the caller

        Raises:
            ToolInvocationError: Any resolution, templating, inference or
                parsing failure (see callsmith.errors)
            asyncio.CancelledError: If the invocation is cancelled
        """
        log = PreparationLogger(
            tool_id=tool.id,
            action=action,
            session_id=session_id,
            interaction_id=interaction_id,
        )
        log.started(history_length=len(history))
        start = time.perf_counter()

        try:
            resolved = self.resolve(tool, action)
            logger.debug(f"[preparer] {tool.id}/{action} -> {resolved.method} {resolved.path}")

            if resolved.request_body_required:
                raise RequestBodyNotSupportedError(action, resolved.method, resolved.path)

            params = await self._engine.infer(
                tool,
                history,
                action,
                call_context=LLMCallContext(
                    owner_id="system",
                    session_id=session_id,
                    interaction_id=interaction_id,
                    step=LLMCallStep.PREPARE_API_REQUEST,
                ),
            )
            request = build_request(tool, resolved, params)
        except (Exception, asyncio.CancelledError) as e:
            log.failed(e, duration_ms=(time.perf_counter() - start) * 1000)
            raise

        log.completed(
            method=request.method,
            path=request.path,
            param_count=len(params),
            duration_ms=(time.perf_counter() - start) * 1000,
        )
        return request
