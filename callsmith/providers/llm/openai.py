"""
OpenAI and Anthropic LLM Providers for callsmith.

Both providers perform a single non-streaming chat completion per call.
"""

from __future__ import annotations

import logging
from typing import Any

from anthropic import AsyncAnthropic
from openai import AsyncOpenAI

from .base import BaseLLMProvider, EmptyCompletionError, LLMConfig, LLMResponse, Message

logger = logging.getLogger(__name__)


class OpenAILLMProvider(BaseLLMProvider):
    """
    OpenAI-based LLM provider.

    Uses the Chat Completions API. Any OpenAI-compatible endpoint can be
    targeted through base_url (vLLM, Ollama, Together, ...).
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        *,
        base_url: str | None = None,
        organization: str | None = None,
    ):
        """
        Initialize OpenAI LLM provider.

        Args:
            api_key: OpenAI API key
            model: Default model to use
            base_url: Optional OpenAI-compatible endpoint
            organization: Optional OpenAI organization ID
        """
        super().__init__(default_model=model)
        self._api_key = api_key
        self._base_url = base_url
        self._organization = organization
        self._client: AsyncOpenAI | None = None  # Lazy initialization

    @property
    def name(self) -> str:
        return "openai"

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self._api_key,
                base_url=self._base_url,
                organization=self._organization,
            )
        return self._client

    def _convert_messages(self, messages: list[Message]) -> list[dict[str, Any]]:
        """Convert Message objects to OpenAI format."""
        return [msg.to_dict() for msg in messages]

    async def complete(
        self,
        messages: list[Message],
        config: LLMConfig | None = None,
    ) -> LLMResponse:
        """
        Generate a completion using OpenAI.

        Args:
            messages: List of conversation messages
            config: Optional configuration overrides

        Returns:
            LLMResponse with generated content

        Raises:
            EmptyCompletionError: If the API returned no choices
        """
        if config is None:
            config = LLMConfig()

        model = config.model or self.default_model
        if config.metadata:
            logger.debug(f"[openai] Completion for {config.metadata} with {model}")

        try:
            response = await self._get_client().chat.completions.create(
                model=model,
                messages=self._convert_messages(messages),
                temperature=config.temperature,
                max_tokens=config.max_tokens,
                top_p=config.top_p,
                stream=False,
            )
        except Exception as e:
            logger.error(f"OpenAI completion error: {e}", exc_info=True)
            raise

        if not response.choices:
            raise EmptyCompletionError("no choices returned by OpenAI")

        choice = response.choices[0]
        content = choice.message.content or ""

        usage = {}
        if response.usage:
            usage = {
                "input_tokens": response.usage.prompt_tokens,
                "output_tokens": response.usage.completion_tokens,
                "total_tokens": response.usage.total_tokens,
            }

        return LLMResponse(
            content=content,
            model=response.model,
            usage=usage,
            finish_reason=choice.finish_reason or "stop",
            provider=self.name,
        )


class AnthropicLLMProvider(BaseLLMProvider):
    """
    Anthropic-based LLM provider.

    The system message is sent through the dedicated system parameter;
    the remaining messages form the conversation.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "claude-3-5-haiku-latest",
    ):
        """
        Initialize Anthropic LLM provider.

        Args:
            api_key: Anthropic API key
            model: Default model to use
        """
        super().__init__(default_model=model)
        self._api_key = api_key
        self._client: AsyncAnthropic | None = None

    @property
    def name(self) -> str:
        return "anthropic"

    def _get_client(self) -> AsyncAnthropic:
        if self._client is None:
            self._client = AsyncAnthropic(api_key=self._api_key)
        return self._client

    async def complete(
        self,
        messages: list[Message],
        config: LLMConfig | None = None,
    ) -> LLMResponse:
        """
        Generate a completion using Anthropic.

        Args:
            messages: List of conversation messages
            config: Optional configuration overrides

        Returns:
            LLMResponse with generated content

        Raises:
            EmptyCompletionError: If the API returned no content blocks
        """
        if config is None:
            config = LLMConfig()

        # Separate system message from conversation
        system_prompt = ""
        conversation = []
        for msg in messages:
            if msg.role.value == "system":
                system_prompt = msg.content
            else:
                conversation.append({"role": msg.role.value, "content": msg.content})

        model = config.model or self.default_model
        if config.metadata:
            logger.debug(f"[anthropic] Completion for {config.metadata} with {model}")

        try:
            response = await self._get_client().messages.create(
                model=model,
                max_tokens=config.max_tokens,
                temperature=config.temperature,
                system=system_prompt,
                messages=conversation,
            )
        except Exception as e:
            logger.error(f"Anthropic completion error: {e}", exc_info=True)
            raise

        if not response.content:
            raise EmptyCompletionError("no content returned by Anthropic")

        usage = {
            "input_tokens": response.usage.input_tokens,
            "output_tokens": response.usage.output_tokens,
            "total_tokens": response.usage.input_tokens + response.usage.output_tokens,
        }

        return LLMResponse(
            content=response.content[0].text,
            model=response.model,
            usage=usage,
            finish_reason=response.stop_reason or "end_turn",
            provider=self.name,
        )
