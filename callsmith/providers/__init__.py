"""
Callsmith Providers

The language model is an external collaborator. This package holds the
provider protocol, the OpenAI/Anthropic implementations and a factory that
builds the configured provider from settings.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .llm import (
    AnthropicLLMProvider,
    BaseLLMProvider,
    EmptyCompletionError,
    LLMCallContext,
    LLMCallStep,
    LLMConfig,
    LLMProvider,
    LLMResponse,
    Message,
    MessageRole,
    OpenAILLMProvider,
)

if TYPE_CHECKING:
    from callsmith.config.settings import CallsmithSettings

logger = logging.getLogger(__name__)


def create_llm_provider(settings: CallsmithSettings) -> LLMProvider:
    """
    Create the LLM provider selected by settings.

    Args:
        settings: Callsmith settings

    Returns:
        Configured LLM provider

    Raises:
        ValueError: If the provider is unknown or its API key is missing
    """
    provider = settings.llm_provider.lower()

    if provider == "openai":
        if settings.openai_api_key is None:
            raise ValueError("CALLSMITH_OPENAI_API_KEY is required for the openai provider")
        llm: LLMProvider = OpenAILLMProvider(
            api_key=settings.openai_api_key.get_secret_value(),
            model=settings.tools_model,
            base_url=settings.openai_base_url,
        )
    elif provider == "anthropic":
        if settings.anthropic_api_key is None:
            raise ValueError(
                "CALLSMITH_ANTHROPIC_API_KEY is required for the anthropic provider"
            )
        llm = AnthropicLLMProvider(
            api_key=settings.anthropic_api_key.get_secret_value(),
            model=settings.tools_model,
        )
    else:
        raise ValueError(f"Unknown LLM provider: '{settings.llm_provider}'")

    logger.info(f"Created LLM provider {llm.name} (model={settings.tools_model})")
    return llm


__all__ = [
    "create_llm_provider",
    # LLM - Protocol and Base
    "LLMProvider",
    "BaseLLMProvider",
    "LLMConfig",
    "LLMResponse",
    "Message",
    "MessageRole",
    "LLMCallContext",
    "LLMCallStep",
    "EmptyCompletionError",
    # LLM - Implementations
    "OpenAILLMProvider",
    "AnthropicLLMProvider",
]
