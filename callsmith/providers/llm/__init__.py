"""
LLM Providers for callsmith.

- OpenAILLMProvider: OpenAI and OpenAI-compatible endpoints
- AnthropicLLMProvider: Claude models
"""

from .base import (
    BaseLLMProvider,
    EmptyCompletionError,
    LLMCallContext,
    LLMCallStep,
    LLMConfig,
    LLMProvider,
    LLMResponse,
    Message,
    MessageRole,
)
from .openai import AnthropicLLMProvider, OpenAILLMProvider

__all__ = [
    # Protocol and base
    "LLMProvider",
    "BaseLLMProvider",
    "LLMConfig",
    "LLMResponse",
    "Message",
    "MessageRole",
    # Attribution
    "LLMCallContext",
    "LLMCallStep",
    "EmptyCompletionError",
    # Implementations
    "OpenAILLMProvider",
    "AnthropicLLMProvider",
]
