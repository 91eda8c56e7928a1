"""
LLM Provider Protocol for callsmith.

Defines the interface for the language model used to infer request
parameters, plus the attribution context attached to each call.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Protocol, runtime_checkable


class MessageRole(str, Enum):
    """Role of a message in the conversation."""

    SYSTEM = "system"
    USER = "user"


class LLMCallStep(str, Enum):
    """Named processing step a model call belongs to."""

    PREPARE_API_REQUEST = "prepare_api_request"


class EmptyCompletionError(Exception):
    """Raised by providers when the model returns zero choices."""


@dataclass
class Message:
    """
    A message in the LLM conversation.

    Attributes:
        role: Role of the message sender
        content: Text content of the message
    """

    role: MessageRole
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role.value, "content": self.content}

    @classmethod
    def system(cls, content: str) -> "Message":
        """Create a system message."""
        return cls(role=MessageRole.SYSTEM, content=content)

    @classmethod
    def user(cls, content: str) -> "Message":
        """Create a user message."""
        return cls(role=MessageRole.USER, content=content)


@dataclass(frozen=True)
class LLMCallContext:
    """
    Attribution for a model call.

    Carried for observability only; it never changes what the model is
    asked or how the answer is interpreted.
    """

    owner_id: str = "system"
    session_id: str = ""
    interaction_id: str = ""
    step: LLMCallStep = LLMCallStep.PREPARE_API_REQUEST

    def as_metadata(self) -> Dict[str, str]:
        return {
            "owner_id": self.owner_id,
            "session_id": self.session_id,
            "interaction_id": self.interaction_id,
            "step": self.step.value,
        }


@dataclass
class LLMResponse:
    """
    Response from LLM completion.

    Attributes:
        content: The generated text content
        model: Model used for generation
        usage: Token usage statistics
        finish_reason: Why generation stopped
        provider: Name of the provider
    """

    content: str
    model: str = ""
    usage: Dict[str, int] = field(default_factory=dict)
    finish_reason: str = "stop"
    provider: str = ""


@dataclass
class LLMConfig:
    """
    Configuration for LLM requests.

    Attributes:
        model: Model identifier (e.g., "gpt-4o-mini")
        temperature: Sampling temperature (0.0 to 2.0)
        max_tokens: Maximum tokens to generate
        top_p: Nucleus sampling parameter
        metadata: Attribution key/values (see LLMCallContext)
    """

    model: Optional[str] = None  # Use provider default if None
    temperature: float = 0.7
    max_tokens: int = 1024
    top_p: float = 1.0
    metadata: Dict[str, str] = field(default_factory=dict)


@runtime_checkable
class LLMProvider(Protocol):
    """
    Protocol for LLM providers.

    Implementations must provide:
    - complete(): Generate a single, non-streaming completion
    - name: Provider identifier

    complete() must raise EmptyCompletionError when the backend returns
    no choices, and must let asyncio.CancelledError propagate.
    """

    @property
    def name(self) -> str:
        """Provider name for logging and configuration."""
        ...

    async def complete(
        self,
        messages: List[Message],
        config: Optional[LLMConfig] = None,
    ) -> LLMResponse:
        """
        Generate a completion from messages.

        Args:
            messages: List of conversation messages
            config: Optional configuration overrides

        Returns:
            LLMResponse with generated content
        """
        ...


class BaseLLMProvider(ABC):
    """
    Base class for LLM provider implementations.

    Provides common functionality and enforces interface.
    """

    def __init__(self, default_model: str = ""):
        self.default_model = default_model

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name."""
        pass

    @abstractmethod
    async def complete(
        self,
        messages: List[Message],
        config: Optional[LLMConfig] = None,
    ) -> LLMResponse:
        """Generate a completion from messages."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}', model='{self.default_model}')"
