"""
Base LLM Provider Interface

Defines the abstract base class for chat-completion providers and the
request/response shapes used for tool calling.
"""

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Optional


class ChatModel(str, Enum):
    """Chat models gitm knows how to talk to."""

    GPT_35_TURBO = "gpt-3.5-turbo"
    GPT_4 = "gpt-4-0613"


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"


@dataclass
class LLMConfig:
    """Configuration for an LLM generation request."""

    model: Optional[str] = None  # Use provider default if None
    max_tokens: Optional[int] = None
    temperature: float = 0.9
    timeout: int = 120  # seconds


@dataclass
class Message:
    role: Role
    content: str

    def to_dict(self) -> dict:
        return {"role": self.role.value, "content": self.content}


@dataclass
class Property:
    """One JSON-schema property of a tool's parameters."""

    type: str
    description: str


@dataclass
class Tool:
    """A function tool the model may call."""

    name: str
    description: str
    properties: dict[str, Property] = field(default_factory=dict)
    required: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": {
                    "type": "object",
                    "properties": {name: asdict(prop) for name, prop in self.properties.items()},
                    "required": list(self.required),
                },
            },
        }


@dataclass
class ToolCall:
    id: str
    name: str
    arguments: str


@dataclass
class LLMResponse:
    """Response from an LLM provider."""

    text: str
    model: str
    tool_calls: list[ToolCall] = field(default_factory=list)
    tokens_used: int = 0
    latency_ms: float = 0.0
    provider: str = ""


class LLMProvider(ABC):
    """
    Abstract base class for LLM providers.

    All providers must implement is_available() and chat().
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name for logging and identification."""
        pass

    @property
    @abstractmethod
    def default_model(self) -> str:
        """Default model to use if none specified."""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if provider is configured.

        Returns:
            True if the provider can be used, False otherwise.
        """
        pass

    @abstractmethod
    def chat(
        self,
        messages: list[Message],
        tools: Optional[list[Tool]] = None,
        config: Optional[LLMConfig] = None,
    ) -> LLMResponse:
        """
        Run one chat completion.

        Args:
            messages: Conversation so far
            tools: Optional function tools offered to the model
            config: Optional configuration overrides

        Returns:
            LLMResponse with text and any tool calls

        Raises:
            LLMError: If the request fails
        """
        pass
