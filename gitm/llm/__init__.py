"""
LLM Provider Abstraction

Chat-completion provider interface, the OpenAI implementation, and the
binary classifiers built on top of tool calling.
"""

from typing import Optional

from gitm.llm.classifier import BinaryClassificationResult, LLMBinaryClassifier
from gitm.llm.mention_classifiers import AuthorMentionClassifier, DateMentionClassifier
from gitm.llm.openai_provider import OpenAIProvider
from gitm.llm.provider import ChatModel, LLMConfig, LLMProvider, LLMResponse, Message, Property, Role, Tool, ToolCall

__all__ = [
    "AuthorMentionClassifier",
    "BinaryClassificationResult",
    "ChatModel",
    "DateMentionClassifier",
    "LLMBinaryClassifier",
    "LLMConfig",
    "LLMProvider",
    "LLMResponse",
    "Message",
    "OpenAIProvider",
    "Property",
    "Role",
    "Tool",
    "ToolCall",
    "get_provider",
]


def get_provider(api_key: Optional[str] = None, config: Optional[dict] = None) -> LLMProvider:
    """
    Build the chat provider from the merged runtime config.

    Args:
        api_key: Explicit API key (falls back to OPENAI_API_KEY)
        config: Runtime config dict with `model` and `openai_base_url`

    Returns:
        An LLMProvider instance
    """
    config = config or {}
    return OpenAIProvider(
        api_key=api_key or config.get("api_key"),
        config={
            "model": config.get("model", ChatModel.GPT_4.value),
            "base_url": config.get("openai_base_url", "https://api.openai.com/v1"),
        },
    )
