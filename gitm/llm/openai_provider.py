"""
OpenAI Provider

Uses the OpenAI chat completions API (or any compatible endpoint).
Requires an API key, passed in or read from OPENAI_API_KEY.
"""

import os
import time
from typing import Optional

from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from gitm.configs import get_logger, get_timeout
from gitm.exceptions import (
    ConfigurationError,
    HTTPRequestError,
    LLMConnectionError,
    LLMResponseError,
    LLMTimeoutError,
    MissingConfigError,
)
from gitm.llm.provider import ChatModel, LLMConfig, LLMProvider, LLMResponse, Message, Tool, ToolCall
from gitm.utils.http_client import http_json_post

logger = get_logger("llm.openai")

DEFAULT_BASE_URL = "https://api.openai.com/v1"


class OpenAIProvider(LLMProvider):
    """
    LLM provider using the OpenAI chat completions API.

    Configuration:
        model: Model to use (default: gpt-4-0613)
        base_url: API URL (default: https://api.openai.com/v1)

    Environment:
        OPENAI_API_KEY: API key when none is passed in
    """

    def __init__(self, api_key: Optional[str] = None, config: Optional[dict] = None):
        self._config = config or {}
        self._base_url = self._config.get("base_url", DEFAULT_BASE_URL).rstrip("/")
        self._api_key = api_key

        model = self._config.get("model", ChatModel.GPT_4.value)
        try:
            self._model = ChatModel(model)
        except ValueError:
            raise ConfigurationError(
                f"Unknown chat model: {model}",
                {"supported": [m.value for m in ChatModel]},
            )

    @property
    def name(self) -> str:
        return "openai"

    @property
    def default_model(self) -> str:
        return self._model.value

    def is_available(self) -> bool:
        """Check if an API key is configured."""
        if not self._api_key:
            self._api_key = os.environ.get("OPENAI_API_KEY")
        if not self._api_key:
            logger.debug("OPENAI_API_KEY not set")
            return False
        return True

    @retry(
        retry=retry_if_exception_type((LLMConnectionError, LLMTimeoutError)),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        stop=stop_after_attempt(3),
        reraise=True,
    )
    def _post(self, payload: dict, timeout: float) -> dict:
        return http_json_post(
            f"{self._base_url}/chat/completions",
            json=payload,
            headers={"Authorization": f"Bearer {self._api_key}"},
            timeout=timeout,
        )

    def chat(
        self,
        messages: list[Message],
        tools: Optional[list[Tool]] = None,
        config: Optional[LLMConfig] = None,
    ) -> LLMResponse:
        """Run a chat completion, returning text and tool calls."""
        if not self.is_available():
            raise MissingConfigError("OpenAI API key not configured (set OPENAI_API_KEY)")

        config = config or LLMConfig(timeout=get_timeout("http_llm_request", 120))
        model = config.model or self.default_model

        payload: dict = {
            "model": model,
            "messages": [message.to_dict() for message in messages],
            "temperature": config.temperature,
        }
        if config.max_tokens is not None:
            payload["max_tokens"] = config.max_tokens
        if tools:
            payload["tools"] = [tool.to_dict() for tool in tools]

        start_time = time.time()
        try:
            data = self._post(payload, config.timeout)
        except HTTPRequestError as e:
            logger.error(f"OpenAI HTTP error: {e}")
            raise LLMResponseError(f"OpenAI API error: {e}") from e
        latency_ms = (time.time() - start_time) * 1000

        choices = data.get("choices") or []
        if not choices:
            raise LLMResponseError("OpenAI returned no choices")

        message = choices[0].get("message") or {}
        tool_calls = []
        for call in message.get("tool_calls") or []:
            function = call.get("function") or {}
            tool_calls.append(
                ToolCall(
                    id=call.get("id", ""),
                    name=function.get("name", ""),
                    arguments=function.get("arguments") or "",
                )
            )

        usage = data.get("usage") or {}
        logger.debug(
            f"OpenAI {model}: {len(tool_calls)} tool calls, "
            f"{usage.get('total_tokens', 0)} tokens in {latency_ms:.1f}ms"
        )
        return LLMResponse(
            text=message.get("content") or "",
            model=data.get("model", model),
            tool_calls=tool_calls,
            tokens_used=usage.get("total_tokens", 0),
            latency_ms=latency_ms,
            provider=self.name,
        )
