"""OpenAI LLM provider."""

import json

import structlog
from openai import APIError, AuthenticationError, OpenAI, RateLimitError

from ..base import LLMAuthError, LLMError, LLMProvider, LLMRateLimitError, LLMResponseError

logger = structlog.get_logger()

DEFAULT_MODEL = "gpt-4o"


def _handle_openai_error(e: Exception):
    if isinstance(e, AuthenticationError):
        raise LLMAuthError(f"OpenAI auth failed: {e}") from e
    if isinstance(e, RateLimitError):
        raise LLMRateLimitError(f"OpenAI rate limit: {e}") from e
    if isinstance(e, APIError):
        raise LLMError(f"OpenAI API error: {e}") from e
    raise LLMError(f"OpenAI error: {e}") from e


class OpenAIProvider(LLMProvider):
    """OpenAI GPT provider."""

    provider_name = "openai"

    def __init__(self, api_key: str | None = None, model: str | None = None, client=None):
        self.model = model or DEFAULT_MODEL
        self.client = client or OpenAI(api_key=api_key)

    def _messages(self, messages: list[dict], system: str | None) -> list[dict]:
        full_messages = []
        if system:
            full_messages.append({"role": "system", "content": system})
        full_messages.extend(messages)
        return full_messages

    def generate(
        self, messages: list[dict], system: str | None = None, max_tokens: int = 2000
    ) -> str:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                max_tokens=max_tokens,
                messages=self._messages(messages, system),
            )
        except Exception as e:
            _handle_openai_error(e)
        return response.choices[0].message.content or ""

    def generate_json(
        self, messages: list[dict], system: str | None = None, max_tokens: int = 2000
    ) -> dict:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                max_tokens=max_tokens,
                messages=self._messages(messages, system),
                response_format={"type": "json_object"},
            )
        except Exception as e:
            _handle_openai_error(e)

        content = response.choices[0].message.content or ""
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            logger.warning("llm.invalid_json", provider=self.provider_name, preview=content[:120])
            raise LLMResponseError(f"OpenAI returned invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise LLMResponseError(f"Expected a JSON object, got {type(data).__name__}")
        return data
