"""Base LLM provider abstraction."""

from abc import ABC, abstractmethod


class LLMError(Exception):
    """Base LLM error."""


class LLMRateLimitError(LLMError):
    """Rate limit hit."""


class LLMAuthError(LLMError):
    """Authentication failure."""


class LLMResponseError(LLMError):
    """Model replied with something that isn't the JSON object we asked for."""


class LLMProvider(ABC):
    """Abstract LLM provider interface."""

    provider_name: str = "base"

    @abstractmethod
    def generate(
        self, messages: list[dict], system: str | None = None, max_tokens: int = 2000
    ) -> str:
        """Generate a response from messages.

        Args:
            messages: List of {"role": ..., "content": ...} dicts
            system: Optional system prompt
            max_tokens: Max response tokens

        Returns:
            Generated text
        """
        ...

    @abstractmethod
    def generate_json(
        self, messages: list[dict], system: str | None = None, max_tokens: int = 2000
    ) -> dict:
        """Generate a structured response, parsed into a dict.

        Raises:
            LLMResponseError: reply is not a JSON object
        """
        ...
