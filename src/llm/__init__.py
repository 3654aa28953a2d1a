"""LLM abstraction layer (OpenAI)."""

from .base import (
    LLMAuthError,
    LLMError,
    LLMProvider,
    LLMRateLimitError,
    LLMResponseError,
)
from .factory import SUPPORTED_PROVIDERS, create_llm_provider

__all__ = [
    "LLMProvider",
    "create_llm_provider",
    "SUPPORTED_PROVIDERS",
    "LLMError",
    "LLMRateLimitError",
    "LLMAuthError",
    "LLMResponseError",
]
