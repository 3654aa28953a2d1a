"""LLM provider factory."""

import os

from .base import LLMError, LLMProvider

_PROVIDER_ENV_KEYS = {
    "openai": "OPENAI_API_KEY",
}

SUPPORTED_PROVIDERS = ("openai", "auto")


def create_llm_provider(
    provider: str | None = None,
    api_key: str | None = None,
    model: str | None = None,
    client=None,
) -> LLMProvider:
    """Create an LLM provider instance.

    Args:
        provider: "openai", "auto", or None (auto)
        api_key: Explicit API key (overrides env var)
        model: Model name (None = provider default)
        client: Pre-built SDK client for testing/DI

    Returns:
        LLMProvider instance
    """
    resolved = provider or "auto"
    if resolved == "auto":
        resolved = "openai"

    if resolved != "openai":
        raise LLMError(f"Unknown provider: {resolved}. Use: openai")

    if not api_key and not client:
        api_key = os.getenv(_PROVIDER_ENV_KEYS[resolved])
        if not api_key:
            raise LLMError("No LLM API key found. Set OPENAI_API_KEY or save a key in settings")

    from .providers.openai import OpenAIProvider

    return OpenAIProvider(api_key=api_key, model=model, client=client)
