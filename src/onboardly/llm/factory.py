from typing import Any

from .base import LLMProvider
from .providers import OpenAIProvider

DEFAULT_GATEWAY_BASE_URL = "https://ai.gateway.lovable.dev/v1"
DEFAULT_GATEWAY_MODEL = "google/gemini-3-flash-preview"


def create_llm_provider(provider: str, **config: Any) -> LLMProvider:
    """Create an LLM provider instance.

    Args:
        provider: Provider type ('openai' or 'gateway')
        **config: Provider-specific configuration
            For OpenAI:
                - api_key: str (required)
                - model: str (default: 'gpt-4o-mini')
                - base_url: str | None
                - organization: str | None
            For gateway (OpenAI-compatible AI gateway):
                - api_key: str (required)
                - model: str (default: 'google/gemini-3-flash-preview')
                - base_url: str (default: 'https://ai.gateway.lovable.dev/v1')

    Returns:
        Initialized LLM provider instance

    Raises:
        ValueError: If provider type is not supported
        TypeError: If required configuration is missing

    Examples:
        >>> provider = create_llm_provider("gateway", api_key="...")
    """
    provider_lower = provider.lower()

    if provider_lower == "openai":
        if "api_key" not in config:
            raise TypeError("OpenAI provider requires 'api_key' in config")
        return OpenAIProvider(**config)

    if provider_lower == "gateway":
        if "api_key" not in config:
            raise TypeError("Gateway provider requires 'api_key' in config")
        config.setdefault("base_url", DEFAULT_GATEWAY_BASE_URL)
        config.setdefault("model", DEFAULT_GATEWAY_MODEL)
        return OpenAIProvider(**config)

    raise ValueError(
        f"Unsupported provider: {provider}. "
        f"Supported providers: 'openai', 'gateway'"
    )
