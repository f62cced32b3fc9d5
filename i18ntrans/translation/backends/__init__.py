"""Translation backend implementations."""

from typing import Optional

from i18ntrans.core.exceptions import ConfigurationError

from .openai_backend import OpenAIBackend
from .anthropic_backend import AnthropicBackend
from .custom_backend import CustomHTTPBackend

PROVIDERS = ("openai", "claude", "custom")

# "anthropic" is accepted as a synonym for "claude"
_PROVIDER_ALIASES = {"anthropic": "claude"}


def create_backend(
    provider: str = "openai",
    model: Optional[str] = None,
    api_key: Optional[str] = None,
    api_url: Optional[str] = None,
    api_format: str = "openai",
    base_url: Optional[str] = None,
    timeout: float = 60.0
):
    """
    Create a configured backend.

    Raises:
        ConfigurationError: unknown provider or missing credentials
    """
    name = _PROVIDER_ALIASES.get(provider.lower(), provider.lower())

    if name == "openai":
        backend = OpenAIBackend(api_key=api_key, model=model, base_url=base_url)
        if not backend.is_available():
            raise ConfigurationError(
                "OpenAI API key is required when using OpenAI provider. Set OPENAI_API_KEY.",
                config_key="openai_api_key"
            )
        return backend

    if name == "claude":
        backend = AnthropicBackend(api_key=api_key, model=model, base_url=base_url)
        if not backend.is_available():
            raise ConfigurationError(
                "Anthropic API key is required when using Claude provider. Set ANTHROPIC_API_KEY.",
                config_key="anthropic_api_key"
            )
        return backend

    if name == "custom":
        try:
            backend = CustomHTTPBackend(
                api_url=api_url,
                api_key=api_key,
                model=model,
                api_format=api_format,
                timeout=timeout
            )
        except ValueError as e:
            raise ConfigurationError(str(e), config_key="custom_api_format", invalid_value=api_format) from e
        if not backend.is_available():
            raise ConfigurationError(
                "Custom provider requires both API key and URL. Set CUSTOM_API_KEY and CUSTOM_API_URL.",
                config_key="custom_api_url"
            )
        return backend

    raise ConfigurationError(
        f"Unsupported provider: {provider}",
        config_key="provider",
        invalid_value=provider,
        valid_values=list(PROVIDERS)
    )


__all__ = [
    'OpenAIBackend',
    'AnthropicBackend',
    'CustomHTTPBackend',
    'PROVIDERS',
    'create_backend',
]
