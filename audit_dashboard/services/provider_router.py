"""
Provider Router.

Turns a session's LLM configuration into a ready-to-call provider.
Resolution happens in two steps: the free-form provider name is mapped to a
``ProviderConfig`` variant, then a single dispatch builds the adapter.
"""

from typing import Optional

import httpx

from audit_dashboard.core.config import get_settings
from audit_dashboard.core.logger import setup_logger
from audit_dashboard.infrastructure.llm.noop_provider import NoOpProvider
from audit_dashboard.interfaces.llm_provider import ILLMProvider
from audit_dashboard.models.enums import ProviderFamily
from audit_dashboard.models.llm import (
    AnthropicProviderConfig,
    GeminiProviderConfig,
    LiteLLMProviderConfig,
    OpenAIProviderConfig,
    ProviderConfig,
)
from audit_dashboard.models.session import LLMConfig

logger = setup_logger(__name__)

# Lower-cased, stripped provider names accepted from clients
PROVIDER_ALIASES: dict[str, ProviderFamily] = {
    "gemini": ProviderFamily.GEMINI,
    "google": ProviderFamily.GEMINI,
    "google gemini": ProviderFamily.GEMINI,
    "openai": ProviderFamily.OPENAI,
    "custom": ProviderFamily.OPENAI,
    "anthropic": ProviderFamily.ANTHROPIC,
    "claude": ProviderFamily.ANTHROPIC,
    "litellm": ProviderFamily.LITELLM,
}

_CONFIG_TYPES = {
    ProviderFamily.GEMINI: GeminiProviderConfig,
    ProviderFamily.OPENAI: OpenAIProviderConfig,
    ProviderFamily.ANTHROPIC: AnthropicProviderConfig,
    ProviderFamily.LITELLM: LiteLLMProviderConfig,
}


def normalize_provider_name(name: Optional[str]) -> str:
    return (name or "").strip().lower()


def is_supported_provider(name: Optional[str]) -> bool:
    """Check whether a provider name maps to an adapter."""
    return normalize_provider_name(name) in PROVIDER_ALIASES


def supported_provider_names() -> list[str]:
    return sorted(PROVIDER_ALIASES)


def resolve_provider_config(config: Optional[LLMConfig]) -> Optional[ProviderConfig]:
    """
    Map a stored LLM configuration to a provider config variant.

    Returns None when the configuration is absent, has a blank
    provider/model/api_key, or names an unknown provider.
    """
    if config is None:
        return None

    model = (config.model or "").strip()
    api_key = (config.api_key or "").strip()
    name = normalize_provider_name(config.provider)
    if not name or not model or not api_key:
        return None

    family = PROVIDER_ALIASES.get(name)
    if family is None:
        logger.warning(f"Unknown LLM provider '{name}', falling back to no-op provider")
        return None

    base_url = (config.base_url or "").strip() or None
    return _CONFIG_TYPES[family](model=model, api_key=api_key, base_url=base_url)


def build_provider(
    provider_config: ProviderConfig,
    *,
    timeout: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ILLMProvider:
    """Build the adapter for a resolved provider config."""
    if timeout is None:
        timeout = get_settings().LLM_REQUEST_TIMEOUT_SECONDS

    if isinstance(provider_config, GeminiProviderConfig):
        from audit_dashboard.infrastructure.llm.gemini_provider import GeminiProvider

        return GeminiProvider(provider_config.model, provider_config.api_key, timeout=timeout)

    elif isinstance(provider_config, OpenAIProviderConfig):
        from audit_dashboard.infrastructure.llm.openai_provider import OpenAIProvider

        return OpenAIProvider(
            provider_config.model,
            provider_config.api_key,
            base_url=provider_config.base_url,
            timeout=timeout,
            transport=transport,
        )

    elif isinstance(provider_config, AnthropicProviderConfig):
        from audit_dashboard.infrastructure.llm.anthropic_provider import AnthropicProvider

        return AnthropicProvider(
            provider_config.model,
            provider_config.api_key,
            base_url=provider_config.base_url,
            timeout=timeout,
            transport=transport,
        )

    elif isinstance(provider_config, LiteLLMProviderConfig):
        from audit_dashboard.infrastructure.llm.litellm_provider import LiteLLMProvider

        return LiteLLMProvider(
            provider_config.model,
            api_key=provider_config.api_key,
            base_url=provider_config.base_url,
            timeout=timeout,
        )

    else:
        raise ValueError(f"Unsupported provider config: {type(provider_config).__name__}")


def get_provider(
    config: Optional[LLMConfig],
    *,
    timeout: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ILLMProvider:
    """
    Get a provider for a session's LLM configuration.

    Never raises for missing or unknown configuration; those cases yield a
    NoOpProvider that answers with a "not configured" message.
    """
    provider_config = resolve_provider_config(config)
    if provider_config is None:
        return NoOpProvider()
    return build_provider(provider_config, timeout=timeout, transport=transport)
