"""LLM provider adapters."""

from audit_dashboard.infrastructure.llm.anthropic_provider import AnthropicProvider
from audit_dashboard.infrastructure.llm.gemini_provider import GeminiProvider
from audit_dashboard.infrastructure.llm.litellm_provider import LiteLLMProvider
from audit_dashboard.infrastructure.llm.noop_provider import UNCONFIGURED_MESSAGE, NoOpProvider
from audit_dashboard.infrastructure.llm.openai_provider import OpenAIProvider

__all__ = [
    "AnthropicProvider",
    "GeminiProvider",
    "LiteLLMProvider",
    "NoOpProvider",
    "OpenAIProvider",
    "UNCONFIGURED_MESSAGE",
]
