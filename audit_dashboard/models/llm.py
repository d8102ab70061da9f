"""
LLM request models.

Provider configuration is a tagged union keyed by ``family``; the router
builds one of these from a session's LLMConfig and dispatches on the tag.
"""

from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

from audit_dashboard.models.enums import MessageRole


class Message(BaseModel):
    """Unit exchanged with providers and kept in conversation history."""

    role: MessageRole = Field(MessageRole.USER, description="user / assistant / system")
    content: str = Field("", description="Message text")


class GenerateOptions(BaseModel):
    """Generation knobs. Unset values fall back to adapter defaults."""

    max_output_tokens: Optional[int] = Field(None, ge=1)
    temperature: Optional[float] = Field(None, ge=0.0, le=2.0)
    top_p: Optional[float] = Field(None, ge=0.0, le=1.0)
    top_k: Optional[int] = Field(None, ge=1)


class _ProviderConfigBase(BaseModel):
    model: str
    api_key: str
    base_url: Optional[str] = None


class GeminiProviderConfig(_ProviderConfigBase):
    family: Literal["gemini"] = "gemini"


class OpenAIProviderConfig(_ProviderConfigBase):
    family: Literal["openai"] = "openai"


class AnthropicProviderConfig(_ProviderConfigBase):
    family: Literal["anthropic"] = "anthropic"


class LiteLLMProviderConfig(_ProviderConfigBase):
    family: Literal["litellm"] = "litellm"


ProviderConfig = Union[
    GeminiProviderConfig,
    OpenAIProviderConfig,
    AnthropicProviderConfig,
    LiteLLMProviderConfig,
]
