"""
Request/response schemas for the configuration endpoints.

Secrets are accepted on input but never echoed back.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

MASKED_TOKEN = "***"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiConfigRequest(_CamelModel):
    """Snyk configuration submitted by the browser."""

    snyk_api_token: Optional[str] = Field(None, description="Snyk API token")
    group_id: Optional[str] = Field(None, description="Snyk group ID")
    org_id: Optional[str] = Field(None, description="Snyk organization ID")
    api_version: Optional[str] = Field(None, description="Snyk REST API version")


class ApiConfigResponse(_CamelModel):
    """Stored Snyk configuration with the token masked."""

    group_id: Optional[str] = None
    org_id: Optional[str] = None
    api_version: str
    snyk_api_token: Literal["***"] = MASKED_TOKEN
    expires_in_minutes: Optional[int] = None


class ExtendConfigRequest(_CamelModel):
    minutes: int = Field(30, ge=1, le=60, description="New lifetime in minutes")


class ExtendConfigResponse(_CamelModel):
    message: str
    expires_in_minutes: Optional[int] = None


class LLMConfigRequest(_CamelModel):
    """LLM configuration submitted by the browser."""

    provider: Optional[str] = Field(None, description="gemini / openai / anthropic / litellm / aliases")
    model: Optional[str] = Field(None, description="Model identifier")
    api_key: Optional[str] = Field(None, description="Provider API key")
    base_url: Optional[str] = Field(None, description="Custom endpoint")


class LLMConfigResponse(_CamelModel):
    """Stored LLM configuration without the key."""

    provider: str
    model: str
    configured: bool = True


class MessageResponse(_CamelModel):
    message: str


class SummaryResponse(_CamelModel):
    summary: str


class InsightsResponse(_CamelModel):
    insights: list[str] = Field(default_factory=list)
