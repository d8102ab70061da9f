"""
Browser session models.

A session holds at most one Snyk credential record and at most one LLM
credential record, each with its own expiry.
"""

from dataclasses import dataclass, field
from typing import NamedTuple, Optional, Union

from pydantic import BaseModel, Field

from audit_dashboard.models.enums import ConfigKind


class UpstreamConfig(BaseModel):
    """Snyk API credentials and scope."""

    api_token: str = Field(..., description="Snyk API token")
    group_id: Optional[str] = Field(None, description="Snyk group ID")
    org_id: Optional[str] = Field(None, description="Snyk organization ID")
    api_version: str = Field("2024-10-15", description="Pinned Snyk REST API version")


class LLMConfig(BaseModel):
    """LLM backend credentials as submitted by the user."""

    provider: str = Field(..., description="Provider name or alias")
    model: str = Field(..., description="Model identifier")
    api_key: str = Field(..., description="Provider API key")
    base_url: Optional[str] = Field(None, description="Custom endpoint (OpenAI-compatible proxies)")


SessionPayload = Union[UpstreamConfig, LLMConfig]


@dataclass(frozen=True)
class ConfigEntry:
    """A stored payload plus its absolute expiry (epoch ms)."""

    payload: SessionPayload
    expires_at: int


@dataclass
class Session:
    """Server-side record for one browser context."""

    id: str
    created_at: int
    last_accessed: int
    # Replaced wholesale on every write, never mutated in place
    configs: dict[ConfigKind, ConfigEntry] = field(default_factory=dict)


class SessionResolution(NamedTuple):
    """Result of resolving an inbound session identifier."""

    session_id: str
    created: bool
