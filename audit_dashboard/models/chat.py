"""
Chat model definitions.

Models for the audit-log assistant chat.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from audit_dashboard.core.config import get_settings
from audit_dashboard.models.enums import MessageRole

settings = get_settings()


class ChatRequest(BaseModel):
    """Request model for chat endpoint."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    message: str = Field(
        ..., min_length=1, max_length=settings.MAX_CHAT_MESSAGE_LENGTH, description="User message"
    )
    session_id: Optional[str] = Field(None, description="Chat transcript ID (for continued conversation)")


class TranscriptMessage(BaseModel):
    """A message stored in a chat transcript."""

    role: MessageRole
    content: str
    timestamp: datetime


class ChatTranscript(BaseModel):
    """Stored conversation."""

    id: str
    messages: list[TranscriptMessage] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class ChatResponse(BaseModel):
    """Response model for chat endpoint."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    session_id: str = Field(..., description="Chat transcript ID")
    response: str = Field(..., description="Assistant answer")
    messages: list[TranscriptMessage] = Field(default_factory=list, description="Full transcript")
