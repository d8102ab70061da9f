"""
Chat transcript repository interface.

Defines the contract for chat history persistence.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from audit_dashboard.models.chat import ChatTranscript, TranscriptMessage


class IChatTranscriptRepository(ABC):
    """Abstract interface for chat transcript persistence."""

    @abstractmethod
    async def create(self) -> ChatTranscript:
        """Create an empty transcript with a fresh ID."""
        pass

    @abstractmethod
    async def get(self, transcript_id: str) -> Optional[ChatTranscript]:
        """Get a transcript by ID."""
        pass

    @abstractmethod
    async def append_messages(
        self,
        transcript_id: str,
        messages: Sequence[TranscriptMessage],
    ) -> ChatTranscript:
        """
        Append messages to a transcript.

        Raises:
            NotFoundError: Unknown transcript ID
        """
        pass
