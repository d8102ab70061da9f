"""In-memory chat transcript repository implementation."""

import asyncio
from typing import Optional, Sequence
from uuid import uuid4

from audit_dashboard.core.exceptions import NotFoundError
from audit_dashboard.interfaces.chat_transcript_repository import IChatTranscriptRepository
from audit_dashboard.models.chat import ChatTranscript, TranscriptMessage
from audit_dashboard.utils.datetime_utils import now_utc


class InMemoryChatTranscriptRepository(IChatTranscriptRepository):
    """In-memory implementation of chat transcript repository."""

    def __init__(self):
        self._transcripts: dict[str, ChatTranscript] = {}
        self._lock = asyncio.Lock()

    async def create(self) -> ChatTranscript:
        now = now_utc()
        transcript = ChatTranscript(id=str(uuid4()), messages=[], created_at=now, updated_at=now)
        async with self._lock:
            self._transcripts[transcript.id] = transcript
        return transcript.model_copy(deep=True)

    async def get(self, transcript_id: str) -> Optional[ChatTranscript]:
        async with self._lock:
            transcript = self._transcripts.get(transcript_id)
        return transcript.model_copy(deep=True) if transcript else None

    async def append_messages(
        self,
        transcript_id: str,
        messages: Sequence[TranscriptMessage],
    ) -> ChatTranscript:
        async with self._lock:
            transcript = self._transcripts.get(transcript_id)
            if transcript is None:
                raise NotFoundError(f"Chat session {transcript_id} not found")
            updated = transcript.model_copy(
                update={
                    "messages": [*transcript.messages, *messages],
                    "updated_at": now_utc(),
                }
            )
            self._transcripts[transcript_id] = updated
        return updated.model_copy(deep=True)
