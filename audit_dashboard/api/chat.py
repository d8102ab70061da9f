"""
Chat API endpoint.

Conversational assistant over the cached audit logs.
"""

from fastapi import APIRouter

from audit_dashboard.api.deps import (
    AnalysisService,
    AuditLogRepo,
    ChatTranscriptRepo,
    SessionId,
    SessionStore,
)
from audit_dashboard.models.chat import ChatRequest, ChatResponse, TranscriptMessage
from audit_dashboard.models.enums import ConfigKind, MessageRole
from audit_dashboard.models.llm import Message
from audit_dashboard.utils.datetime_utils import now_utc

router = APIRouter()


@router.post("", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    session_id: SessionId,
    store: SessionStore,
    cache: AuditLogRepo,
    transcripts: ChatTranscriptRepo,
    service: AnalysisService,
):
    """
    Send a message to the assistant.

    An unknown or missing ``sessionId`` starts a new transcript.
    """
    transcript = None
    if request.session_id:
        transcript = await transcripts.get(request.session_id)
    if transcript is None:
        transcript = await transcripts.create()

    history = [Message(role=m.role, content=m.content) for m in transcript.messages]
    logs = await cache.list_all()
    llm_config = store.get_config(session_id, ConfigKind.LLM)

    user_message = TranscriptMessage(role=MessageRole.USER, content=request.message, timestamp=now_utc())
    answer = await service.chat(request.message, logs, history, llm_config)
    assistant_message = TranscriptMessage(
        role=MessageRole.ASSISTANT, content=answer, timestamp=now_utc()
    )

    updated = await transcripts.append_messages(transcript.id, [user_message, assistant_message])
    return ChatResponse(session_id=updated.id, response=answer, messages=updated.messages)
