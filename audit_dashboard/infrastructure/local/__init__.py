"""In-process implementations of the storage interfaces."""

from audit_dashboard.infrastructure.local.audit_log_repository import InMemoryAuditLogRepository
from audit_dashboard.infrastructure.local.chat_transcript_repository import (
    InMemoryChatTranscriptRepository,
)
from audit_dashboard.infrastructure.local.session_store import InMemorySessionStore

__all__ = [
    "InMemoryAuditLogRepository",
    "InMemoryChatTranscriptRepository",
    "InMemorySessionStore",
]
