"""Abstract interfaces for infrastructure abstraction."""

from audit_dashboard.interfaces.audit_log_repository import IAuditLogRepository
from audit_dashboard.interfaces.audit_log_source import AuditLogSourceFactory, IAuditLogSource
from audit_dashboard.interfaces.chat_transcript_repository import IChatTranscriptRepository
from audit_dashboard.interfaces.llm_provider import ILLMProvider
from audit_dashboard.interfaces.session_store import ISessionStore

__all__ = [
    "AuditLogSourceFactory",
    "IAuditLogRepository",
    "IAuditLogSource",
    "IChatTranscriptRepository",
    "ILLMProvider",
    "ISessionStore",
]
