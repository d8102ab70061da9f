"""Pydantic models (schemas) for the application."""

from audit_dashboard.models.audit_log import AuditLog, AuditLogFilter, AuditLogPage, ConnectionCheck
from audit_dashboard.models.chat import ChatRequest, ChatResponse, ChatTranscript, TranscriptMessage
from audit_dashboard.models.enums import ConfigKind, ExportFormat, MessageRole, ProviderFamily
from audit_dashboard.models.llm import GenerateOptions, Message, ProviderConfig
from audit_dashboard.models.session import LLMConfig, Session, SessionResolution, UpstreamConfig

__all__ = [
    # Enums
    "ConfigKind",
    "ExportFormat",
    "MessageRole",
    "ProviderFamily",
    # Audit logs
    "AuditLog",
    "AuditLogFilter",
    "AuditLogPage",
    "ConnectionCheck",
    # Chat
    "ChatRequest",
    "ChatResponse",
    "ChatTranscript",
    "TranscriptMessage",
    # LLM
    "GenerateOptions",
    "Message",
    "ProviderConfig",
    # Sessions
    "LLMConfig",
    "Session",
    "SessionResolution",
    "UpstreamConfig",
]
