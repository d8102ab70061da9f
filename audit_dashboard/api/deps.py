"""
Dependency injection for API endpoints.

Per-process state (session store, repositories) is created once in
``create_app`` and read from ``request.app.state``; everything else is built
from settings.
"""

from functools import lru_cache
from typing import Annotated, Optional

from fastapi import Depends, Request, Response

from audit_dashboard.core.config import Settings, get_settings
from audit_dashboard.interfaces.audit_log_repository import IAuditLogRepository
from audit_dashboard.interfaces.audit_log_source import AuditLogSourceFactory, IAuditLogSource
from audit_dashboard.interfaces.chat_transcript_repository import IChatTranscriptRepository
from audit_dashboard.interfaces.session_store import ISessionStore
from audit_dashboard.services.audit_analysis_service import AuditAnalysisService


# ===========================================
# Settings
# ===========================================

SettingsDep = Annotated[Settings, Depends(get_settings)]


# ===========================================
# Application state
# ===========================================


def get_session_store(request: Request) -> ISessionStore:
    """Get the process-wide session store."""
    return request.app.state.session_store


def get_audit_log_repository(request: Request) -> IAuditLogRepository:
    """Get the audit log cache."""
    return request.app.state.audit_log_repository


def get_chat_transcript_repository(request: Request) -> IChatTranscriptRepository:
    """Get the chat transcript repository."""
    return request.app.state.chat_transcript_repository


SessionStore = Annotated[ISessionStore, Depends(get_session_store)]
AuditLogRepo = Annotated[IAuditLogRepository, Depends(get_audit_log_repository)]
ChatTranscriptRepo = Annotated[IChatTranscriptRepository, Depends(get_chat_transcript_repository)]


# ===========================================
# Upstream and analysis services
# ===========================================


def get_audit_log_source_factory() -> AuditLogSourceFactory:
    """
    Get a factory that builds a Snyk client for a session's credentials.

    Tests override this dependency to avoid real network calls.
    """
    settings = get_settings()

    def factory(api_token: str, api_version: str) -> IAuditLogSource:
        from audit_dashboard.infrastructure.snyk.snyk_client import SnykAuditLogClient

        return SnykAuditLogClient(
            api_token,
            api_version or settings.SNYK_DEFAULT_API_VERSION,
            base_url=settings.SNYK_API_BASE_URL,
            timeout=settings.SNYK_REQUEST_TIMEOUT_SECONDS,
        )

    return factory


@lru_cache()
def get_analysis_service() -> AuditAnalysisService:
    """Get audit analysis service instance."""
    return AuditAnalysisService()


AuditLogSourceFactoryDep = Annotated[AuditLogSourceFactory, Depends(get_audit_log_source_factory)]
AnalysisService = Annotated[AuditAnalysisService, Depends(get_analysis_service)]


# ===========================================
# Browser session
# ===========================================


def set_session_cookie(response: Response, session_id: str, settings: Settings) -> None:
    """Write (or refresh) the session cookie."""
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=session_id,
        max_age=settings.SESSION_IDLE_TIMEOUT_MINUTES * 60,
        path="/",
        httponly=True,
        samesite="strict",
        secure=settings.COOKIE_SECURE,
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        samesite="strict",
        secure=settings.COOKIE_SECURE,
    )


def get_session_id(
    request: Request,
    response: Response,
    store: SessionStore,
    settings: SettingsDep,
) -> str:
    """
    Resolve the caller's session, creating one when needed.

    The cookie is re-sent on every request so its lifetime rolls with
    the session's idle timeout.
    """
    hint = request.cookies.get(settings.SESSION_COOKIE_NAME)
    resolution = store.resolve_session_id(hint)
    set_session_cookie(response, resolution.session_id, settings)
    return resolution.session_id


def get_existing_session_id(request: Request, settings: SettingsDep) -> Optional[str]:
    """Read the session cookie without creating a session."""
    return request.cookies.get(settings.SESSION_COOKIE_NAME) or None


SessionId = Annotated[str, Depends(get_session_id)]
ExistingSessionId = Annotated[Optional[str], Depends(get_existing_session_id)]
