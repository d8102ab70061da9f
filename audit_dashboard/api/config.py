"""Snyk API configuration endpoints."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Response, status

from audit_dashboard.api.deps import (
    AuditLogSourceFactoryDep,
    ExistingSessionId,
    SessionId,
    SessionStore,
    SettingsDep,
    clear_session_cookie,
)
from audit_dashboard.core.logger import setup_logger
from audit_dashboard.core.security import mask_secret
from audit_dashboard.models.config import (
    ApiConfigRequest,
    ApiConfigResponse,
    ExtendConfigRequest,
    ExtendConfigResponse,
    MessageResponse,
)
from audit_dashboard.models.enums import ConfigKind
from audit_dashboard.models.session import UpstreamConfig

logger = setup_logger(__name__)

router = APIRouter()


def _to_response(config: UpstreamConfig, expires_in_minutes: Optional[int]) -> ApiConfigResponse:
    return ApiConfigResponse(
        group_id=config.group_id,
        org_id=config.org_id,
        api_version=config.api_version,
        expires_in_minutes=expires_in_minutes,
    )


@router.get("", response_model=Optional[ApiConfigResponse])
async def get_config(session_id: SessionId, store: SessionStore):
    """Get the stored Snyk configuration (token masked), or null."""
    config = store.get_config(session_id, ConfigKind.UPSTREAM)
    if config is None:
        return None
    return _to_response(config, store.remaining_minutes(session_id, ConfigKind.UPSTREAM))


@router.post("", response_model=ApiConfigResponse)
async def save_config(
    payload: ApiConfigRequest,
    session_id: SessionId,
    store: SessionStore,
    source_factory: AuditLogSourceFactoryDep,
    settings: SettingsDep,
):
    """Verify a Snyk token and store it for this session."""
    token = (payload.snyk_api_token or "").strip()
    if not token:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Snyk API token is required")

    api_version = (payload.api_version or "").strip() or settings.SNYK_DEFAULT_API_VERSION
    check = await source_factory(token, api_version).test_connection()
    if not check.success:
        logger.info(f"Snyk connectivity check failed for token {mask_secret(token)}: {check.message}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=check.message)

    config = UpstreamConfig(
        api_token=token,
        group_id=(payload.group_id or "").strip() or None,
        org_id=(payload.org_id or "").strip() or None,
        api_version=api_version,
    )
    store.set_config(session_id, ConfigKind.UPSTREAM, config, ttl_minutes=settings.CONFIG_TTL_MINUTES)
    logger.info(f"Stored Snyk configuration for session {mask_secret(session_id)}")
    return _to_response(config, store.remaining_minutes(session_id, ConfigKind.UPSTREAM))


@router.post("/clear", response_model=MessageResponse)
async def clear_config(
    response: Response,
    session_id: ExistingSessionId,
    store: SessionStore,
    settings: SettingsDep,
):
    """Forget every credential of this session and drop the cookie."""
    if session_id:
        store.clear_session(session_id)
    clear_session_cookie(response, settings)
    return MessageResponse(message="Configuration cleared successfully")


@router.post("/extend", response_model=ExtendConfigResponse)
async def extend_config(
    session_id: SessionId,
    store: SessionStore,
    payload: Optional[ExtendConfigRequest] = None,
):
    """Push the Snyk configuration expiry forward."""
    minutes = payload.minutes if payload else ExtendConfigRequest().minutes
    if not store.extend_config(session_id, ConfigKind.UPSTREAM, minutes):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No valid configuration to extend",
        )
    return ExtendConfigResponse(
        message="Configuration extended successfully",
        expires_in_minutes=store.remaining_minutes(session_id, ConfigKind.UPSTREAM),
    )
