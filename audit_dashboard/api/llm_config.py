"""LLM provider configuration endpoints."""

from typing import Optional

from fastapi import APIRouter, HTTPException, status

from audit_dashboard.api.deps import SessionId, SessionStore, SettingsDep
from audit_dashboard.core.logger import setup_logger
from audit_dashboard.core.security import mask_secret
from audit_dashboard.models.config import LLMConfigRequest, LLMConfigResponse, MessageResponse
from audit_dashboard.models.enums import ConfigKind
from audit_dashboard.models.session import LLMConfig
from audit_dashboard.services.provider_router import is_supported_provider, supported_provider_names

logger = setup_logger(__name__)

router = APIRouter()


@router.get("", response_model=Optional[LLMConfigResponse])
async def get_llm_config(session_id: SessionId, store: SessionStore):
    """Get the stored provider and model. The API key is never returned."""
    config = store.get_config(session_id, ConfigKind.LLM)
    if config is None:
        return None
    return LLMConfigResponse(provider=config.provider, model=config.model)


@router.post("", response_model=LLMConfigResponse)
async def save_llm_config(
    payload: LLMConfigRequest,
    session_id: SessionId,
    store: SessionStore,
    settings: SettingsDep,
):
    """Store the LLM provider configuration for this session."""
    provider = (payload.provider or "").strip()
    model = (payload.model or "").strip()
    api_key = (payload.api_key or "").strip()
    if not provider or not model or not api_key:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="provider, model, and apiKey are required",
        )
    if not is_supported_provider(provider):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=(
                f"Unsupported provider '{provider}'. "
                f"Supported providers: {', '.join(supported_provider_names())}"
            ),
        )

    config = LLMConfig(
        provider=provider,
        model=model,
        api_key=api_key,
        base_url=(payload.base_url or "").strip() or None,
    )
    store.set_config(session_id, ConfigKind.LLM, config, ttl_minutes=settings.CONFIG_TTL_MINUTES)
    logger.info(
        f"Stored LLM configuration ({provider}/{model}, key {mask_secret(api_key)}) "
        f"for session {mask_secret(session_id)}"
    )
    return LLMConfigResponse(provider=provider, model=model)


@router.post("/clear", response_model=MessageResponse)
async def clear_llm_config(session_id: SessionId, store: SessionStore):
    """Forget the LLM configuration; the Snyk configuration is untouched."""
    store.clear_config(session_id, ConfigKind.LLM)
    return MessageResponse(message="LLM configuration cleared successfully")
