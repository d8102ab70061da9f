"""Debug endpoints (mounted only when DEBUG is enabled)."""

from typing import Any

from fastapi import APIRouter

from audit_dashboard.api.deps import SessionStore

router = APIRouter()


@router.get("/sessions")
async def get_sessions(store: SessionStore) -> dict[str, Any]:
    """Redacted snapshot of live sessions."""
    return store.debug_info()
