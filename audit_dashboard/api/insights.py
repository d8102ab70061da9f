"""Executive summary and security insight endpoints."""

from datetime import timedelta

from fastapi import APIRouter

from audit_dashboard.api.deps import (
    AnalysisService,
    AuditLogRepo,
    AuditLogSourceFactoryDep,
    SessionId,
    SessionStore,
    SettingsDep,
)
from audit_dashboard.core.exceptions import UpstreamAPIError
from audit_dashboard.core.logger import setup_logger
from audit_dashboard.models.audit_log import AuditLogFilter
from audit_dashboard.models.config import InsightsResponse, SummaryResponse
from audit_dashboard.models.enums import ConfigKind
from audit_dashboard.services.audit_log_service import fetch_audit_logs, has_scope
from audit_dashboard.utils.datetime_utils import now_utc

logger = setup_logger(__name__)

router = APIRouter()


@router.get("/executive-summary", response_model=SummaryResponse)
async def get_executive_summary(
    session_id: SessionId,
    store: SessionStore,
    source_factory: AuditLogSourceFactoryDep,
    cache: AuditLogRepo,
    service: AnalysisService,
    settings: SettingsDep,
):
    """
    Summarize the last 24 hours of audit activity.

    Always answers 200; problems are reported inside the summary text.
    """
    config = store.get_config(session_id, ConfigKind.UPSTREAM)
    if config is None:
        return SummaryResponse(
            summary=(
                "No API configuration found or session expired. "
                "Please configure your Snyk API settings."
            )
        )
    if not has_scope(config):
        return SummaryResponse(summary="No organization or group ID configured for analysis.")

    now = now_utc()
    filters = AuditLogFilter(
        from_=now - timedelta(hours=24),
        to=now,
        size=settings.SUMMARY_FETCH_SIZE,
    )
    try:
        page = await fetch_audit_logs(config, source_factory, filters, cache=cache)
    except UpstreamAPIError as e:
        logger.warning(f"Executive summary fetch failed: {e.message}")
        return SummaryResponse(summary=f"Unable to fetch audit logs: {e.message}")

    if not page.items:
        return SummaryResponse(summary="No audit logs found in the last 24 hours for analysis.")

    llm_config = store.get_config(session_id, ConfigKind.LLM)
    summary = await service.generate_executive_summary(page.items, llm_config)
    return SummaryResponse(summary=summary)


@router.get("/insights", response_model=InsightsResponse)
async def get_insights(
    session_id: SessionId,
    store: SessionStore,
    cache: AuditLogRepo,
    service: AnalysisService,
):
    """Extract security insights from the cached audit logs."""
    logs = await cache.list_all()
    if not logs:
        return InsightsResponse(insights=[])

    llm_config = store.get_config(session_id, ConfigKind.LLM)
    return InsightsResponse(insights=await service.extract_insights(logs, llm_config))
