"""Audit log listing and export endpoints."""

import csv
import io
import json
from datetime import datetime
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from audit_dashboard.api.deps import (
    AuditLogRepo,
    AuditLogSourceFactoryDep,
    SessionId,
    SessionStore,
    SettingsDep,
    set_session_cookie,
)
from audit_dashboard.core.exceptions import ConfigurationError, UpstreamAPIError
from audit_dashboard.core.logger import setup_logger
from audit_dashboard.interfaces.audit_log_repository import IAuditLogRepository
from audit_dashboard.interfaces.audit_log_source import AuditLogSourceFactory
from audit_dashboard.models.audit_log import AuditLog, AuditLogFilter, AuditLogPage
from audit_dashboard.models.enums import ConfigKind, ExportFormat
from audit_dashboard.models.session import UpstreamConfig
from audit_dashboard.services.audit_log_service import fetch_audit_logs
from audit_dashboard.utils.datetime_utils import ensure_utc, now_utc

logger = setup_logger(__name__)

router = APIRouter()

# Largest page the Snyk search endpoint returns
MAX_EXPORT_SIZE = 100

CSV_HEADER = ["Timestamp", "Event", "Organization ID", "Group ID", "Project ID", "Content"]


def get_audit_log_filter(
    from_: Annotated[Optional[datetime], Query(alias="from")] = None,
    to: Optional[datetime] = None,
    events: Annotated[list[str], Query()] = [],
    exclude_events: Annotated[list[str], Query(alias="excludeEvents")] = [],
    size: Annotated[int, Query(ge=1, le=100)] = 50,
    cursor: Optional[str] = None,
    search: Annotated[Optional[str], Query(max_length=500)] = None,
) -> AuditLogFilter:
    """Build the filter from query parameters."""
    return AuditLogFilter(
        from_=from_,
        to=to,
        events=[e for e in events if e],
        exclude_events=[e for e in exclude_events if e],
        size=size,
        cursor=cursor or None,
        search=(search or "").strip() or None,
    )


Filters = Annotated[AuditLogFilter, Depends(get_audit_log_filter)]


async def _fetch_page(
    config: Optional[UpstreamConfig],
    source_factory: AuditLogSourceFactory,
    filters: AuditLogFilter,
    cache: IAuditLogRepository,
) -> AuditLogPage:
    try:
        return await fetch_audit_logs(config, source_factory, filters, cache=cache)
    except ConfigurationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except UpstreamAPIError as e:
        logger.warning(f"Snyk audit log request failed: {e.message}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)


def _to_csv(items: list[AuditLog]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for item in items:
        writer.writerow(
            [
                ensure_utc(item.created).isoformat(),
                item.event,
                item.org_id or "",
                item.group_id or "",
                item.project_id or "",
                json.dumps(item.content, default=str),
            ]
        )
    return buffer.getvalue()


@router.get("", response_model=AuditLogPage)
async def list_audit_logs(
    filters: Filters,
    session_id: SessionId,
    store: SessionStore,
    source_factory: AuditLogSourceFactoryDep,
    cache: AuditLogRepo,
):
    """Fetch a page of audit logs from Snyk for the configured scope."""
    config = store.get_config(session_id, ConfigKind.UPSTREAM)
    return await _fetch_page(config, source_factory, filters, cache)


@router.get("/export")
async def export_audit_logs(
    filters: Filters,
    session_id: SessionId,
    store: SessionStore,
    source_factory: AuditLogSourceFactoryDep,
    cache: AuditLogRepo,
    settings: SettingsDep,
    export_format: Annotated[ExportFormat, Query(alias="format")] = ExportFormat.JSON,
):
    """Download matching audit logs as JSON or CSV."""
    config = store.get_config(session_id, ConfigKind.UPSTREAM)
    export_filters = filters.model_copy(update={"size": MAX_EXPORT_SIZE, "cursor": None})
    page = await _fetch_page(config, source_factory, export_filters, cache)

    filename = f"snyk-audit-logs-{now_utc().date().isoformat()}.{export_format.value}"
    if export_format == ExportFormat.CSV:
        content = _to_csv(page.items)
        media_type = "text/csv"
    else:
        content = json.dumps(
            [item.model_dump(mode="json", by_alias=True) for item in page.items],
            indent=2,
        )
        media_type = "application/json"

    response = Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
    set_session_cookie(response, session_id, settings)
    return response
