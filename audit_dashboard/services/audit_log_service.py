"""
Audit log retrieval for a browser session.

Chooses the organization or group scope of the stored Snyk configuration and
keeps fetched logs in the local cache for chat and insights.
"""

from typing import Optional

from audit_dashboard.core.exceptions import ConfigurationError
from audit_dashboard.core.logger import setup_logger
from audit_dashboard.interfaces.audit_log_repository import IAuditLogRepository
from audit_dashboard.interfaces.audit_log_source import AuditLogSourceFactory
from audit_dashboard.models.audit_log import AuditLogFilter, AuditLogPage
from audit_dashboard.models.session import UpstreamConfig

logger = setup_logger(__name__)

NOT_CONFIGURED_MESSAGE = "Snyk API not configured or session expired"
NO_SCOPE_MESSAGE = "No organization or group ID configured"


def has_scope(config: UpstreamConfig) -> bool:
    return bool(config.org_id or config.group_id)


async def fetch_audit_logs(
    config: Optional[UpstreamConfig],
    source_factory: AuditLogSourceFactory,
    filters: AuditLogFilter,
    cache: Optional[IAuditLogRepository] = None,
) -> AuditLogPage:
    """
    Fetch one page of audit logs for the configured scope.

    The organization scope wins when both IDs are set.

    Raises:
        ConfigurationError: No live Snyk configuration, or no scope ID
        UpstreamAPIError: Snyk request failed
    """
    if config is None or not config.api_token:
        raise ConfigurationError(NOT_CONFIGURED_MESSAGE)
    if not has_scope(config):
        raise ConfigurationError(NO_SCOPE_MESSAGE)

    source = source_factory(config.api_token, config.api_version)
    if config.org_id:
        page = await source.get_organization_audit_logs(config.org_id, filters)
    else:
        page = await source.get_group_audit_logs(config.group_id, filters)

    if cache is not None and page.items:
        await cache.upsert_many(page.items)
        logger.debug(f"Cached {len(page.items)} audit logs")
    return page
