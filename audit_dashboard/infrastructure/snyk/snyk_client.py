"""
Snyk REST API client for audit logs.

Talks to the ``audit_logs/search`` endpoints of an organization or group and
normalizes JSON:API items into ``AuditLog`` models.
"""

from typing import Any, Optional
from uuid import uuid4

import httpx

from audit_dashboard.core.exceptions import UpstreamAPIError
from audit_dashboard.core.logger import setup_logger
from audit_dashboard.interfaces.audit_log_source import IAuditLogSource
from audit_dashboard.models.audit_log import AuditLog, AuditLogFilter, AuditLogPage, ConnectionCheck
from audit_dashboard.utils.audit_log_filters import matches_search
from audit_dashboard.utils.datetime_utils import now_utc, to_rfc3339

logger = setup_logger(__name__)

DEFAULT_BASE_URL = "https://api.snyk.io/rest"
DEFAULT_API_VERSION = "2024-10-15"
USER_AGENT = "Snyk-Audit-Dashboard/1.0"


def _first(*values: Any) -> Any:
    for value in values:
        if value:
            return value
    return None


def _relationship_id(item: dict[str, Any], name: str) -> Optional[str]:
    relationship = (item.get("relationships") or {}).get(name) or {}
    return (relationship.get("data") or {}).get("id")


def transform_audit_log_item(item: dict[str, Any]) -> AuditLog:
    """Normalize a JSON:API or flat audit log item."""
    attributes = item.get("attributes") or {}
    return AuditLog(
        id=str(_first(item.get("id"), item.get("uuid")) or uuid4()),
        event=_first(attributes.get("event"), item.get("event")) or "unknown.event",
        created=_first(
            attributes.get("created"),
            item.get("created"),
            item.get("timestamp"),
        )
        or now_utc(),
        content=_first(attributes.get("content"), item.get("content"), item.get("data")) or {},
        org_id=_first(_relationship_id(item, "org"), item.get("orgId"), item.get("org_id")),
        group_id=_first(_relationship_id(item, "group"), item.get("groupId"), item.get("group_id")),
        project_id=_first(
            _relationship_id(item, "project"), item.get("projectId"), item.get("project_id")
        ),
    )


def extract_cursor(next_link: Any) -> Optional[str]:
    """Read ``starting_after`` from a ``links.next`` URL (absolute or relative)."""
    if isinstance(next_link, dict):
        next_link = next_link.get("href")
    if not next_link or not isinstance(next_link, str):
        return None
    try:
        return httpx.URL(next_link).params.get("starting_after") or None
    except httpx.InvalidURL:
        return None


def error_message_from_response(response: httpx.Response) -> str:
    fallback = f"Snyk API error: {response.status_code}"
    try:
        body = response.json()
    except ValueError:
        return response.text or fallback

    if isinstance(body, dict):
        errors = body.get("errors")
        if isinstance(errors, list) and errors and isinstance(errors[0], dict):
            detail = errors[0].get("detail")
            if detail:
                return str(detail)
        if body.get("message"):
            return str(body["message"])
    return fallback


class SnykAuditLogClient(IAuditLogSource):
    """Audit log source backed by the Snyk REST API."""

    def __init__(
        self,
        api_token: str,
        api_version: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Snyk client.

        Args:
            api_token: Snyk API token
            api_version: Pinned REST API version date
            base_url: REST API root
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests inject a mock)
        """
        self._api_token = api_token
        self._api_version = api_version or DEFAULT_API_VERSION
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @property
    def api_version(self) -> str:
        return self._api_version

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"token {self._api_token}",
            "Content-Type": "application/vnd.api+json",
            "User-Agent": USER_AGENT,
            "version": self._api_version,
        }

    async def _request(self, path: str, params: list[tuple[str, str]]) -> dict[str, Any]:
        url = f"{self._base_url}{path}"
        logger.debug(f"Snyk request: GET {path} params={params}")
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.get(url, params=params, headers=self._headers())
        except httpx.HTTPError as e:
            raise UpstreamAPIError(f"Failed to reach Snyk API: {e}") from e

        if not response.is_success:
            message = error_message_from_response(response)
            logger.warning(f"Snyk API returned {response.status_code} for {path}: {message}")
            raise UpstreamAPIError(message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamAPIError("Snyk API returned invalid JSON", status_code=response.status_code) from e

    def _search_params(self, filters: AuditLogFilter) -> list[tuple[str, str]]:
        params: list[tuple[str, str]] = [
            ("version", self._api_version),
            ("limit", str(filters.size)),
        ]
        if filters.cursor:
            params.append(("starting_after", filters.cursor))
        if filters.from_:
            params.append(("filter[from]", to_rfc3339(filters.from_)))
        if filters.to:
            params.append(("filter[to]", to_rfc3339(filters.to)))
        params.extend(("filter[event]", event) for event in filters.events)
        params.extend(("filter[exclude_event]", event) for event in filters.exclude_events)
        return params

    def _to_page(self, body: dict[str, Any], filters: AuditLogFilter) -> AuditLogPage:
        data = body.get("data", body)
        if isinstance(data, dict):
            data = data.get("items")
        raw_items = data if isinstance(data, list) else []

        items = [transform_audit_log_item(item) for item in raw_items if isinstance(item, dict)]
        total = _first((body.get("meta") or {}).get("count"), body.get("total")) or len(items)
        next_cursor = extract_cursor((body.get("links") or {}).get("next"))

        if filters.search:
            # Snyk has no full-text filter
            items = [log for log in items if matches_search(log, filters.search)]
            total = len(items)

        return AuditLogPage(items=items, next_cursor=next_cursor, total=total)

    async def get_organization_audit_logs(
        self,
        org_id: str,
        filters: AuditLogFilter,
    ) -> AuditLogPage:
        body = await self._request(f"/orgs/{org_id}/audit_logs/search", self._search_params(filters))
        return self._to_page(body, filters)

    async def get_group_audit_logs(
        self,
        group_id: str,
        filters: AuditLogFilter,
    ) -> AuditLogPage:
        body = await self._request(
            f"/groups/{group_id}/audit_logs/search", self._search_params(filters)
        )
        return self._to_page(body, filters)

    async def test_connection(self) -> ConnectionCheck:
        try:
            await self._request("/orgs", [("version", self._api_version)])
        except UpstreamAPIError as e:
            return ConnectionCheck(success=False, message=e.message)
        return ConnectionCheck(success=True, message="Connection successful")
