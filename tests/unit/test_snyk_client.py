"""
Unit tests for SnykAuditLogClient against a mocked Snyk REST API.
"""

from datetime import datetime, timezone

import httpx
import pytest

from audit_dashboard.core.exceptions import UpstreamAPIError
from audit_dashboard.infrastructure.snyk.snyk_client import (
    SnykAuditLogClient,
    extract_cursor,
    transform_audit_log_item,
)
from audit_dashboard.models.audit_log import AuditLogFilter

JSONAPI_ITEM = {
    "id": "a1",
    "type": "audit_log",
    "attributes": {
        "event": "org.project.add",
        "created": "2026-10-17T10:00:00Z",
        "content": {"user_email": "dev@example.com", "project": "web"},
    },
    "relationships": {
        "org": {"data": {"id": "org-1"}},
        "project": {"data": {"id": "proj-9"}},
    },
}


def _client(handler, **kwargs) -> SnykAuditLogClient:
    return SnykAuditLogClient("snyk-token", transport=httpx.MockTransport(handler), **kwargs)


class TestTransform:
    def test_jsonapi_item(self):
        log = transform_audit_log_item(JSONAPI_ITEM)
        assert log.id == "a1"
        assert log.event == "org.project.add"
        assert log.created == datetime(2026, 10, 17, 10, 0, tzinfo=timezone.utc)
        assert log.content["user_email"] == "dev@example.com"
        assert log.org_id == "org-1"
        assert log.group_id is None
        assert log.project_id == "proj-9"

    def test_flat_item_with_fallbacks(self):
        log = transform_audit_log_item(
            {"uuid": "u-1", "timestamp": "2026-10-17T09:00:00Z", "data": {"k": "v"}, "group_id": "g-1"}
        )
        assert log.id == "u-1"
        assert log.event == "unknown.event"
        assert log.content == {"k": "v"}
        assert log.group_id == "g-1"

    def test_extract_cursor(self):
        assert extract_cursor("/orgs/o/audit_logs/search?version=x&starting_after=abc") == "abc"
        assert extract_cursor("https://api.snyk.io/rest/orgs/o?starting_after=xyz") == "xyz"
        assert extract_cursor("/orgs/o/audit_logs/search?version=x") is None
        assert extract_cursor(None) is None


class TestSearch:
    @pytest.mark.asyncio
    async def test_organization_request_and_page(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={
                    "data": [JSONAPI_ITEM],
                    "links": {"next": "/orgs/org-1/audit_logs/search?starting_after=cur-2"},
                    "meta": {"count": 42},
                },
            )

        client = _client(handler, api_version="2024-10-15")
        filters = AuditLogFilter(
            from_=datetime(2026, 10, 16, tzinfo=timezone.utc),
            events=["org.project.add", "org.user.add"],
            exclude_events=["api.access"],
            size=25,
            cursor="cur-1",
        )

        page = await client.get_organization_audit_logs("org-1", filters)

        request = seen[0]
        assert request.url.path == "/rest/orgs/org-1/audit_logs/search"
        assert request.headers["Authorization"] == "token snyk-token"
        assert request.headers["version"] == "2024-10-15"
        assert request.headers["Content-Type"] == "application/vnd.api+json"
        params = request.url.params
        assert params["version"] == "2024-10-15"
        assert params["limit"] == "25"
        assert params["starting_after"] == "cur-1"
        assert params["filter[from]"] == "2026-10-16T00:00:00.000Z"
        assert params.get_list("filter[event]") == ["org.project.add", "org.user.add"]
        assert params.get_list("filter[exclude_event]") == ["api.access"]
        assert "filter[to]" not in params

        assert [log.id for log in page.items] == ["a1"]
        assert page.total == 42
        assert page.next_cursor == "cur-2"

    @pytest.mark.asyncio
    async def test_group_request_with_items_shape(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"data": {"items": [JSONAPI_ITEM, JSONAPI_ITEM]}})

        page = await _client(handler).get_group_audit_logs("grp-1", AuditLogFilter())

        assert seen[0].url.path == "/rest/groups/grp-1/audit_logs/search"
        assert seen[0].url.params["limit"] == "50"
        assert page.total == 2
        assert page.next_cursor is None

    @pytest.mark.asyncio
    async def test_search_is_applied_locally(self):
        other = {**JSONAPI_ITEM, "id": "a2", "attributes": {"event": "org.user.add", "content": {}}}

        def handler(request: httpx.Request) -> httpx.Response:
            assert "search" not in request.url.params
            return httpx.Response(200, json={"data": [JSONAPI_ITEM, other]})

        page = await _client(handler).get_organization_audit_logs(
            "org-1", AuditLogFilter(search="DEV@EXAMPLE")
        )

        assert [log.id for log in page.items] == ["a1"]
        assert page.total == 1

    @pytest.mark.asyncio
    async def test_error_detail_is_surfaced(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(403, json={"errors": [{"detail": "Forbidden for this org"}]})

        with pytest.raises(UpstreamAPIError) as exc_info:
            await _client(handler).get_organization_audit_logs("org-1", AuditLogFilter())

        assert exc_info.value.message == "Forbidden for this org"
        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    async def test_error_text_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, text="upstream exploded")

        with pytest.raises(UpstreamAPIError, match="upstream exploded"):
            await _client(handler).get_group_audit_logs("g", AuditLogFilter())

    @pytest.mark.asyncio
    async def test_error_empty_body_uses_status(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503)

        with pytest.raises(UpstreamAPIError, match="Snyk API error: 503"):
            await _client(handler).get_group_audit_logs("g", AuditLogFilter())


class TestConnection:
    @pytest.mark.asyncio
    async def test_success(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/rest/orgs"
            return httpx.Response(200, json={"data": []})

        check = await _client(handler).test_connection()

        assert check.success is True
        assert check.message == "Connection successful"

    @pytest.mark.asyncio
    async def test_failure_never_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"errors": [{"detail": "Invalid auth token"}]})

        check = await _client(handler).test_connection()

        assert check.success is False
        assert check.message == "Invalid auth token"

    @pytest.mark.asyncio
    async def test_transport_failure_is_reported(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("name resolution failed")

        check = await _client(handler).test_connection()

        assert check.success is False
        assert "name resolution failed" in check.message
