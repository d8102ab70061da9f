"""
Fixtures for API tests.

Each test gets a fresh application (fresh session store) driven through
httpx.ASGITransport. The Snyk client is replaced by an in-process fake.
"""

from datetime import timedelta
from typing import Optional

import httpx
import pytest

from audit_dashboard.api.deps import get_audit_log_source_factory
from audit_dashboard.interfaces.audit_log_source import IAuditLogSource
from audit_dashboard.models.audit_log import AuditLog, AuditLogFilter, AuditLogPage, ConnectionCheck
from audit_dashboard.utils.datetime_utils import now_utc
from main import create_app


class FakeAuditLogSource(IAuditLogSource):
    """Stands in for the Snyk API."""

    def __init__(self):
        self.page = AuditLogPage()
        self.connection = ConnectionCheck(success=True, message="Connection successful")
        self.error: Optional[Exception] = None
        self.calls: list[tuple[str, str, AuditLogFilter]] = []
        self.credentials: list[tuple[str, str]] = []

    async def get_organization_audit_logs(self, org_id, filters):
        self.calls.append(("org", org_id, filters))
        if self.error:
            raise self.error
        return self.page

    async def get_group_audit_logs(self, group_id, filters):
        self.calls.append(("group", group_id, filters))
        if self.error:
            raise self.error
        return self.page

    async def test_connection(self):
        return self.connection


def make_logs(count: int, hours_ago: float = 1) -> list[AuditLog]:
    base = now_utc() - timedelta(hours=hours_ago)
    return [
        AuditLog(
            id=f"log-{i}",
            event="org.user.add" if i % 2 == 0 else "org.project.delete",
            created=base - timedelta(minutes=i),
            content={"user_email": f"user{i % 3}@example.com", "note": "a,b \"quoted\""},
            org_id="org-1",
        )
        for i in range(count)
    ]


@pytest.fixture
def snyk():
    return FakeAuditLogSource()


@pytest.fixture
def app(snyk):
    application = create_app()

    def factory(api_token: str, api_version: str) -> IAuditLogSource:
        snyk.credentials.append((api_token, api_version))
        return snyk

    application.dependency_overrides[get_audit_log_source_factory] = lambda: factory
    return application


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
async def configured_client(client):
    """Client whose session already holds a Snyk configuration for org-1."""
    response = await client.post("/api/config", json={"snykApiToken": "snyk-token", "orgId": "org-1"})
    assert response.status_code == 200
    return client
