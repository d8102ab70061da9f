"""
Audit log source interface.

Defines the contract for the upstream (Snyk) audit log API client.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from audit_dashboard.models.audit_log import AuditLogFilter, AuditLogPage, ConnectionCheck


class IAuditLogSource(ABC):
    """Abstract interface for fetching audit logs from the upstream API."""

    @abstractmethod
    async def get_organization_audit_logs(
        self,
        org_id: str,
        filters: AuditLogFilter,
    ) -> AuditLogPage:
        """
        Search audit logs of one organization.

        Raises:
            UpstreamAPIError: Non-success response or transport failure
        """
        pass

    @abstractmethod
    async def get_group_audit_logs(
        self,
        group_id: str,
        filters: AuditLogFilter,
    ) -> AuditLogPage:
        """
        Search audit logs of one group.

        Raises:
            UpstreamAPIError: Non-success response or transport failure
        """
        pass

    @abstractmethod
    async def test_connection(self) -> ConnectionCheck:
        """Check that the token works. Never raises."""
        pass


# (api_token, api_version) -> client
AuditLogSourceFactory = Callable[[str, str], IAuditLogSource]
