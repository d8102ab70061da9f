"""
Audit log repository interface.

Defines the contract for the transient audit log cache.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from audit_dashboard.models.audit_log import AuditLog, AuditLogFilter, AuditLogPage


class IAuditLogRepository(ABC):
    """Abstract interface for audit log persistence."""

    @abstractmethod
    async def upsert_many(self, logs: Sequence[AuditLog]) -> int:
        """
        Insert or replace audit logs keyed by ID.

        Returns:
            Number of logs written
        """
        pass

    @abstractmethod
    async def list_all(self) -> list[AuditLog]:
        """List every cached audit log, newest first."""
        pass

    @abstractmethod
    async def query(self, filters: AuditLogFilter) -> AuditLogPage:
        """
        Filter and paginate cached audit logs.

        The cursor is the ID of the last item of the previous page.
        """
        pass
