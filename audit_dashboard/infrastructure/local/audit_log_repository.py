"""In-memory audit log repository implementation."""

import asyncio
from typing import Sequence

from audit_dashboard.interfaces.audit_log_repository import IAuditLogRepository
from audit_dashboard.models.audit_log import AuditLog, AuditLogFilter, AuditLogPage
from audit_dashboard.utils.audit_log_filters import apply_filters
from audit_dashboard.utils.datetime_utils import ensure_utc


def _newest_first(logs: Sequence[AuditLog]) -> list[AuditLog]:
    return sorted(logs, key=lambda log: ensure_utc(log.created), reverse=True)


class InMemoryAuditLogRepository(IAuditLogRepository):
    """In-memory implementation of audit log repository.

    Keeps the most recently fetched upstream logs keyed by ID so that exports
    and analysis can reuse them. Contents are lost on restart.
    """

    def __init__(self, max_entries: int = 10_000):
        self._logs: dict[str, AuditLog] = {}
        self._max_entries = max_entries
        self._lock = asyncio.Lock()

    async def upsert_many(self, logs: Sequence[AuditLog]) -> int:
        """Insert or replace audit logs keyed by ID."""
        async with self._lock:
            for log in logs:
                self._logs[log.id] = log
            if len(self._logs) > self._max_entries:
                kept = _newest_first(list(self._logs.values()))[: self._max_entries]
                self._logs = {log.id: log for log in kept}
            return len(logs)

    async def list_all(self) -> list[AuditLog]:
        """List every cached audit log, newest first."""
        async with self._lock:
            logs = list(self._logs.values())
        return _newest_first(logs)

    async def query(self, filters: AuditLogFilter) -> AuditLogPage:
        """Filter and paginate cached audit logs."""
        logs = apply_filters(await self.list_all(), filters)
        total = len(logs)

        start_index = 0
        if filters.cursor:
            for index, log in enumerate(logs):
                if log.id == filters.cursor:
                    start_index = index + 1
                    break

        end_index = start_index + filters.size
        items = logs[start_index:end_index]
        next_cursor = items[-1].id if items and end_index < total else None
        return AuditLogPage(items=items, next_cursor=next_cursor, total=total)
