"""Client-side filtering for audit logs."""

import json
from typing import Sequence

from audit_dashboard.models.audit_log import AuditLog, AuditLogFilter
from audit_dashboard.utils.datetime_utils import ensure_utc


def matches_search(log: AuditLog, search: str) -> bool:
    """Case-insensitive match on the event name or the serialized content."""
    needle = search.lower()
    if needle in log.event.lower():
        return True
    return needle in json.dumps(log.content, default=str).lower()


def apply_filters(logs: Sequence[AuditLog], filters: AuditLogFilter) -> list[AuditLog]:
    """Apply time range, event and search filters (no pagination)."""
    start = ensure_utc(filters.from_)
    end = ensure_utc(filters.to)
    events = set(filters.events)
    excluded = set(filters.exclude_events)

    result = []
    for log in logs:
        created = ensure_utc(log.created)
        if start and created < start:
            continue
        if end and created >= end:
            continue
        if events and log.event not in events:
            continue
        if excluded and log.event in excluded:
            continue
        if filters.search and not matches_search(log, filters.search):
            continue
        result.append(log)
    return result
