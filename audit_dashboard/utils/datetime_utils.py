"""
Timezone-aware datetime utilities.

Audit log timestamps are always handled as UTC-aware datetimes.
"""

from datetime import datetime, timezone
from typing import Optional

# UTC timezone constant
UTC = timezone.utc


def now_utc() -> datetime:
    """
    Get current UTC datetime (timezone-aware).

    Returns:
        datetime: Current UTC time with tzinfo set to UTC
    """
    return datetime.now(UTC)


def parse_iso_to_utc(iso_string: str) -> datetime:
    """
    Parse ISO datetime string to UTC timezone-aware datetime.

    Handles:
    - ISO strings with 'Z' suffix (UTC): "2024-01-20T09:00:00Z"
    - ISO strings with timezone offset: "2024-01-20T09:00:00+09:00"
    - Naive ISO strings (assumes UTC): "2024-01-20T09:00:00"

    Raises:
        ValueError: If the string cannot be parsed
    """
    normalized = iso_string.strip().replace("Z", "+00:00")
    dt = datetime.fromisoformat(normalized)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Ensure datetime is timezone-aware and in UTC.

    Naive datetimes are assumed to already be UTC.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def to_rfc3339(dt: datetime) -> str:
    """Format a datetime as RFC 3339 in UTC with millisecond precision ("...Z")."""
    utc = ensure_utc(dt)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_report_date(dt: datetime) -> str:
    """Format a date for report headings, e.g. "October 17, 2026" (UTC)."""
    utc = ensure_utc(dt)
    return f"{utc.strftime('%B')} {utc.day}, {utc.year}"
