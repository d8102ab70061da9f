"""
Audit log models.

Field names are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AuditLog(BaseModel):
    """A single Snyk audit log entry."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., description="Audit log ID")
    event: str = Field(..., description="Event type, e.g. org.user.add")
    created: datetime = Field(..., description="Creation timestamp")
    content: dict[str, Any] = Field(default_factory=dict, description="Free-form event payload")
    org_id: Optional[str] = None
    group_id: Optional[str] = None
    project_id: Optional[str] = None


class AuditLogFilter(BaseModel):
    """Query filters for listing audit logs."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    from_: Optional[datetime] = Field(None, alias="from", description="Inclusive lower bound")
    to: Optional[datetime] = Field(None, description="Exclusive upper bound")
    events: list[str] = Field(default_factory=list, description="Only these event types")
    exclude_events: list[str] = Field(default_factory=list, description="Skip these event types")
    size: int = Field(50, ge=1, le=100, description="Page size")
    cursor: Optional[str] = Field(None, description="Pagination cursor")
    search: Optional[str] = Field(None, max_length=500, description="Free-text search")


class AuditLogPage(BaseModel):
    """A page of audit logs."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    items: list[AuditLog] = Field(default_factory=list)
    next_cursor: Optional[str] = None
    total: int = 0


class ConnectionCheck(BaseModel):
    """Outcome of an upstream connectivity test."""

    success: bool
    message: str
