"""Snyk REST API integration."""

from audit_dashboard.infrastructure.snyk.snyk_client import SnykAuditLogClient

__all__ = ["SnykAuditLogClient"]
