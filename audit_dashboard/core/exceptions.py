"""
Custom exceptions for the application.
"""

from typing import Any, Optional


class DashboardError(Exception):
    """Base exception for the audit dashboard."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundError(DashboardError):
    """Resource not found."""

    pass


class ConfigurationError(DashboardError):
    """Missing or expired credentials / scope configuration."""

    pass


class ValidationError(DashboardError):
    """Validation error."""

    pass


class UpstreamAPIError(DashboardError):
    """Non-success response (or transport failure) from the audit-log source."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message, details={"status_code": status_code})
        self.status_code = status_code


class LLMError(DashboardError):
    """LLM-related error."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message, details={"status_code": status_code})
        self.status_code = status_code


class NoContentError(LLMError):
    """The provider answered but the response carried no extractable text."""

    pass
