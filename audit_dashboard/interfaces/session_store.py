"""
Session store interface.

Defines the contract for the per-browser credential store.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from audit_dashboard.models.enums import ConfigKind
from audit_dashboard.models.session import SessionPayload, SessionResolution


class ISessionStore(ABC):
    """Abstract interface for cookie-identified sessions with expiring configs."""

    @abstractmethod
    def resolve_session_id(self, hint: Optional[str]) -> SessionResolution:
        """
        Map an inbound identifier to a live session, creating one if needed.

        Args:
            hint: Identifier sent by the browser (cookie value), if any

        Returns:
            SessionResolution; ``created`` tells the caller to write the new
            identifier back to the client
        """
        pass

    @abstractmethod
    def set_config(
        self,
        session_id: str,
        kind: ConfigKind,
        payload: SessionPayload,
        ttl_minutes: int = 30,
    ) -> None:
        """Store (or replace) the config of ``kind`` with a fresh expiry."""
        pass

    @abstractmethod
    def get_config(self, session_id: str, kind: ConfigKind) -> Optional[SessionPayload]:
        """
        Get a copy of the stored config.

        Returns:
            The payload, or None when missing or expired (expired records are
            deleted on detection)
        """
        pass

    @abstractmethod
    def extend_config(self, session_id: str, kind: ConfigKind, additional_minutes: int) -> bool:
        """
        Push the expiry of a live config forward.

        Returns:
            False when there is no live config of that kind
        """
        pass

    @abstractmethod
    def clear_config(self, session_id: str, kind: ConfigKind) -> None:
        """Remove one config record."""
        pass

    @abstractmethod
    def clear_session(self, session_id: str) -> None:
        """Remove the whole session."""
        pass

    @abstractmethod
    def remaining_minutes(self, session_id: str, kind: ConfigKind) -> Optional[int]:
        """Whole minutes left before the config expires, or None if absent."""
        pass

    @abstractmethod
    def sweep(self) -> int:
        """
        Drop idle sessions and expired configs.

        Returns:
            Number of sessions removed
        """
        pass

    @abstractmethod
    def debug_info(self) -> dict[str, Any]:
        """Redacted snapshot of the store (no secrets)."""
        pass
