"""In-memory session store implementation."""

from __future__ import annotations

import threading
import time
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from audit_dashboard.core.logger import setup_logger
from audit_dashboard.core.security import generate_session_id, mask_secret
from audit_dashboard.interfaces.session_store import ISessionStore
from audit_dashboard.models.enums import ConfigKind
from audit_dashboard.models.session import (
    ConfigEntry,
    Session,
    SessionPayload,
    SessionResolution,
)

logger = setup_logger(__name__)

MS_PER_MINUTE = 60 * 1000


def _now_ms() -> int:
    return int(time.time() * 1000)


def _iso(epoch_ms: int) -> str:
    return datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc).isoformat()


class InMemorySessionStore(ISessionStore):
    """In-memory implementation of the session store.

    Sessions live only in this process; secrets are never written to disk.
    Two clocks run per session: the idle timeout (refreshed by every
    ``resolve_session_id``) and one TTL per config record, which is not
    refreshed by activity.

    Every public method takes ``self._lock``. Config records are replaced
    copy-on-write (a new dict is assigned to ``Session.configs``), so readers
    never observe a half-updated mapping.
    """

    def __init__(
        self,
        idle_timeout_minutes: int = 30,
        clock: Optional[Callable[[], int]] = None,
    ):
        """
        Initialize the store.

        Args:
            idle_timeout_minutes: Sessions idle for longer are purged
            clock: Returns the current time in epoch milliseconds
        """
        self._idle_timeout_ms = idle_timeout_minutes * MS_PER_MINUTE
        self._clock = clock or _now_ms
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Internal helpers (caller holds the lock)
    # ------------------------------------------------------------------

    def _is_idle(self, session: Session, now: int) -> bool:
        return now - session.last_accessed > self._idle_timeout_ms

    def _live_session(self, session_id: Optional[str], now: int) -> Optional[Session]:
        if not session_id:
            return None
        session = self._sessions.get(session_id)
        if session is None:
            return None
        if self._is_idle(session, now):
            del self._sessions[session_id]
            logger.debug(f"Purged idle session {mask_secret(session_id)}")
            return None
        return session

    @staticmethod
    def _without(session: Session, kind: ConfigKind) -> None:
        session.configs = {k: v for k, v in session.configs.items() if k != kind}

    def _live_entry(self, session: Session, kind: ConfigKind, now: int) -> Optional[ConfigEntry]:
        entry = session.configs.get(kind)
        if entry is None:
            return None
        if now >= entry.expires_at:
            self._without(session, kind)
            logger.info(f"Expired {kind.value} config removed from session {mask_secret(session.id)}")
            return None
        return entry

    def _new_session(self, session_id: str, now: int) -> Session:
        session = Session(id=session_id, created_at=now, last_accessed=now)
        self._sessions[session_id] = session
        return session

    # ------------------------------------------------------------------
    # ISessionStore
    # ------------------------------------------------------------------

    def resolve_session_id(self, hint: Optional[str]) -> SessionResolution:
        with self._lock:
            now = self._clock()
            session = self._live_session(hint, now)
            if session is not None:
                session.last_accessed = now
                return SessionResolution(session.id, False)

            session_id = generate_session_id(now)
            while session_id in self._sessions:
                session_id = generate_session_id(now)
            self._new_session(session_id, now)
            logger.debug(f"Created session {mask_secret(session_id)}")
            return SessionResolution(session_id, True)

    def set_config(
        self,
        session_id: str,
        kind: ConfigKind,
        payload: SessionPayload,
        ttl_minutes: int = 30,
    ) -> None:
        with self._lock:
            now = self._clock()
            session = self._live_session(session_id, now) or self._new_session(session_id, now)
            entry = ConfigEntry(
                payload=payload.model_copy(deep=True),
                expires_at=now + ttl_minutes * MS_PER_MINUTE,
            )
            session.configs = {**session.configs, kind: entry}

    def get_config(self, session_id: str, kind: ConfigKind) -> Optional[SessionPayload]:
        with self._lock:
            now = self._clock()
            session = self._live_session(session_id, now)
            if session is None:
                return None
            entry = self._live_entry(session, kind, now)
            if entry is None:
                return None
            return entry.payload.model_copy(deep=True)

    def extend_config(self, session_id: str, kind: ConfigKind, additional_minutes: int) -> bool:
        with self._lock:
            now = self._clock()
            session = self._live_session(session_id, now)
            if session is None:
                return False
            entry = self._live_entry(session, kind, now)
            if entry is None:
                return False
            # Never shortens a record that already outlives the extension
            expires_at = max(entry.expires_at, now + additional_minutes * MS_PER_MINUTE)
            session.configs = {
                **session.configs,
                kind: ConfigEntry(payload=entry.payload, expires_at=expires_at),
            }
            return True

    def clear_config(self, session_id: str, kind: ConfigKind) -> None:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None:
                self._without(session, kind)

    def clear_session(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def remaining_minutes(self, session_id: str, kind: ConfigKind) -> Optional[int]:
        with self._lock:
            now = self._clock()
            session = self._live_session(session_id, now)
            if session is None:
                return None
            entry = self._live_entry(session, kind, now)
            if entry is None:
                return None
            return max(0, (entry.expires_at - now) // MS_PER_MINUTE)

    def sweep(self) -> int:
        with self._lock:
            now = self._clock()
            removed = 0
            for session_id, session in list(self._sessions.items()):
                if self._is_idle(session, now):
                    del self._sessions[session_id]
                    removed += 1
                    continue
                expired = [kind for kind, entry in session.configs.items() if now >= entry.expires_at]
                for kind in expired:
                    self._without(session, kind)
            if removed:
                logger.info(f"Session sweep removed {removed} idle session(s)")
            return removed

    def debug_info(self) -> dict[str, Any]:
        with self._lock:
            now = self._clock()
            sessions = []
            for session in self._sessions.values():
                upstream = session.configs.get(ConfigKind.UPSTREAM)
                llm = session.configs.get(ConfigKind.LLM)
                sessions.append(
                    {
                        "id": mask_secret(session.id),
                        "has_config": upstream is not None,
                        "has_llm_config": llm is not None,
                        "config_expired": (now >= upstream.expires_at) if upstream else None,
                        "llm_config_expired": (now >= llm.expires_at) if llm else None,
                        "created_at": _iso(session.created_at),
                        "last_accessed": _iso(session.last_accessed),
                        "age_minutes": (now - session.created_at) // MS_PER_MINUTE,
                    }
                )
            return {"total_sessions": len(self._sessions), "sessions": sessions}

    @property
    def session_count(self) -> int:
        """Number of sessions currently held (idle ones included until swept)."""
        with self._lock:
            return len(self._sessions)
