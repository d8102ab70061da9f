"""
Session sweeper.

Periodically purges idle sessions and expired credential records so that
abandoned browser sessions do not keep secrets in memory.
"""

from __future__ import annotations

from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from audit_dashboard.core.config import Settings, get_settings
from audit_dashboard.core.logger import logger
from audit_dashboard.interfaces.session_store import ISessionStore


class SessionSweeper:
    """Background job that calls ``ISessionStore.sweep`` on an interval."""

    JOB_ID = "session_sweep"

    def __init__(self, store: ISessionStore, settings: Optional[Settings] = None):
        self._store = store
        self._settings = settings or get_settings()
        self._scheduler: Optional[AsyncIOScheduler] = None

    @property
    def running(self) -> bool:
        return self._scheduler is not None

    def run_once(self) -> int:
        """Sweep now. Returns the number of sessions removed."""
        try:
            return self._store.sweep()
        except Exception as e:
            logger.error(f"Session sweep failed: {e}")
            return 0

    async def start(self) -> None:
        """Start the scheduler (no-op in the test environment)."""
        if self._settings.is_test:
            logger.info("Session sweeper disabled in test environment")
            return

        interval = self._settings.SESSION_SWEEP_INTERVAL_MINUTES
        self._scheduler = AsyncIOScheduler()
        self._scheduler.add_job(
            self.run_once,
            IntervalTrigger(minutes=interval),
            id=self.JOB_ID,
            name="Session Sweep",
            replace_existing=True,
        )
        self._scheduler.start()
        logger.info(f"Session sweeper started: every {interval} minutes")

    async def stop(self) -> None:
        """Stop the scheduler."""
        if self._scheduler:
            self._scheduler.shutdown(wait=False)
            self._scheduler = None
            logger.info("Session sweeper stopped")
