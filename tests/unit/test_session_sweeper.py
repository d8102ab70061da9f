"""
Unit tests for SessionSweeper.
"""

from unittest.mock import MagicMock

import pytest

from audit_dashboard.core.config import Settings
from audit_dashboard.services.session_sweeper import SessionSweeper


@pytest.fixture
def store():
    mock = MagicMock()
    mock.sweep.return_value = 2
    return mock


def test_run_once_sweeps_store(store):
    sweeper = SessionSweeper(store, Settings(ENVIRONMENT="test"))

    assert sweeper.run_once() == 2
    store.sweep.assert_called_once_with()


def test_run_once_survives_store_errors(store):
    store.sweep.side_effect = RuntimeError("boom")
    sweeper = SessionSweeper(store, Settings(ENVIRONMENT="test"))

    assert sweeper.run_once() == 0


@pytest.mark.asyncio
async def test_start_is_noop_in_test_environment(store):
    sweeper = SessionSweeper(store, Settings(ENVIRONMENT="test"))

    await sweeper.start()

    assert sweeper.running is False


@pytest.mark.asyncio
async def test_start_and_stop_scheduler(store):
    sweeper = SessionSweeper(store, Settings(ENVIRONMENT="local", SESSION_SWEEP_INTERVAL_MINUTES=1))

    await sweeper.start()
    try:
        assert sweeper.running is True
        job = sweeper._scheduler.get_job(SessionSweeper.JOB_ID)
        assert job is not None
    finally:
        await sweeper.stop()

    assert sweeper.running is False
