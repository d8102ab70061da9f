"""
Unit tests for InMemorySessionStore.
"""

import pytest

from audit_dashboard.infrastructure.local.session_store import InMemorySessionStore
from audit_dashboard.models.enums import ConfigKind
from audit_dashboard.models.session import LLMConfig, UpstreamConfig

MINUTE_MS = 60_000


class FakeClock:
    def __init__(self, start_ms: int = 1_700_000_000_000):
        self.now = start_ms

    def __call__(self) -> int:
        return self.now

    def advance(self, minutes: float = 0, ms: int = 0) -> None:
        self.now += int(minutes * MINUTE_MS) + ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return InMemorySessionStore(idle_timeout_minutes=30, clock=clock)


def _upstream(token: str = "snyk-token-1234") -> UpstreamConfig:
    return UpstreamConfig(api_token=token, org_id="org-1")


def _llm() -> LLMConfig:
    return LLMConfig(provider="openai", model="gpt-4o", api_key="sk-test-key")


class TestResolveSessionId:
    def test_missing_hint_creates_session(self, store):
        resolution = store.resolve_session_id(None)
        assert resolution.created is True
        assert resolution.session_id
        assert store.session_count == 1

    def test_known_hint_is_reused(self, store):
        first = store.resolve_session_id(None)
        second = store.resolve_session_id(first.session_id)
        assert second.session_id == first.session_id
        assert second.created is False

    def test_unknown_hint_gets_fresh_id(self, store):
        resolution = store.resolve_session_id("forged-id")
        assert resolution.created is True
        assert resolution.session_id != "forged-id"

    def test_idle_session_is_replaced(self, store, clock):
        first = store.resolve_session_id(None)
        clock.advance(minutes=31)
        second = store.resolve_session_id(first.session_id)
        assert second.created is True
        assert second.session_id != first.session_id

    def test_activity_keeps_session_alive(self, store, clock):
        first = store.resolve_session_id(None)
        for _ in range(3):
            clock.advance(minutes=20)
            assert store.resolve_session_id(first.session_id).created is False

    def test_ids_are_unique(self, store):
        ids = {store.resolve_session_id(None).session_id for _ in range(50)}
        assert len(ids) == 50


class TestConfigExpiry:
    def test_config_present_just_before_ttl(self, store, clock):
        sid = store.resolve_session_id(None).session_id
        store.set_config(sid, ConfigKind.UPSTREAM, _upstream(), ttl_minutes=30)
        clock.advance(minutes=30, ms=-1)
        assert store.get_config(sid, ConfigKind.UPSTREAM) is not None

    def test_config_absent_at_ttl(self, store, clock):
        sid = store.resolve_session_id(None).session_id
        store.set_config(sid, ConfigKind.UPSTREAM, _upstream(), ttl_minutes=30)
        clock.advance(minutes=29)
        store.resolve_session_id(sid)  # activity does not extend the record
        clock.advance(minutes=1)
        assert store.get_config(sid, ConfigKind.UPSTREAM) is None

    def test_expired_config_is_deleted(self, store, clock):
        sid = store.resolve_session_id(None).session_id
        store.set_config(sid, ConfigKind.UPSTREAM, _upstream(), ttl_minutes=5)
        clock.advance(minutes=5)
        assert store.get_config(sid, ConfigKind.UPSTREAM) is None
        info = store.debug_info()
        assert info["sessions"][0]["has_config"] is False

    def test_kinds_are_independent(self, store, clock):
        sid = store.resolve_session_id(None).session_id
        store.set_config(sid, ConfigKind.UPSTREAM, _upstream(), ttl_minutes=10)
        clock.advance(minutes=5)
        store.set_config(sid, ConfigKind.LLM, _llm(), ttl_minutes=10)
        clock.advance(minutes=6)

        assert store.get_config(sid, ConfigKind.UPSTREAM) is None
        assert store.get_config(sid, ConfigKind.LLM) is not None

    def test_clear_one_kind_keeps_the_other(self, store):
        sid = store.resolve_session_id(None).session_id
        store.set_config(sid, ConfigKind.UPSTREAM, _upstream())
        store.set_config(sid, ConfigKind.LLM, _llm())

        store.clear_config(sid, ConfigKind.LLM)

        assert store.get_config(sid, ConfigKind.LLM) is None
        assert store.get_config(sid, ConfigKind.UPSTREAM) is not None

    def test_last_write_wins(self, store):
        sid = store.resolve_session_id(None).session_id
        store.set_config(sid, ConfigKind.UPSTREAM, _upstream("first-token-aaaa"))
        store.set_config(sid, ConfigKind.UPSTREAM, _upstream("second-token-bbbb"))
        assert store.get_config(sid, ConfigKind.UPSTREAM).api_token == "second-token-bbbb"

    def test_get_returns_copy(self, store):
        sid = store.resolve_session_id(None).session_id
        store.set_config(sid, ConfigKind.UPSTREAM, _upstream())
        copy = store.get_config(sid, ConfigKind.UPSTREAM)
        copy.org_id = "tampered"
        assert store.get_config(sid, ConfigKind.UPSTREAM).org_id == "org-1"

    def test_set_config_creates_missing_session(self, store):
        store.set_config("new-session", ConfigKind.LLM, _llm())
        assert store.get_config("new-session", ConfigKind.LLM) is not None

    def test_idle_session_drops_configs(self, store, clock):
        sid = store.resolve_session_id(None).session_id
        store.set_config(sid, ConfigKind.UPSTREAM, _upstream(), ttl_minutes=60)
        clock.advance(minutes=31)
        assert store.get_config(sid, ConfigKind.UPSTREAM) is None


class TestExtendConfig:
    def test_extend_live_config(self, store, clock):
        sid = store.resolve_session_id(None).session_id
        store.set_config(sid, ConfigKind.UPSTREAM, _upstream(), ttl_minutes=30)
        clock.advance(minutes=25)
        store.resolve_session_id(sid)

        assert store.extend_config(sid, ConfigKind.UPSTREAM, 30) is True
        assert store.remaining_minutes(sid, ConfigKind.UPSTREAM) == 30

        clock.advance(minutes=10)
        assert store.get_config(sid, ConfigKind.UPSTREAM) is not None

    def test_extend_absent_config_returns_false(self, store):
        sid = store.resolve_session_id(None).session_id
        assert store.extend_config(sid, ConfigKind.UPSTREAM, 30) is False

    def test_extend_does_not_resurrect_expired_config(self, store, clock):
        sid = store.resolve_session_id(None).session_id
        store.set_config(sid, ConfigKind.UPSTREAM, _upstream(), ttl_minutes=5)
        clock.advance(minutes=6)

        assert store.extend_config(sid, ConfigKind.UPSTREAM, 30) is False
        assert store.get_config(sid, ConfigKind.UPSTREAM) is None

    def test_extend_never_shortens(self, store):
        sid = store.resolve_session_id(None).session_id
        store.set_config(sid, ConfigKind.UPSTREAM, _upstream(), ttl_minutes=60)
        assert store.extend_config(sid, ConfigKind.UPSTREAM, 10) is True
        assert store.remaining_minutes(sid, ConfigKind.UPSTREAM) == 60


class TestRemainingMinutes:
    def test_floors_to_whole_minutes(self, store, clock):
        sid = store.resolve_session_id(None).session_id
        store.set_config(sid, ConfigKind.UPSTREAM, _upstream(), ttl_minutes=30)
        clock.advance(ms=30_000)
        assert store.remaining_minutes(sid, ConfigKind.UPSTREAM) == 29

    def test_absent_config_returns_none(self, store):
        sid = store.resolve_session_id(None).session_id
        assert store.remaining_minutes(sid, ConfigKind.LLM) is None


class TestSweepAndClear:
    def test_sweep_removes_idle_sessions_only(self, store, clock):
        idle = store.resolve_session_id(None).session_id
        clock.advance(minutes=20)
        active = store.resolve_session_id(None).session_id
        clock.advance(minutes=15)

        removed = store.sweep()

        assert removed == 1
        assert store.session_count == 1
        assert store.resolve_session_id(active).created is False
        assert store.resolve_session_id(idle).created is True

    def test_sweep_prunes_expired_configs(self, store, clock):
        sid = store.resolve_session_id(None).session_id
        store.set_config(sid, ConfigKind.LLM, _llm(), ttl_minutes=5)
        clock.advance(minutes=6)
        store.resolve_session_id(sid)

        store.sweep()

        assert store.debug_info()["sessions"][0]["has_llm_config"] is False

    def test_clear_session(self, store):
        sid = store.resolve_session_id(None).session_id
        store.set_config(sid, ConfigKind.UPSTREAM, _upstream())
        store.clear_session(sid)
        assert store.session_count == 0
        assert store.get_config(sid, ConfigKind.UPSTREAM) is None


class TestDebugInfo:
    def test_never_exposes_secrets(self, store):
        sid = store.resolve_session_id(None).session_id
        store.set_config(sid, ConfigKind.UPSTREAM, _upstream("super-secret-token"))
        store.set_config(sid, ConfigKind.LLM, _llm())

        info = store.debug_info()
        rendered = repr(info)

        assert info["total_sessions"] == 1
        assert "super-secret-token" not in rendered
        assert "sk-test-key" not in rendered
        assert sid not in rendered
        assert info["sessions"][0]["has_config"] is True
        assert info["sessions"][0]["config_expired"] is False
