"""
Unit tests for session id generation and secret masking.
"""

from audit_dashboard.core.security import generate_session_id, mask_secret


def test_session_id_has_timestamp_prefix_and_random_suffix():
    session_id = generate_session_id(now_ms=36)
    prefix, suffix = session_id.split("-")
    assert prefix == "10"
    assert len(suffix) == 32


def test_session_ids_differ_for_same_timestamp():
    assert generate_session_id(now_ms=1000) != generate_session_id(now_ms=1000)


def test_mask_secret_keeps_last_four():
    assert mask_secret("abcdefghijkl") == "***ijkl"


def test_mask_secret_short_and_empty_values():
    assert mask_secret("short") == "***"
    assert mask_secret("") == "<empty>"
    assert mask_secret(None) == "<empty>"
