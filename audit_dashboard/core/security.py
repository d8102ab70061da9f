"""
Security helpers for browser sessions and secret handling.
"""

from __future__ import annotations

import secrets
import time

_SESSION_RANDOM_BYTES = 16
_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))


def generate_session_id(now_ms: int | None = None) -> str:
    """Create an unpredictable session identifier.

    The base-36 timestamp prefix only helps when reading logs; the
    unpredictability comes from the 128-bit random suffix.
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{_to_base36(now_ms)}-{secrets.token_hex(_SESSION_RANDOM_BYTES)}"


def mask_secret(value: str | None, visible: int = 4) -> str:
    """Mask a secret for log output, keeping only the last few characters."""
    if not value:
        return "<empty>"
    if len(value) <= visible * 2:
        return "***"
    return f"***{value[-visible:]}"
