"""Helpers shared by the HTTP-based provider adapters."""

from typing import Any, Optional, Sequence

import httpx

from audit_dashboard.models.enums import MessageRole
from audit_dashboard.models.llm import Message

DEFAULT_MAX_OUTPUT_TOKENS = 4096
DEFAULT_TEMPERATURE = 0.1


def ensure_messages(messages: Sequence[Message]) -> list[Message]:
    """Substitute a single empty user message when nothing is left to send."""
    if not any(m.role != MessageRole.SYSTEM for m in messages):
        return [*messages, Message(role=MessageRole.USER, content="")]
    return list(messages)


def split_system(messages: Sequence[Message]) -> tuple[Optional[str], list[Message]]:
    """Separate system content from the user/assistant turns."""
    system_parts = [m.content for m in messages if m.role == MessageRole.SYSTEM and m.content]
    turns = [m for m in messages if m.role != MessageRole.SYSTEM]
    return ("\n\n".join(system_parts) or None), turns


def error_message_from_response(response: httpx.Response, provider_label: str) -> str:
    """Pull ``error.message`` out of a failed response body, if there is one."""
    try:
        body: Any = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
        if body.get("message"):
            return str(body["message"])
    return f"{provider_label} API error: {response.status_code}"
