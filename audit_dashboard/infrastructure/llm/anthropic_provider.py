"""Anthropic Messages API provider."""

from typing import Any, Optional, Sequence

import httpx

from audit_dashboard.core.exceptions import LLMError, NoContentError
from audit_dashboard.core.logger import setup_logger
from audit_dashboard.infrastructure.llm.base import (
    DEFAULT_MAX_OUTPUT_TOKENS,
    ensure_messages,
    error_message_from_response,
    split_system,
)
from audit_dashboard.interfaces.llm_provider import ILLMProvider
from audit_dashboard.models.enums import MessageRole
from audit_dashboard.models.llm import GenerateOptions, Message

logger = setup_logger(__name__)

DEFAULT_ANTHROPIC_BASE_URL = "https://api.anthropic.com/v1"
ANTHROPIC_VERSION = "2023-06-01"


class AnthropicProvider(ILLMProvider):
    """Provider for Claude models over the Messages API."""

    def __init__(
        self,
        model: str,
        api_key: str,
        base_url: Optional[str] = None,
        timeout: float = 120.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._model = model
        self._api_key = api_key
        self._base_url = (base_url or DEFAULT_ANTHROPIC_BASE_URL).rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def get_model_name(self) -> str:
        return f"Anthropic ({self._model})"

    def _build_payload(
        self,
        messages: Sequence[Message],
        options: GenerateOptions,
    ) -> dict[str, Any]:
        system, turns = split_system(ensure_messages(messages))
        payload: dict[str, Any] = {
            "model": self._model,
            "max_tokens": options.max_output_tokens or DEFAULT_MAX_OUTPUT_TOKENS,
            "messages": [
                {
                    "role": "assistant" if m.role == MessageRole.ASSISTANT else "user",
                    "content": m.content,
                }
                for m in turns
            ],
        }
        if system:
            payload["system"] = system
        # Sampling knobs are sent only when the caller sets them
        if options.temperature is not None:
            payload["temperature"] = options.temperature
        if options.top_p is not None:
            payload["top_p"] = options.top_p
        if options.top_k is not None:
            payload["top_k"] = options.top_k
        return payload

    async def generate(
        self,
        messages: Sequence[Message],
        options: Optional[GenerateOptions] = None,
    ) -> str:
        payload = self._build_payload(messages, options or GenerateOptions())
        headers = {
            "x-api-key": self._api_key,
            "anthropic-version": ANTHROPIC_VERSION,
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(
                    f"{self._base_url}/messages",
                    json=payload,
                    headers=headers,
                )
        except httpx.HTTPError as e:
            logger.warning(f"Anthropic request failed: {e}")
            raise LLMError(f"Anthropic request failed: {e}") from e

        if response.status_code >= 400:
            raise LLMError(
                error_message_from_response(response, "Anthropic"),
                status_code=response.status_code,
            )

        data = response.json()
        for block in data.get("content") or []:
            if block.get("type") == "text" and block.get("text"):
                return block["text"]
        raise NoContentError("No text content in Anthropic response")
