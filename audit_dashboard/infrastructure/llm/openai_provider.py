"""
OpenAI-compatible chat completions provider.

Also serves "custom" endpoints: any server that speaks the
``/chat/completions`` protocol can be reached through ``base_url``.
"""

from typing import Any, Optional, Sequence

import httpx

from audit_dashboard.core.exceptions import LLMError, NoContentError
from audit_dashboard.core.logger import setup_logger
from audit_dashboard.infrastructure.llm.base import (
    DEFAULT_MAX_OUTPUT_TOKENS,
    DEFAULT_TEMPERATURE,
    ensure_messages,
    error_message_from_response,
)
from audit_dashboard.interfaces.llm_provider import ILLMProvider
from audit_dashboard.models.llm import GenerateOptions, Message

logger = setup_logger(__name__)

DEFAULT_OPENAI_BASE_URL = "https://api.openai.com/v1"


class OpenAIProvider(ILLMProvider):
    """Provider for the OpenAI chat completions API."""

    def __init__(
        self,
        model: str,
        api_key: str,
        base_url: Optional[str] = None,
        timeout: float = 120.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize OpenAI provider.

        Args:
            model: Model identifier (e.g., "gpt-4o")
            api_key: Bearer token
            base_url: Custom endpoint root, including any ``/v1`` suffix
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests inject a mock)
        """
        self._model = model
        self._api_key = api_key
        self._base_url = (base_url or DEFAULT_OPENAI_BASE_URL).rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def get_model_name(self) -> str:
        if self._base_url != DEFAULT_OPENAI_BASE_URL:
            return f"OpenAI ({self._model} @ {self._base_url})"
        return f"OpenAI ({self._model})"

    def _build_payload(
        self,
        messages: Sequence[Message],
        options: GenerateOptions,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": self._model,
            "messages": [
                {"role": m.role.value, "content": m.content}
                for m in ensure_messages(messages)
            ],
            "max_tokens": options.max_output_tokens or DEFAULT_MAX_OUTPUT_TOKENS,
            "temperature": (
                options.temperature if options.temperature is not None else DEFAULT_TEMPERATURE
            ),
        }
        if options.top_p is not None:
            payload["top_p"] = options.top_p
        return payload

    async def generate(
        self,
        messages: Sequence[Message],
        options: Optional[GenerateOptions] = None,
    ) -> str:
        payload = self._build_payload(messages, options or GenerateOptions())
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(
                    f"{self._base_url}/chat/completions",
                    json=payload,
                    headers=headers,
                )
        except httpx.HTTPError as e:
            logger.warning(f"OpenAI request failed: {e}")
            raise LLMError(f"OpenAI request failed: {e}") from e

        if response.status_code >= 400:
            raise LLMError(
                error_message_from_response(response, "OpenAI"),
                status_code=response.status_code,
            )

        data = response.json()
        choices = data.get("choices") or []
        content = None
        if choices:
            content = (choices[0].get("message") or {}).get("content")
        if not content:
            raise NoContentError("No content in OpenAI response")
        return content
