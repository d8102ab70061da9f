"""
LiteLLM provider.

Reaches Bedrock, Azure, Ollama and other backends through LiteLLM's
unified completion API. ``base_url`` is passed as ``api_base`` for proxy
servers (do NOT include a /v1 suffix; LiteLLM adds it).
"""

import os
from typing import Any, Optional, Sequence

from audit_dashboard.core.config import get_settings
from audit_dashboard.core.exceptions import LLMError, NoContentError
from audit_dashboard.core.logger import setup_logger
from audit_dashboard.infrastructure.llm.base import (
    DEFAULT_MAX_OUTPUT_TOKENS,
    DEFAULT_TEMPERATURE,
    ensure_messages,
)
from audit_dashboard.interfaces.llm_provider import ILLMProvider
from audit_dashboard.models.llm import GenerateOptions, Message

logger = setup_logger(__name__)


class LiteLLMProvider(ILLMProvider):
    """LiteLLM provider with custom endpoint support."""

    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: float = 120.0,
    ):
        self._model = model
        self._api_key = api_key or None
        self._api_base = base_url or None
        self._timeout = timeout

        if get_settings().DEBUG:
            os.environ["LITELLM_LOG"] = "DEBUG"

    def get_model_name(self) -> str:
        if self._api_base:
            return f"LiteLLM ({self._model} @ {self._api_base})"
        return f"LiteLLM ({self._model})"

    async def generate(
        self,
        messages: Sequence[Message],
        options: Optional[GenerateOptions] = None,
    ) -> str:
        import litellm

        options = options or GenerateOptions()
        kwargs: dict[str, Any] = {
            "model": self._model,
            "messages": [
                {"role": m.role.value, "content": m.content}
                for m in ensure_messages(messages)
            ],
            "max_tokens": options.max_output_tokens or DEFAULT_MAX_OUTPUT_TOKENS,
            "temperature": (
                options.temperature if options.temperature is not None else DEFAULT_TEMPERATURE
            ),
            "timeout": self._timeout,
        }
        if options.top_p is not None:
            kwargs["top_p"] = options.top_p
        if self._api_base:
            kwargs["api_base"] = self._api_base
        if self._api_key:
            kwargs["api_key"] = self._api_key

        try:
            response = await litellm.acompletion(**kwargs)
        except Exception as e:
            logger.warning(f"LiteLLM request failed: {e}")
            raise LLMError(str(e) or "LiteLLM request failed", status_code=getattr(e, "status_code", None)) from e

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError):
            content = None
        if not content:
            raise NoContentError("No content in LiteLLM response")
        return content
