"""
Google Gemini provider using the google-genai SDK.

Roles are mapped to Gemini's user/model vocabulary; system messages are
passed as ``system_instruction``.
"""

from typing import Any, Optional, Sequence

from google import genai
from google.genai import errors as genai_errors
from google.genai.types import Content, GenerateContentConfig, HttpOptions, Part

from audit_dashboard.core.exceptions import LLMError, NoContentError
from audit_dashboard.core.logger import setup_logger
from audit_dashboard.infrastructure.llm.base import (
    DEFAULT_MAX_OUTPUT_TOKENS,
    DEFAULT_TEMPERATURE,
    ensure_messages,
    split_system,
)
from audit_dashboard.interfaces.llm_provider import ILLMProvider
from audit_dashboard.models.enums import MessageRole
from audit_dashboard.models.llm import GenerateOptions, Message

logger = setup_logger(__name__)

DEFAULT_TOP_P = 0.9
DEFAULT_TOP_K = 40


def _extract_text(response: Any) -> Optional[str]:
    text = getattr(response, "text", None)
    if text:
        return text
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return None
    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []
    if not parts:
        return None
    return getattr(parts[0], "text", None)


class GeminiProvider(ILLMProvider):
    """Provider for Gemini models via an API key."""

    def __init__(
        self,
        model: str,
        api_key: str,
        timeout: float = 120.0,
        client: Optional[genai.Client] = None,
    ):
        """
        Initialize Gemini provider.

        Args:
            model: Gemini model name (e.g., "gemini-2.0-flash")
            api_key: Google AI Studio API key
            timeout: Request timeout in seconds
            client: Pre-built client (tests inject a stub)
        """
        self._model = model
        self._client = client or genai.Client(
            api_key=api_key,
            http_options=HttpOptions(timeout=int(timeout * 1000)),
        )

    def get_model_name(self) -> str:
        return f"Gemini ({self._model})"

    def _build_request(
        self,
        messages: Sequence[Message],
        options: GenerateOptions,
    ) -> tuple[list[Content], GenerateContentConfig]:
        system, turns = split_system(ensure_messages(messages))
        contents = [
            Content(
                role="model" if m.role == MessageRole.ASSISTANT else "user",
                parts=[Part(text=m.content)],
            )
            for m in turns
        ]

        config_kwargs: dict[str, Any] = {
            "max_output_tokens": options.max_output_tokens or DEFAULT_MAX_OUTPUT_TOKENS,
            "temperature": (
                options.temperature if options.temperature is not None else DEFAULT_TEMPERATURE
            ),
            "top_p": options.top_p if options.top_p is not None else DEFAULT_TOP_P,
            "top_k": options.top_k if options.top_k is not None else DEFAULT_TOP_K,
        }
        if system:
            config_kwargs["system_instruction"] = system
        return contents, GenerateContentConfig(**config_kwargs)

    async def generate(
        self,
        messages: Sequence[Message],
        options: Optional[GenerateOptions] = None,
    ) -> str:
        contents, config = self._build_request(messages, options or GenerateOptions())

        try:
            response = await self._client.aio.models.generate_content(
                model=self._model,
                contents=contents,
                config=config,
            )
        except genai_errors.APIError as e:
            message = getattr(e, "message", None) or f"Gemini API error: {e.code}"
            raise LLMError(message, status_code=e.code) from e
        except Exception as e:
            logger.warning(f"Gemini request failed: {e}")
            raise LLMError(f"Gemini request failed: {e}") from e

        text = _extract_text(response)
        if not text:
            raise NoContentError("No content in Gemini response")
        return text
