"""
Stand-in provider used when no usable LLM configuration exists.

It performs no I/O and always answers with the same guidance message.
"""

from typing import Optional, Sequence

from audit_dashboard.interfaces.llm_provider import ILLMProvider
from audit_dashboard.models.llm import GenerateOptions, Message

UNCONFIGURED_MESSAGE = (
    "AI is not configured. Please configure an AI provider "
    "(provider, model, and API key) in the settings."
)


class NoOpProvider(ILLMProvider):
    """Provider that never calls out and explains how to configure one."""

    def __init__(self, message: str = UNCONFIGURED_MESSAGE):
        self._message = message

    async def generate(
        self,
        messages: Sequence[Message],
        options: Optional[GenerateOptions] = None,
    ) -> str:
        return self._message

    def get_model_name(self) -> str:
        return "not configured"
