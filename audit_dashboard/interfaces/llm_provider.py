"""
LLM provider interface.

Defines the contract every text-generation adapter fulfils.
Implementations: Gemini, OpenAI-compatible, Anthropic, LiteLLM, and a no-op stub.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from audit_dashboard.models.llm import GenerateOptions, Message


class ILLMProvider(ABC):
    """Abstract interface for LLM providers."""

    @abstractmethod
    async def generate(
        self,
        messages: Sequence[Message],
        options: Optional[GenerateOptions] = None,
    ) -> str:
        """
        Generate text for a conversation.

        Args:
            messages: Ordered conversation using the user/assistant/system roles.
                An empty sequence is treated as a single empty user message.
            options: Optional generation knobs

        Returns:
            First text span of the provider response

        Raises:
            NoContentError: The response carried no text
            LLMError: The provider call failed
        """
        pass

    @abstractmethod
    def get_model_name(self) -> str:
        """
        Get the human-readable model name.

        Returns:
            Model name string for logging/display
        """
        pass
