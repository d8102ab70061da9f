"""
Enum definitions for the application.
"""

from enum import Enum


class ConfigKind(str, Enum):
    """Kind of credential record held in a browser session."""

    UPSTREAM = "upstream"
    LLM = "llm"


class ProviderFamily(str, Enum):
    """
    Text-generation backend family.

    Each family has exactly one adapter implementation.
    """

    GEMINI = "gemini"
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    LITELLM = "litellm"


class MessageRole(str, Enum):
    """Role of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class ExportFormat(str, Enum):
    """Audit log export file format."""

    JSON = "json"
    CSV = "csv"
