"""
Core request/response models shared by the gateway and the HTTP layer.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Enums
# =============================================================================


class ProviderName(str, Enum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GEMINI = "gemini"


class SuggestionType(str, Enum):
    GRAMMAR = "grammar"
    SPELLING = "spelling"
    PUNCTUATION = "punctuation"
    STYLE = "style"
    CLARITY = "clarity"


class SuggestionStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


# =============================================================================
# Analysis request / result
# =============================================================================


class ChatMessage(BaseModel):
    """One message of a conversation sent to a provider."""

    role: Literal["user", "assistant"]
    content: str


class AnalysisRequest(BaseModel):
    """Provider-agnostic request accepted by POST /api/analyze."""

    model_config = ConfigDict(populate_by_name=True)

    model: str | None = None
    messages: list[ChatMessage] = Field(default_factory=list)
    client_keys: dict[str, str | None] | None = Field(default=None, alias="clientKeys")


class TextBlock(BaseModel):
    type: Literal["text"] = "text"
    text: str


class Usage(BaseModel):
    input_tokens: int = Field(default=0, ge=0)
    output_tokens: int = Field(default=0, ge=0)


class AnalysisResult(BaseModel):
    """Normalized provider response: {content, model, usage}."""

    content: list[TextBlock]
    model: str
    usage: Usage = Field(default_factory=Usage)

    @property
    def text(self) -> str:
        """First text block; the only one the editor reads."""
        return self.content[0].text if self.content else ""
