"""
Core package initialization.
"""

from writeassist.core.config import Settings, get_settings
from writeassist.core.models import (
    AnalysisRequest,
    AnalysisResult,
    ChatMessage,
    ProviderName,
    SuggestionStatus,
    SuggestionType,
    TextBlock,
    Usage,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Enums
    "ProviderName",
    "SuggestionType",
    "SuggestionStatus",
    # Models
    "ChatMessage",
    "AnalysisRequest",
    "AnalysisResult",
    "TextBlock",
    "Usage",
]
