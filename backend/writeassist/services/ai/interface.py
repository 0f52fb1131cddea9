"""
AI Provider Interface

Abstract base class defining the contract that all AI providers must implement.
"""

from abc import ABC, abstractmethod
from typing import Any

from writeassist.core.models import AnalysisResult, ChatMessage


class AIProviderInterface(ABC):
    """Abstract interface for AI providers.

    All provider adapters (OpenAI, Anthropic, Gemini) must implement this
    interface.
    """

    @abstractmethod
    async def complete(
        self,
        model: str,
        messages: list[ChatMessage],
        api_key: str | None,
    ) -> AnalysisResult | dict[str, Any]:
        """Send one request to the provider and normalize the response.

        Args:
            model: Model id as requested by the client
            messages: Conversation to send, in order
            api_key: Effective key for this call

        Returns:
            Normalized AnalysisResult (or the provider's native body when
            pass-through is enabled)

        Raises:
            ConfigurationError: api_key is empty, nothing was sent
            UpstreamError: the provider answered non-2xx or was unreachable
        """
        pass

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Get the provider name for logging."""
        pass
