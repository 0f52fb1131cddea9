"""
AI Gateway

Single dispatch point used by every HTTP entry point:
- Classify the model id to pick a provider
- Resolve the API key (client key over server key)
- Invoke the provider adapter once, no retries
"""

from typing import Any

import httpx
import structlog

from writeassist.core.config import Settings
from writeassist.core.exceptions import UnknownModelError
from writeassist.core.models import AnalysisRequest, AnalysisResult
from writeassist.services.ai.classifier import classify
from writeassist.services.ai.keys import resolve_key
from writeassist.services.ai.providers import (
    PROVIDER_REGISTRY,
    AnthropicProvider,
    BaseProvider,
)

logger = structlog.get_logger()


class AIGateway:
    """Routes analysis requests to the matching provider adapter.

    Holds no state between calls beyond its configuration.
    """

    def __init__(
        self,
        settings: Settings,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize gateway.

        Args:
            settings: Settings holding server-side keys and upstream options
            http_client: Optional shared HTTP client handed to the adapters
        """
        self.settings = settings
        self.http_client = http_client

    def _create_provider(self, provider: str) -> BaseProvider:
        """Create adapter instance for a provider name.

        Raises:
            ValueError: If provider name has no adapter
        """
        provider_class = PROVIDER_REGISTRY.get(provider)
        if not provider_class:
            raise ValueError(f"Unknown provider type: {provider}")

        kwargs: dict[str, Any] = {
            "http_client": self.http_client,
            "timeout": self.settings.upstream_timeout,
        }
        if provider_class is AnthropicProvider:
            kwargs["raw_response"] = self.settings.anthropic_raw_response
        return provider_class(**kwargs)

    async def analyze(self, request: AnalysisRequest) -> AnalysisResult | dict[str, Any]:
        """Dispatch one analysis request.

        Raises:
            UnknownModelError: If the model id matches no provider
            ConfigurationError: If no key could be resolved
            UpstreamError: If the provider call failed
        """
        provider = classify(request.model)
        if provider is None:
            logger.info("ai_unknown_model", model=request.model)
            raise UnknownModelError(request.model)

        api_key = resolve_key(provider, request.client_keys, self.settings)
        adapter = self._create_provider(provider)

        return await adapter.complete(request.model, request.messages, api_key)


def get_ai_gateway(
    settings: Settings,
    http_client: httpx.AsyncClient | None = None,
) -> AIGateway:
    """Build a gateway for the given settings."""
    return AIGateway(settings, http_client=http_client)
