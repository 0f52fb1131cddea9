"""
Base Provider Implementation

Common request/response handling shared across all provider adapters:
key precondition, the single HTTP POST, error mapping and logging.
Subclasses only describe their wire format.
"""

from abc import abstractmethod
from typing import Any

import httpx
import structlog

from writeassist.core.exceptions import ConfigurationError, UpstreamError
from writeassist.core.models import AnalysisResult, ChatMessage
from writeassist.services.ai.interface import AIProviderInterface
from writeassist.services.ai.registry import PROVIDERS

logger = structlog.get_logger()


class BaseProvider(AIProviderInterface):
    """Base class for the HTTP provider adapters."""

    # Fixed output cap for every provider and every request
    MAX_OUTPUT_TOKENS = 1000

    # Prefix used in upstream error messages ("OpenAI error 401: ...")
    ERROR_LABEL = "Provider"

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 120.0,
    ):
        """Initialize the adapter.

        Args:
            http_client: Shared client to use; a short-lived one is created
                per call when omitted
            timeout: Timeout in seconds for a self-created client
        """
        self._http_client = http_client
        self._timeout = timeout

    @property
    def env_key(self) -> str:
        return PROVIDERS[self.provider_name].env_key

    @abstractmethod
    def build_request(
        self,
        model: str,
        messages: list[ChatMessage],
        api_key: str,
    ) -> tuple[str, dict[str, str], dict[str, Any]]:
        """Return (url, headers, json body) for one call."""

    @abstractmethod
    def parse_response(self, model: str, data: dict[str, Any]) -> AnalysisResult | dict[str, Any]:
        """Normalize a successful provider response."""

    async def complete(
        self,
        model: str,
        messages: list[ChatMessage],
        api_key: str | None,
    ) -> AnalysisResult | dict[str, Any]:
        if not api_key:
            raise ConfigurationError(f"{self.env_key} is not set", details={"provider": self.provider_name})

        url, headers, body = self.build_request(model, messages, api_key)

        logger.debug(
            "ai_request_start",
            provider=self.provider_name,
            model=model,
            messages=len(messages),
        )

        data = await self._post_json(url, headers, body)
        result = self.parse_response(model, data)

        if isinstance(result, AnalysisResult):
            logger.info(
                "ai_request_success",
                provider=self.provider_name,
                model=result.model,
                input_tokens=result.usage.input_tokens,
                output_tokens=result.usage.output_tokens,
            )
        return result

    async def _post_json(
        self,
        url: str,
        headers: dict[str, str],
        body: dict[str, Any],
    ) -> dict[str, Any]:
        """POST once and return the decoded JSON body of a 2xx response."""
        try:
            if self._http_client is not None:
                response = await self._http_client.post(url, json=body, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.post(url, json=body, headers=headers)
        except httpx.RequestError as e:
            logger.error(
                "ai_upstream_unreachable",
                provider=self.provider_name,
                error=str(e),
            )
            raise UpstreamError(
                502,
                f"{self.ERROR_LABEL} unreachable: {e}",
                provider=self.provider_name,
            ) from e

        if not response.is_success:
            error_text = response.text
            logger.error(
                "ai_upstream_error",
                provider=self.provider_name,
                status=response.status_code,
                reason=response.reason_phrase,
                body=error_text,
            )
            raise UpstreamError(
                response.status_code,
                f"{self.ERROR_LABEL} error {response.status_code}: {error_text}",
                provider=self.provider_name,
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.error(
                "ai_upstream_invalid_json",
                provider=self.provider_name,
                body=response.text[:500],
            )
            raise UpstreamError(
                502,
                f"{self.ERROR_LABEL} returned a non-JSON response",
                provider=self.provider_name,
            ) from e

        if not isinstance(data, dict):
            raise UpstreamError(
                502,
                f"{self.ERROR_LABEL} returned an unexpected response shape",
                provider=self.provider_name,
            )
        return data
