"""
Anthropic Provider

Adapter for the Anthropic Messages API (Claude models).
"""

from typing import Any

from writeassist.core.models import AnalysisResult, ChatMessage, TextBlock, Usage
from writeassist.services.ai.providers.base import BaseProvider

ANTHROPIC_VERSION = "2023-06-01"


class AnthropicProvider(BaseProvider):
    """Anthropic provider adapter.

    The response is normalized like the other adapters. With ``raw_response``
    the native Messages API body is returned untouched instead, which is
    what older clients of this proxy received.
    """

    API_URL = "https://api.anthropic.com/v1/messages"
    ERROR_LABEL = "Anthropic"

    def __init__(self, *args: Any, raw_response: bool = False, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.raw_response = raw_response

    @property
    def provider_name(self) -> str:
        return "anthropic"

    def build_request(
        self,
        model: str,
        messages: list[ChatMessage],
        api_key: str,
    ) -> tuple[str, dict[str, str], dict[str, Any]]:
        headers = {
            "Content-Type": "application/json",
            "x-api-key": api_key,
            "anthropic-version": ANTHROPIC_VERSION,
        }
        body = {
            "model": model,
            "max_tokens": self.MAX_OUTPUT_TOKENS,
            "messages": [m.model_dump() for m in messages],
        }
        return self.API_URL, headers, body

    def parse_response(self, model: str, data: dict[str, Any]) -> AnalysisResult | dict[str, Any]:
        if self.raw_response:
            return data
        return normalize_message(model, data)


def normalize_message(model: str, data: dict[str, Any]) -> AnalysisResult:
    """Convert a native Messages API body into an AnalysisResult."""
    # Anthropic response: {"content": [{"type": "text", "text": "..."}, ...]}
    text = "".join(
        block.get("text") or ""
        for block in data.get("content") or []
        if block.get("type") == "text"
    )
    usage = data.get("usage") or {}
    return AnalysisResult(
        content=[TextBlock(text=text)],
        model=data.get("model") or model,
        usage=Usage(
            input_tokens=usage.get("input_tokens") or 0,
            output_tokens=usage.get("output_tokens") or 0,
        ),
    )
