"""
Google Gemini Provider

Adapter for the Generative Language API (generateContent) using an API key.
"""

from typing import Any

from writeassist.core.models import AnalysisResult, ChatMessage, TextBlock, Usage
from writeassist.services.ai.providers.base import BaseProvider


def to_gemini_role(role: str) -> str:
    """Gemini calls the assistant "model"; everything else is sent as "user"."""
    return "model" if role == "assistant" else "user"


def to_gemini_contents(messages: list[ChatMessage]) -> list[dict[str, Any]]:
    return [
        {"role": to_gemini_role(m.role), "parts": [{"text": m.content}]}
        for m in messages
    ]


class GeminiProvider(BaseProvider):
    """Gemini provider adapter.

    The model goes into the URL path and the key into the ``x-goog-api-key``
    header. Gemini does not echo the model back, so the requested id is
    reported.
    """

    API_BASE = "https://generativelanguage.googleapis.com/v1/models"
    ERROR_LABEL = "Gemini"

    @property
    def provider_name(self) -> str:
        return "gemini"

    def build_request(
        self,
        model: str,
        messages: list[ChatMessage],
        api_key: str,
    ) -> tuple[str, dict[str, str], dict[str, Any]]:
        url = f"{self.API_BASE}/{model}:generateContent"
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": api_key,
        }
        body = {
            "contents": to_gemini_contents(messages),
            "generationConfig": {"maxOutputTokens": self.MAX_OUTPUT_TOKENS},
        }
        return url, headers, body

    def parse_response(self, model: str, data: dict[str, Any]) -> AnalysisResult:
        # Gemini response: {"candidates": [{"content": {"parts": [{"text": "..."}]}}]}
        text = ""
        candidates = data.get("candidates") or []
        if candidates:
            parts = (candidates[0].get("content") or {}).get("parts") or []
            if parts:
                text = parts[0].get("text") or ""

        usage = data.get("usageMetadata") or {}
        return AnalysisResult(
            content=[TextBlock(text=text)],
            model=model,
            usage=Usage(
                input_tokens=usage.get("promptTokenCount") or 0,
                output_tokens=usage.get("candidatesTokenCount") or 0,
            ),
        )
