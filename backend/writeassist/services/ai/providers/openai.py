"""
OpenAI Provider

Adapter for the OpenAI Chat Completions API (GPT and o-series models).
"""

from typing import Any

from writeassist.core.models import AnalysisResult, ChatMessage, TextBlock, Usage
from writeassist.services.ai.providers.base import BaseProvider


class OpenAIProvider(BaseProvider):
    """OpenAI provider adapter.

    Messages are passed through unchanged. The reported model is the one
    OpenAI echoes back, which may be a dated snapshot of the requested id.
    """

    API_URL = "https://api.openai.com/v1/chat/completions"
    ERROR_LABEL = "OpenAI"

    @property
    def provider_name(self) -> str:
        return "openai"

    def build_request(
        self,
        model: str,
        messages: list[ChatMessage],
        api_key: str,
    ) -> tuple[str, dict[str, str], dict[str, Any]]:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
        }
        body = {
            "model": model,
            "max_completion_tokens": self.MAX_OUTPUT_TOKENS,
            "messages": [m.model_dump() for m in messages],
        }
        return self.API_URL, headers, body

    def parse_response(self, model: str, data: dict[str, Any]) -> AnalysisResult:
        text = ""
        choices = data.get("choices") or []
        if choices:
            message = choices[0].get("message") or {}
            text = message.get("content") or ""

        usage = data.get("usage") or {}
        return AnalysisResult(
            content=[TextBlock(text=text)],
            model=data.get("model") or model,
            usage=Usage(
                input_tokens=usage.get("prompt_tokens") or 0,
                output_tokens=usage.get("completion_tokens") or 0,
            ),
        )
