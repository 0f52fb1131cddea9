"""
Unit tests for the provider adapters.

Upstream calls go through an httpx.MockTransport (see conftest.upstream).
"""

import httpx
import pytest

from writeassist.core.exceptions import ConfigurationError, UpstreamError
from writeassist.core.models import AnalysisResult, ChatMessage
from writeassist.services.ai.providers import PROVIDER_REGISTRY
from writeassist.services.ai.providers.anthropic import ANTHROPIC_VERSION, AnthropicProvider
from writeassist.services.ai.providers.google import GeminiProvider, to_gemini_role
from writeassist.services.ai.providers.openai import OpenAIProvider


def user(content: str) -> ChatMessage:
    return ChatMessage(role="user", content=content)


@pytest.mark.asyncio
class TestOpenAIProvider:
    async def test_request_and_normalized_response(self, upstream, http_client):
        upstream.respond(200, {
            "model": "gpt-4.1-nano-2025",
            "choices": [{"message": {"content": "Fixed."}}],
            "usage": {"prompt_tokens": 12, "completion_tokens": 3},
        })
        provider = OpenAIProvider(http_client=http_client)

        result = await provider.complete("gpt-4.1-nano", [user("Fix: teh cat")], "sk-test")

        assert result.model_dump() == {
            "content": [{"type": "text", "text": "Fixed."}],
            "model": "gpt-4.1-nano-2025",
            "usage": {"input_tokens": 12, "output_tokens": 3},
        }
        request = upstream.last
        assert str(request.url) == "https://api.openai.com/v1/chat/completions"
        assert request.headers["authorization"] == "Bearer sk-test"
        assert upstream.last_json() == {
            "model": "gpt-4.1-nano",
            "max_completion_tokens": 1000,
            "messages": [{"role": "user", "content": "Fix: teh cat"}],
        }

    async def test_missing_fields_fall_back(self, upstream, http_client):
        upstream.respond(200, {"choices": []})
        provider = OpenAIProvider(http_client=http_client)

        result = await provider.complete("gpt-4o-mini", [user("hi")], "sk-test")

        assert result.text == ""
        assert result.model == "gpt-4o-mini"
        assert result.usage.input_tokens == 0
        assert result.usage.output_tokens == 0

    async def test_missing_key_makes_no_request(self, upstream, http_client):
        provider = OpenAIProvider(http_client=http_client)

        with pytest.raises(ConfigurationError) as exc_info:
            await provider.complete("gpt-4.1-nano", [user("hi")], None)

        assert "OPENAI_API_KEY" in exc_info.value.message
        assert upstream.requests == []

    async def test_empty_key_counts_as_missing(self, upstream, http_client):
        provider = OpenAIProvider(http_client=http_client)

        with pytest.raises(ConfigurationError):
            await provider.complete("gpt-4.1-nano", [user("hi")], "")

        assert upstream.requests == []

    async def test_error_status_carries_upstream_body(self, upstream, http_client):
        upstream.respond(401, text='{"error": "bad key"}')
        provider = OpenAIProvider(http_client=http_client)

        with pytest.raises(UpstreamError) as exc_info:
            await provider.complete("gpt-4.1-nano", [user("hi")], "sk-wrong")

        error = exc_info.value
        assert error.status_code == 401
        assert error.provider == "openai"
        assert error.message.startswith("OpenAI error 401:")
        assert "bad key" in error.message
        assert error.is_client_error

    async def test_transport_failure_is_bad_gateway(self, upstream, http_client):
        upstream.error = httpx.ConnectError("connection refused")
        provider = OpenAIProvider(http_client=http_client)

        with pytest.raises(UpstreamError) as exc_info:
            await provider.complete("gpt-4.1-nano", [user("hi")], "sk-test")

        assert exc_info.value.status_code == 502
        assert not exc_info.value.is_client_error

    async def test_non_json_success_is_bad_gateway(self, upstream, http_client):
        upstream.respond(200, text="<html>oops</html>")
        provider = OpenAIProvider(http_client=http_client)

        with pytest.raises(UpstreamError) as exc_info:
            await provider.complete("gpt-4.1-nano", [user("hi")], "sk-test")

        assert exc_info.value.status_code == 502


@pytest.mark.asyncio
class TestAnthropicProvider:
    NATIVE_BODY = {
        "id": "msg_01",
        "type": "message",
        "model": "claude-haiku-4-5-20251001",
        "content": [
            {"type": "text", "text": "First. "},
            {"type": "text", "text": "Second."},
        ],
        "usage": {"input_tokens": 20, "output_tokens": 5},
    }

    async def test_request_shape(self, upstream, http_client):
        upstream.respond(200, self.NATIVE_BODY)
        provider = AnthropicProvider(http_client=http_client)

        await provider.complete("claude-haiku-4-5-20251001", [user("hello")], "sk-ant")

        request = upstream.last
        assert str(request.url) == "https://api.anthropic.com/v1/messages"
        assert request.headers["x-api-key"] == "sk-ant"
        assert request.headers["anthropic-version"] == ANTHROPIC_VERSION
        assert "authorization" not in request.headers
        assert upstream.last_json() == {
            "model": "claude-haiku-4-5-20251001",
            "max_tokens": 1000,
            "messages": [{"role": "user", "content": "hello"}],
        }

    async def test_normalized_response(self, upstream, http_client):
        upstream.respond(200, self.NATIVE_BODY)
        provider = AnthropicProvider(http_client=http_client)

        result = await provider.complete("claude-haiku-4-5-20251001", [user("hello")], "sk-ant")

        assert isinstance(result, AnalysisResult)
        assert result.text == "First. Second."
        assert result.model == "claude-haiku-4-5-20251001"
        assert result.usage.input_tokens == 20
        assert result.usage.output_tokens == 5

    async def test_raw_response_passes_body_through(self, upstream, http_client):
        upstream.respond(200, self.NATIVE_BODY)
        provider = AnthropicProvider(http_client=http_client, raw_response=True)

        result = await provider.complete("claude-haiku-4-5-20251001", [user("hello")], "sk-ant")

        assert result == self.NATIVE_BODY

    async def test_error_label(self, upstream, http_client):
        upstream.respond(529, text="overloaded")
        provider = AnthropicProvider(http_client=http_client)

        with pytest.raises(UpstreamError) as exc_info:
            await provider.complete("claude-haiku-4-5-20251001", [user("hello")], "sk-ant")

        assert exc_info.value.status_code == 529
        assert exc_info.value.message == "Anthropic error 529: overloaded"

    async def test_missing_key_names_env_var(self, upstream, http_client):
        provider = AnthropicProvider(http_client=http_client)

        with pytest.raises(ConfigurationError) as exc_info:
            await provider.complete("claude-haiku-4-5-20251001", [user("hello")], None)

        assert exc_info.value.message == "ANTHROPIC_API_KEY is not set"


class TestGeminiProvider:
    @pytest.mark.asyncio
    async def test_request_shape_maps_roles(self, upstream, http_client):
        upstream.respond(200, {
            "candidates": [{"content": {"parts": [{"text": "Looks good."}]}}],
            "usageMetadata": {"promptTokenCount": 7, "candidatesTokenCount": 2},
        })
        provider = GeminiProvider(http_client=http_client)
        messages = [
            user("Check this"),
            ChatMessage(role="assistant", content="Which part?"),
            user("All of it"),
        ]

        result = await provider.complete("gemini-2.5-flash", messages, "g-key")

        request = upstream.last
        assert str(request.url) == (
            "https://generativelanguage.googleapis.com/v1/models/gemini-2.5-flash:generateContent"
        )
        assert request.headers["x-goog-api-key"] == "g-key"
        assert "key=" not in str(request.url)

        body = upstream.last_json()
        assert [c["role"] for c in body["contents"]] == ["user", "model", "user"]
        assert body["contents"][1]["parts"] == [{"text": "Which part?"}]
        assert body["generationConfig"] == {"maxOutputTokens": 1000}

        assert result.text == "Looks good."
        assert result.model == "gemini-2.5-flash"
        assert result.usage.input_tokens == 7
        assert result.usage.output_tokens == 2

    @pytest.mark.asyncio
    async def test_empty_candidates(self, upstream, http_client):
        upstream.respond(200, {"candidates": []})
        provider = GeminiProvider(http_client=http_client)

        result = await provider.complete("gemini-2.5-flash-lite", [user("hi")], "g-key")

        assert result.text == ""
        assert result.usage.input_tokens == 0

    def test_role_mapping(self):
        assert to_gemini_role("assistant") == "model"
        assert to_gemini_role("user") == "user"


class TestProviderRegistry:
    def test_one_adapter_per_provider(self):
        assert set(PROVIDER_REGISTRY) == {"openai", "anthropic", "gemini"}
        for name, provider_class in PROVIDER_REGISTRY.items():
            assert provider_class().provider_name == name
