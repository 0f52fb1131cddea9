"""
Unit tests for AIGateway dispatch.
"""

import pytest

from writeassist.core.exceptions import ConfigurationError, UnknownModelError
from writeassist.core.models import AnalysisRequest, AnalysisResult, ChatMessage
from writeassist.services.ai.gateway import AIGateway, get_ai_gateway


OPENAI_OK = {
    "model": "gpt-4.1-nano",
    "choices": [{"message": {"content": "ok"}}],
    "usage": {"prompt_tokens": 1, "completion_tokens": 1},
}


def make_request(model, client_keys=None) -> AnalysisRequest:
    return AnalysisRequest(
        model=model,
        messages=[ChatMessage(role="user", content="hello")],
        client_keys=client_keys,
    )


@pytest.mark.asyncio
class TestAIGateway:
    async def test_unknown_model(self, settings, upstream, http_client):
        gateway = AIGateway(settings, http_client=http_client)

        with pytest.raises(UnknownModelError) as exc_info:
            await gateway.analyze(make_request("unknown-model-xyz", {"openai": "k"}))

        assert "unknown-model-xyz" in exc_info.value.message
        assert exc_info.value.status_code == 400
        assert upstream.requests == []

    async def test_missing_model(self, settings, http_client):
        gateway = AIGateway(settings, http_client=http_client)

        with pytest.raises(UnknownModelError):
            await gateway.analyze(make_request(None))

    async def test_no_key_fails_before_network(self, settings, upstream, http_client):
        gateway = AIGateway(settings, http_client=http_client)

        with pytest.raises(ConfigurationError):
            await gateway.analyze(make_request("gpt-4.1-nano"))

        assert upstream.requests == []

    async def test_client_key_is_used(self, settings_factory, upstream, http_client):
        upstream.respond(200, OPENAI_OK)
        gateway = AIGateway(settings_factory(openai_api_key="server"), http_client=http_client)

        result = await gateway.analyze(make_request("gpt-4.1-nano", {"openai": "client"}))

        assert isinstance(result, AnalysisResult)
        assert upstream.last.headers["authorization"] == "Bearer client"

    async def test_server_key_is_used(self, settings_factory, upstream, http_client):
        upstream.respond(200, OPENAI_OK)
        gateway = get_ai_gateway(settings_factory(openai_api_key="server"), http_client=http_client)

        await gateway.analyze(make_request("o3-mini"))

        assert upstream.last.headers["authorization"] == "Bearer server"

    async def test_routes_by_prefix(self, settings_factory, upstream, http_client):
        upstream.respond(200, {"candidates": []})
        gateway = AIGateway(settings_factory(gemini_api_key="g"), http_client=http_client)

        await gateway.analyze(make_request("gemini-2.5-flash"))

        assert upstream.last.url.host == "generativelanguage.googleapis.com"
        assert len(upstream.requests) == 1

    async def test_anthropic_raw_setting(self, settings_factory, upstream, http_client):
        native = {"content": [{"type": "text", "text": "x"}], "model": "claude-haiku-4-5-20251001"}
        upstream.respond(200, native)
        settings = settings_factory(anthropic_api_key="a", anthropic_raw_response=True)
        gateway = AIGateway(settings, http_client=http_client)

        result = await gateway.analyze(make_request("claude-haiku-4-5-20251001"))

        assert result == native


class TestCreateProvider:
    def test_unknown_provider_type(self, settings):
        gateway = AIGateway(settings)

        with pytest.raises(ValueError):
            gateway._create_provider("mistral")
