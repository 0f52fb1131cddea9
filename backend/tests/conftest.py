"""
Pytest configuration and fixtures for Writing Assistant tests.
"""

import json
from collections.abc import AsyncGenerator
from typing import Any

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from writeassist.api.main import create_app
from writeassist.core.config import Settings


def make_settings(**overrides: Any) -> Settings:
    """Settings that ignore the developer's environment and .env file."""
    values: dict[str, Any] = {
        "openai_api_key": None,
        "anthropic_api_key": None,
        "gemini_api_key": None,
        "allowed_origin": None,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class UpstreamStub:
    """Stands in for the provider APIs behind an httpx.MockTransport.

    Records every request and answers with the configured status/payload,
    or raises ``error`` to simulate a transport failure.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.payload: Any = {}
        self.text: str | None = None
        self.error: Exception | None = None

    def respond(self, status_code: int = 200, payload: Any = None, text: str | None = None) -> None:
        self.status_code = status_code
        self.payload = payload if payload is not None else {}
        self.text = text

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> dict[str, Any]:
        return json.loads(self.last.content)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def upstream() -> UpstreamStub:
    return UpstreamStub()


@pytest_asyncio.fixture
async def http_client(upstream: UpstreamStub) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Upstream client wired to the stub instead of the network."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(upstream)) as client:
        yield client


@pytest.fixture
def app(settings: Settings, http_client: httpx.AsyncClient) -> FastAPI:
    application = create_app(settings)
    application.state.http_client = http_client
    return application


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for testing against the ASGI app."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def settings_factory():
    """Build Settings with explicit overrides, e.g. settings_factory(openai_api_key="k")."""
    return make_settings
