"""
FastAPI dependencies.
"""

from typing import Annotated

import httpx
from fastapi import Depends, Request

from writeassist.core.config import Settings
from writeassist.services.ai.gateway import AIGateway
from writeassist.services.suggestions import SuggestService


def get_app_settings(request: Request) -> Settings:
    """Settings the app was created with."""
    return request.app.state.settings


def get_http_client(request: Request) -> httpx.AsyncClient | None:
    """Shared upstream client, set up by the lifespan handler."""
    return getattr(request.app.state, "http_client", None)


def get_gateway(
    settings: Annotated[Settings, Depends(get_app_settings)],
    http_client: Annotated[httpx.AsyncClient | None, Depends(get_http_client)],
) -> AIGateway:
    return AIGateway(settings, http_client=http_client)


def get_suggest_service(
    gateway: Annotated[AIGateway, Depends(get_gateway)],
) -> SuggestService:
    return SuggestService(gateway)
