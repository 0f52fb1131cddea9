"""
Provider proxy endpoints.

Routes:
- GET     /api/providers   - Which providers have a server-side key
- POST    /api/analyze     - Dispatch an analysis request to its provider
- OPTIONS on both          - Empty 200 for clients that probe before calling
"""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Request, Response
from pydantic import ValidationError

from writeassist.api.deps import get_app_settings, get_gateway
from writeassist.core.config import Settings
from writeassist.core.exceptions import MalformedRequestError
from writeassist.core.logging import enrich_event
from writeassist.core.models import AnalysisRequest, AnalysisResult
from writeassist.core.parsers import parse_json_body
from writeassist.services.ai.classifier import classify
from writeassist.services.ai.gateway import AIGateway
from writeassist.services.ai.registry import available_providers

logger = structlog.get_logger()

router = APIRouter()


def parse_analysis_request(body: dict) -> AnalysisRequest:
    """Validate a decoded body against the analysis request shape."""
    try:
        return AnalysisRequest.model_validate(body)
    except ValidationError as e:
        raise MalformedRequestError(
            "Invalid request body",
            details={"errors": e.errors(include_url=False, include_context=False)},
        ) from e


@router.options("/api/providers", include_in_schema=False)
async def providers_options() -> Response:
    return Response(status_code=200)


@router.get("/api/providers")
async def list_available_providers(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> dict[str, bool]:
    """Server-side key presence per provider."""
    return available_providers(settings)


@router.options("/api/analyze", include_in_schema=False)
async def analyze_options() -> Response:
    return Response(status_code=200)


@router.post("/api/analyze")
async def analyze(
    request: Request,
    gateway: Annotated[AIGateway, Depends(get_gateway)],
):
    """Send {model, messages, clientKeys} to the provider the model belongs to.

    The body is parsed by hand so that a missing or broken body gets the
    same 400 messages regardless of Content-Type.
    """
    body = parse_json_body(await request.body())
    analysis_request = parse_analysis_request(body)

    enrich_event(ai={
        "model": analysis_request.model,
        "provider": classify(analysis_request.model),
        "messages": len(analysis_request.messages),
        "client_key": any((analysis_request.client_keys or {}).values()),
    })

    result = await gateway.analyze(analysis_request)

    if isinstance(result, AnalysisResult):
        enrich_event(**{
            "ai.reported_model": result.model,
            "ai.input_tokens": result.usage.input_tokens,
            "ai.output_tokens": result.usage.output_tokens,
        })
        return result.model_dump()
    return result
