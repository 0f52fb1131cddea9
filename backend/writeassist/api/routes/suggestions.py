"""
Suggestion endpoints.

Routes:
- POST /api/suggest              - Analyze text and return parsed suggestions
- POST /api/suggestions/apply    - Apply accepted suggestions to a text
"""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from writeassist.api.deps import get_suggest_service
from writeassist.core.logging import enrich_event
from writeassist.services.suggestions import (
    ApplyResult,
    Language,
    SuggestResult,
    SuggestService,
    Suggestion,
    apply_suggestions,
)

logger = structlog.get_logger()

router = APIRouter()


# =============================================================================
# Request Models
# =============================================================================


class SuggestRequest(BaseModel):
    """Text to analyze, with an optional model and client keys."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    text: str = Field(..., min_length=1)
    model: str | None = None
    client_keys: dict[str, str | None] | None = Field(default=None, alias="clientKeys")
    language: Language = "en"


class ApplyRequest(BaseModel):
    """Source text plus suggestions with their accept/reject decisions."""

    text: str
    suggestions: list[Suggestion]


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/api/suggest")
async def suggest(
    payload: SuggestRequest,
    service: Annotated[SuggestService, Depends(get_suggest_service)],
) -> SuggestResult:
    enrich_event(ai={"model": payload.model, "text_len": len(payload.text)})

    result = await service.suggest(
        payload.text,
        model=payload.model,
        client_keys=payload.client_keys,
        language=payload.language,
    )

    enrich_event(**{"ai.suggestions": len(result.suggestions)})
    return result


@router.post("/api/suggestions/apply")
async def apply(payload: ApplyRequest) -> ApplyResult:
    return apply_suggestions(payload.text, payload.suggestions)
