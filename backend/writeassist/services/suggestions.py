"""
Suggestion Service

Turns a piece of text into reviewable grammar/style suggestions:
- Builds the analysis prompt sent to the model
- Parses the JSON array the model answers with
- Tracks accept/reject decisions
- Applies accepted suggestions as span edits against the original text
"""

import json
import re
from decimal import Decimal
from typing import Any, Literal

import structlog
from pydantic import BaseModel, Field, ValidationError

from writeassist.core.exceptions import InvalidTransitionError, SuggestionParseError
from writeassist.core.models import (
    AnalysisRequest,
    AnalysisResult,
    ChatMessage,
    SuggestionStatus,
    SuggestionType,
    Usage,
)
from writeassist.services.ai.catalog import DEFAULT_MODEL_ID, estimate_cost
from writeassist.services.ai.gateway import AIGateway
from writeassist.services.ai.providers.anthropic import normalize_message

logger = structlog.get_logger()

Language = Literal["en", "ja"]

EXPLANATION_LANGUAGE = {
    "en": "English",
    "ja": "Japanese",
}

ANALYSIS_PROMPT = """You are a professional writing assistant. Analyze the following text and provide suggestions for improvement.

For each suggestion, provide a JSON array where each item has:
- "type": one of "grammar", "spelling", "punctuation", "style", "clarity"
- "original": the exact text that should be changed
- "suggestion": the improved text
- "explanation": brief explanation of the change (in {language})

Respond ONLY with a valid JSON array. No other text.

Text to analyze:
{text}"""

# From the first "[" to the last "]" in the answer, across lines
JSON_ARRAY_RE = re.compile(r"\[.*\]", re.DOTALL)


# =============================================================================
# Models
# =============================================================================


class Suggestion(BaseModel):
    """One proposed change; id is its position in the model's answer."""

    id: int
    type: SuggestionType
    original: str
    suggestion: str
    explanation: str = ""
    status: SuggestionStatus = SuggestionStatus.PENDING


class Edit(BaseModel):
    """A replacement of source[start:end]."""

    suggestion_id: int
    start: int
    end: int
    replacement: str

    def overlaps(self, other: "Edit") -> bool:
        return self.start < other.end and other.start < self.end


class ApplyResult(BaseModel):
    text: str
    applied: list[int] = Field(default_factory=list)
    conflicts: list[int] = Field(default_factory=list)
    missing: list[int] = Field(default_factory=list)


class SuggestResult(BaseModel):
    suggestions: list[Suggestion]
    model: str
    usage: Usage
    cost: float | None = None


# =============================================================================
# Prompt and parsing
# =============================================================================


def build_analysis_prompt(text: str, language: Language = "en") -> str:
    return ANALYSIS_PROMPT.format(
        language=EXPLANATION_LANGUAGE.get(language, "English"),
        text=text,
    )


def parse_suggestions(content: str) -> list[Suggestion]:
    """Parse the model answer into pending suggestions.

    Items that do not fit the suggestion shape are skipped; the remaining
    ones keep their position in the array as id.

    Raises:
        SuggestionParseError: If no JSON array can be read from the answer
    """
    match = JSON_ARRAY_RE.search(content or "")
    if not match:
        raise SuggestionParseError("Failed to parse suggestions: no JSON array in response")

    try:
        items = json.loads(match.group())
    except json.JSONDecodeError as e:
        raise SuggestionParseError(
            "Failed to parse suggestions: invalid JSON",
            details={"error": str(e)},
        ) from e

    if not isinstance(items, list):
        raise SuggestionParseError("Failed to parse suggestions: expected a JSON array")

    suggestions = []
    for i, item in enumerate(items):
        if not isinstance(item, dict):
            logger.warning("suggestion_skipped", index=i, reason="not an object")
            continue
        try:
            suggestions.append(
                Suggestion(**{**item, "id": i, "status": SuggestionStatus.PENDING})
            )
        except ValidationError as e:
            logger.warning("suggestion_skipped", index=i, reason=str(e.errors()[0]["msg"]))

    return suggestions


# =============================================================================
# Status transitions
# =============================================================================


def _transition(suggestion: Suggestion, status: SuggestionStatus) -> Suggestion:
    if suggestion.status != SuggestionStatus.PENDING:
        raise InvalidTransitionError(
            f"Suggestion {suggestion.id} is already {suggestion.status.value}",
            details={"id": suggestion.id, "status": suggestion.status.value},
        )
    suggestion.status = status
    return suggestion


def accept(suggestion: Suggestion) -> Suggestion:
    return _transition(suggestion, SuggestionStatus.ACCEPTED)


def reject(suggestion: Suggestion) -> Suggestion:
    return _transition(suggestion, SuggestionStatus.REJECTED)


# =============================================================================
# Applying
# =============================================================================


def _locate(source: str, original: str, taken: set[tuple[int, int]]) -> tuple[int, int] | None:
    """First occurrence of original whose exact span is not taken yet."""
    if not original:
        return None
    pos = 0
    while True:
        idx = source.find(original, pos)
        if idx == -1:
            return None
        span = (idx, idx + len(original))
        if span not in taken:
            return span
        pos = idx + 1


def plan_edits(source: str, suggestions: list[Suggestion]) -> tuple[list[Edit], ApplyResult]:
    """Resolve accepted suggestions to non-overlapping edits.

    The returned ApplyResult carries the untouched source text; use
    ``apply_suggestions`` to get the edited text.
    """
    result = ApplyResult(text=source)
    edits: list[Edit] = []
    taken: set[tuple[int, int]] = set()

    accepted = sorted(
        (s for s in suggestions if s.status == SuggestionStatus.ACCEPTED),
        key=lambda s: s.id,
    )
    for s in accepted:
        span = _locate(source, s.original, taken)
        if span is None:
            result.missing.append(s.id)
            continue
        taken.add(span)

        edit = Edit(suggestion_id=s.id, start=span[0], end=span[1], replacement=s.suggestion)
        if any(edit.overlaps(e) for e in edits):
            result.conflicts.append(s.id)
            continue
        edits.append(edit)
        result.applied.append(s.id)

    return edits, result


def apply_suggestions(source: str, suggestions: list[Suggestion]) -> ApplyResult:
    """Apply every accepted suggestion to an immutable source snapshot.

    Spans are computed against the original text, so earlier replacements
    never shift later ones. Overlapping suggestions after the first are
    reported as conflicts, originals that cannot be found as missing.
    """
    edits, plan = plan_edits(source, suggestions)
    text = source
    for edit in sorted(edits, key=lambda e: e.start, reverse=True):
        text = text[: edit.start] + edit.replacement + text[edit.end :]

    if plan.conflicts or plan.missing:
        logger.info(
            "suggestions_partially_applied",
            applied=len(plan.applied),
            conflicts=plan.conflicts,
            missing=plan.missing,
        )

    return ApplyResult(
        text=text,
        applied=plan.applied,
        conflicts=plan.conflicts,
        missing=plan.missing,
    )


# =============================================================================
# End-to-end service
# =============================================================================


def _as_result(model: str, result: AnalysisResult | dict[str, Any]) -> AnalysisResult:
    if isinstance(result, AnalysisResult):
        return result
    # Native Anthropic body when raw pass-through is enabled
    return normalize_message(model, result)


class SuggestService:
    """Analyze a text through the gateway and return parsed suggestions."""

    def __init__(self, gateway: AIGateway):
        self.gateway = gateway

    async def suggest(
        self,
        text: str,
        model: str | None = None,
        client_keys: dict[str, str | None] | None = None,
        language: Language = "en",
    ) -> SuggestResult:
        model_id = model or DEFAULT_MODEL_ID
        request = AnalysisRequest(
            model=model_id,
            messages=[ChatMessage(role="user", content=build_analysis_prompt(text, language))],
            client_keys=client_keys,
        )

        result = _as_result(model_id, await self.gateway.analyze(request))
        suggestions = parse_suggestions(result.text)

        cost: Decimal | None = estimate_cost(model_id, result.usage)
        logger.info(
            "suggestions_parsed",
            model=model_id,
            count=len(suggestions),
            input_tokens=result.usage.input_tokens,
            output_tokens=result.usage.output_tokens,
        )
        return SuggestResult(
            suggestions=suggestions,
            model=result.model,
            usage=result.usage,
            cost=float(cost) if cost is not None else None,
        )
