"""
Model Catalog

Fixed table of selectable models with display metadata and pricing
(USD per 1M tokens). Speed and quality are 1-5 ratings, 5 being best.
"""

from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Any

from writeassist.core.models import Usage
from writeassist.services.ai.classifier import classify

ONE_MILLION = Decimal(1_000_000)


@dataclass(frozen=True)
class ModelDescriptor:
    """A selectable model."""

    id: str
    provider: str
    display_name: str
    description: str
    input_price_per_million: Decimal
    output_price_per_million: Decimal
    speed: int
    quality: int

    def __post_init__(self) -> None:
        if self.input_price_per_million < 0 or self.output_price_per_million < 0:
            raise ValueError(f"{self.id}: prices must be >= 0")
        if not (1 <= self.speed <= 5 and 1 <= self.quality <= 5):
            raise ValueError(f"{self.id}: speed and quality must be within 1-5")

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["input_price_per_million"] = float(self.input_price_per_million)
        data["output_price_per_million"] = float(self.output_price_per_million)
        return data


def _model(
    id: str,
    provider: str,
    name: str,
    description: str,
    input_price: str,
    output_price: str,
    speed: int,
    quality: int,
) -> ModelDescriptor:
    return ModelDescriptor(
        id=id,
        provider=provider,
        display_name=name,
        description=description,
        input_price_per_million=Decimal(input_price),
        output_price_per_million=Decimal(output_price),
        speed=speed,
        quality=quality,
    )


AVAILABLE_MODELS: tuple[ModelDescriptor, ...] = (
    # OpenAI, nano/mini first
    _model("gpt-4.1-nano", "openai", "GPT-4.1 Nano", "Fastest and cheapest", "0.10", "0.40", 5, 2),
    _model("gpt-4.1-mini", "openai", "GPT-4.1 Mini", "Balanced", "0.40", "1.60", 4, 3),
    _model("gpt-4o-mini", "openai", "GPT-4o Mini", "Fast multimodal", "0.15", "0.60", 5, 3),
    # Anthropic
    _model("claude-haiku-4-5-20251001", "anthropic", "Claude 4.5 Haiku", "Fastest and cheapest", "0.80", "4.00", 5, 3),
    _model("claude-sonnet-4-5-20250929", "anthropic", "Claude 4.5 Sonnet", "Balanced", "3.00", "15.00", 3, 4),
    # Google Gemini
    _model("gemini-2.5-flash-lite", "gemini", "Gemini 2.5 Flash Lite", "Fastest and cheapest", "0.00", "0.00", 5, 2),
    _model("gemini-2.5-flash", "gemini", "Gemini 2.5 Flash", "Balanced", "0.10", "0.40", 4, 3),
)

DEFAULT_MODEL_ID = "gpt-4.1-nano"

_BY_ID: dict[str, ModelDescriptor] = {m.id: m for m in AVAILABLE_MODELS}


def _validate_catalog() -> None:
    """Ids must be unique and agree with the classifier."""
    if len(_BY_ID) != len(AVAILABLE_MODELS):
        raise RuntimeError("Duplicate model ids in catalog")
    for m in AVAILABLE_MODELS:
        if classify(m.id) != m.provider:
            raise RuntimeError(
                f"Catalog provider {m.provider!r} for {m.id!r} disagrees with classifier"
            )
    if DEFAULT_MODEL_ID not in _BY_ID:
        raise RuntimeError(f"Default model {DEFAULT_MODEL_ID!r} is not in the catalog")


_validate_catalog()


def get_model(model_id: str | None) -> ModelDescriptor | None:
    if model_id is None:
        return None
    return _BY_ID.get(model_id)


def get_models_by_provider(provider: str) -> list[ModelDescriptor]:
    return [m for m in AVAILABLE_MODELS if m.provider == provider]


def estimate_cost(model_id: str | None, usage: Usage) -> Decimal | None:
    """Estimated USD cost of one call; None for models not in the catalog."""
    m = get_model(model_id)
    if m is None:
        return None
    return (
        Decimal(usage.input_tokens) / ONE_MILLION * m.input_price_per_million
        + Decimal(usage.output_tokens) / ONE_MILLION * m.output_price_per_million
    )
