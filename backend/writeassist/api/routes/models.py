"""
Model catalog endpoint.
"""

from fastapi import APIRouter

from writeassist.services.ai.catalog import AVAILABLE_MODELS, DEFAULT_MODEL_ID
from writeassist.services.ai.registry import PROVIDERS

router = APIRouter()


@router.get("/api/models")
async def list_models() -> dict:
    """Selectable models with pricing, grouped metadata for the model picker."""
    return {
        "default": DEFAULT_MODEL_ID,
        "providers": {
            name: {"name": info.display_name, "env_key": info.env_key, "key_url": info.key_url}
            for name, info in PROVIDERS.items()
        },
        "models": [m.to_dict() for m in AVAILABLE_MODELS],
    }
