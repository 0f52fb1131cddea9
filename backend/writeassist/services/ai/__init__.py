"""
AI Service Package

Provider routing for analysis requests:
- Provider registry and model catalog
- Model classifier and key resolver
- Provider adapters (OpenAI, Anthropic, Gemini)
- Gateway dispatching a request to the matching adapter
"""

from writeassist.services.ai.catalog import AVAILABLE_MODELS, DEFAULT_MODEL_ID, ModelDescriptor, get_model
from writeassist.services.ai.classifier import classify
from writeassist.services.ai.gateway import AIGateway, get_ai_gateway
from writeassist.services.ai.interface import AIProviderInterface
from writeassist.services.ai.keys import resolve_key
from writeassist.services.ai.registry import PROVIDERS, available_providers

__all__ = [
    "AIGateway",
    "AIProviderInterface",
    "AVAILABLE_MODELS",
    "DEFAULT_MODEL_ID",
    "ModelDescriptor",
    "PROVIDERS",
    "available_providers",
    "classify",
    "get_ai_gateway",
    "get_model",
    "resolve_key",
]
