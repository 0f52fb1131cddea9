"""
Provider Adapters Package

Contains implementations for each supported AI provider.
To add a new provider:
1. Create a new file (e.g., myprovider.py) implementing BaseProvider
2. Import it here and add to PROVIDER_REGISTRY
3. Add a prefix rule in ``classifier`` and an entry in ``registry.PROVIDERS``
"""

from writeassist.services.ai.providers.anthropic import AnthropicProvider
from writeassist.services.ai.providers.base import BaseProvider
from writeassist.services.ai.providers.google import GeminiProvider
from writeassist.services.ai.providers.openai import OpenAIProvider

# Registry mapping provider name -> adapter class
PROVIDER_REGISTRY: dict[str, type[BaseProvider]] = {
    "openai": OpenAIProvider,
    "anthropic": AnthropicProvider,
    "gemini": GeminiProvider,
}


__all__ = [
    "PROVIDER_REGISTRY",
    "AnthropicProvider",
    "BaseProvider",
    "GeminiProvider",
    "OpenAIProvider",
]
