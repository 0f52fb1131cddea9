"""
Key Resolver

A key supplied by the client wins over the server-configured one.
"""

from collections.abc import Mapping

from writeassist.core.config import Settings
from writeassist.services.ai.registry import server_key


def resolve_key(
    provider: str,
    client_keys: Mapping[str, str | None] | None,
    settings: Settings,
) -> str | None:
    """Return the effective API key for a provider.

    No format validation is done here; a bad key surfaces as an upstream
    HTTP error when the provider is called.
    """
    if client_keys:
        client_key = client_keys.get(provider)
        if client_key:
            return client_key
    return server_key(provider, settings)
