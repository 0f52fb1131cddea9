"""
Provider Registry

Static table of the supported upstream LLM vendors and the environment
variable that holds each one's server-side key.
"""

from dataclasses import dataclass

from writeassist.core.config import Settings


@dataclass(frozen=True)
class ProviderInfo:
    """Display and key metadata for one provider."""

    name: str
    display_name: str
    env_key: str
    key_url: str = ""

    @property
    def settings_field(self) -> str:
        """Name of the Settings attribute holding this provider's key."""
        return self.env_key.lower()


PROVIDERS: dict[str, ProviderInfo] = {
    "openai": ProviderInfo(
        name="openai",
        display_name="OpenAI",
        env_key="OPENAI_API_KEY",
        key_url="https://platform.openai.com/api-keys",
    ),
    "anthropic": ProviderInfo(
        name="anthropic",
        display_name="Anthropic",
        env_key="ANTHROPIC_API_KEY",
        key_url="https://console.anthropic.com/settings/keys",
    ),
    "gemini": ProviderInfo(
        name="gemini",
        display_name="Google Gemini",
        env_key="GEMINI_API_KEY",
        key_url="https://aistudio.google.com/apikey",
    ),
}


def get_provider_info(name: str) -> ProviderInfo | None:
    return PROVIDERS.get(name)


def server_key(provider: str, settings: Settings) -> str | None:
    """Server-configured key for a provider, or None."""
    info = PROVIDERS.get(provider)
    if info is None:
        return None
    return getattr(settings, info.settings_field, None) or None


def available_providers(settings: Settings) -> dict[str, bool]:
    """Which providers have a server-side key configured.

    This is only a hint for the client; the real check happens when a
    request is dispatched.
    """
    return {name: bool(server_key(name, settings)) for name in PROVIDERS}
