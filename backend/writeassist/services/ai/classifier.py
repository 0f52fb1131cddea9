"""
Model Classifier

Maps a model id to its provider by exact, case-sensitive prefix. Adding a
provider means adding a rule here and an adapter in ``providers``.
"""

# Evaluated in order, first match wins
PREFIX_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("gpt-", "o1", "o3", "o4"), "openai"),
    (("claude-",), "anthropic"),
    (("gemini-",), "gemini"),
)


def classify(model_id: str | None) -> str | None:
    """Return the provider name for a model id, or None if unknown."""
    if not model_id or not isinstance(model_id, str):
        return None
    for prefixes, provider in PREFIX_RULES:
        if model_id.startswith(prefixes):
            return provider
    return None
