"""
Exception hierarchy for the Writing Assistant proxy.

Adapters and services raise these; the HTTP layer in ``writeassist.api.main``
is the single place they are turned into responses.
"""

from typing import Any


class WriteAssistError(Exception):
    """Base class for application errors."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if status_code is not None:
            self.status_code = status_code

    @property
    def is_client_error(self) -> bool:
        return self.status_code < 500


class ConfigurationError(WriteAssistError):
    """A provider API key is missing."""

    status_code = 500


class UnknownModelError(WriteAssistError):
    """The model id does not map to any provider."""

    status_code = 400

    def __init__(self, model: str | None):
        super().__init__(f"Unknown model: {model}", details={"model": model})
        self.model = model


class MalformedRequestError(WriteAssistError):
    """The request body is missing or cannot be parsed."""

    status_code = 400


class UpstreamError(WriteAssistError):
    """A provider returned a non-2xx status or could not be reached."""

    def __init__(self, status_code: int, message: str, provider: str | None = None):
        super().__init__(message, details={"provider": provider}, status_code=status_code)
        self.provider = provider


class SuggestionParseError(WriteAssistError):
    """The model response does not contain a suggestion array."""

    status_code = 422


class InvalidTransitionError(WriteAssistError):
    """A suggestion status change that is not allowed."""

    status_code = 409
