"""
Wide Events Middleware for FastAPI.

This middleware implements the canonical log line pattern:
- Initializes a wide event at request start
- Lets handlers enrich it (model, provider, token usage)
- Finalizes and emits on request completion
- One comprehensive log entry per request
"""

from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from writeassist.core.logging import (
    emit_wide_event,
    enrich_event,
    finalize_request_event,
    get_request_event,
    init_request_event,
)


class WideEventMiddleware(BaseHTTPMiddleware):
    """
    Middleware that captures wide events for every request.

    Creates one log entry per request containing:
    - Request metadata (method, path, client)
    - Analysis context (added by handlers via enrich_event)
    - Response metadata (status, duration)
    - Error context (added by the exception handlers)
    """

    # Paths to skip (health checks generate too much noise)
    SKIP_PATHS = {"/api/health", "/favicon.ico"}

    async def dispatch(
        self,
        request: Request,
        call_next: Callable,
    ) -> Response:
        if request.url.path in self.SKIP_PATHS:
            return await call_next(request)

        request_id = request.headers.get("x-request-id")
        init_request_event(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            client_ip=self._get_client_ip(request),
            user_agent=request.headers.get("user-agent", ""),
        )

        if request.query_params:
            enrich_event(**{"http.query_params": dict(request.query_params)})

        error: Exception | None = None
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers["x-request-id"] = get_request_event().get("request_id", "")
            return response

        except Exception as e:
            error = e
            status_code = getattr(e, "status_code", 500)
            raise

        finally:
            event = finalize_request_event(status_code, error)
            emit_wide_event(event)

    def _get_client_ip(self, request: Request) -> str:
        """Extract client IP, respecting proxy headers."""
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()

        real_ip = request.headers.get("x-real-ip")
        if real_ip:
            return real_ip

        if request.client:
            return request.client.host

        return "unknown"


def add_error_to_wide_event(error: Exception, status_code: int) -> None:
    """Record a handled error on the wide event.

    Exception handlers turn errors into responses before the middleware
    sees them, so they report the error here.
    """
    enrich_event(
        error={
            "type": type(error).__name__,
            "message": str(error)[:500],
            "status_code": status_code,
            "details": getattr(error, "details", None),
        }
    )
