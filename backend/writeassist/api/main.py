"""
FastAPI application factory and main entry point.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx
import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from writeassist.api.middleware import WideEventMiddleware, add_error_to_wide_event
from writeassist.api.routes import health, models, proxy, suggestions
from writeassist.core.config import Settings, get_settings
from writeassist.core.exceptions import WriteAssistError
from writeassist.core.logging import configure_logging

logger = structlog.get_logger()

INTERNAL_ERROR_MESSAGE = "Internal server error"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    settings: Settings = app.state.settings
    logger.info(
        "Starting Writing Assistant API",
        version=settings.app_version,
        cors_origin=settings.cors_origin,
    )

    # One pooled client for all upstream provider calls
    app.state.http_client = httpx.AsyncClient(timeout=settings.upstream_timeout)

    yield

    logger.info("Shutting down Writing Assistant API")
    await app.state.http_client.aclose()
    app.state.http_client = None


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Explicit settings; read from the environment when omitted
    """
    settings = settings or get_settings()

    configure_logging(
        json_logs=not settings.debug,  # JSON in production, console in dev
        log_level="DEBUG" if settings.debug else "INFO",
    )

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Grammar and style suggestions through OpenAI, Anthropic or Gemini",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.http_client = None

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    # Wide Events middleware - canonical log line per request
    app.add_middleware(WideEventMiddleware)

    app.include_router(health.router, tags=["Health"])
    app.include_router(proxy.router, tags=["Proxy"])
    app.include_router(models.router, tags=["Models"])
    app.include_router(suggestions.router, tags=["Suggestions"])

    # Exception Handlers
    @app.exception_handler(WriteAssistError)
    async def app_exception_handler(request: Request, exc: WriteAssistError):
        """Map application errors to {"error": message}.

        Details of 5xx errors stay in the server log; the client only gets
        a generic message.
        """
        add_error_to_wide_event(exc, exc.status_code)

        if exc.is_client_error:
            logger.warning(
                "Request failed",
                url=str(request.url),
                status=exc.status_code,
                message=exc.message,
            )
            return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

        logger.error(
            "Request failed",
            url=str(request.url),
            status=exc.status_code,
            error_type=type(exc).__name__,
            message=exc.message,
            details=exc.details,
        )
        return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Routing errors (404, 405) in the same {"error": ...} shape."""
        if exc.status_code == 405:
            message = "Method not allowed"
        else:
            message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": message},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle FastAPI validation errors"""
        logger.warning("Validation error", url=str(request.url), errors=exc.errors())
        add_error_to_wide_event(exc, 422)
        return JSONResponse(
            status_code=422,
            content=jsonable_encoder({
                "error": "Validation failed",
                "details": exc.errors(),
            }),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions"""
        logger.error("Unexpected error", url=str(request.url), error=str(exc), exc_info=True)

        message = str(exc) if settings.debug else INTERNAL_ERROR_MESSAGE
        return JSONResponse(status_code=500, content={"error": message})

    return app


app = create_app()


def run() -> None:
    """Run the API with uvicorn on HOST:PORT."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "writeassist.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
