"""
Snyk Audit Dashboard - Main Application Entry Point

Backend for browsing Snyk audit logs and asking an LLM about them.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from audit_dashboard.core.config import get_settings
from audit_dashboard.core.logger import configure_logging, logger

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup
    settings = get_settings()
    logger.info(f"Starting Snyk Audit Dashboard in {settings.ENVIRONMENT} mode...")

    from audit_dashboard.services.session_sweeper import SessionSweeper

    sweeper = SessionSweeper(app.state.session_store, settings)
    app.state.session_sweeper = sweeper
    await sweeper.start()

    yield

    # Shutdown
    logger.info("Shutting down Snyk Audit Dashboard...")
    await sweeper.stop()


def _format_validation_error(exc: RequestValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "Invalid value")
        problems.append(f"{location}: {message}" if location else message)
    return "; ".join(problems) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as ``{"error": message}``."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": _format_validation_error(exc)},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(exc) or "Internal server error"},
        )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="Snyk Audit Dashboard",
        description="Snyk audit log browser with LLM-generated summaries and chat",
        version=VERSION,
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    # Per-process state shared by all requests
    from audit_dashboard.infrastructure.local import (
        InMemoryAuditLogRepository,
        InMemoryChatTranscriptRepository,
        InMemorySessionStore,
    )

    app.state.session_store = InMemorySessionStore(
        idle_timeout_minutes=settings.SESSION_IDLE_TIMEOUT_MINUTES
    )
    app.state.audit_log_repository = InMemoryAuditLogRepository()
    app.state.chat_transcript_repository = InMemoryChatTranscriptRepository()

    register_exception_handlers(app)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    from audit_dashboard.api import audit_logs, chat, config, debug, insights, llm_config

    app.include_router(config.router, prefix="/api/config", tags=["config"])
    app.include_router(llm_config.router, prefix="/api/llm-config", tags=["llm_config"])
    app.include_router(audit_logs.router, prefix="/api/audit-logs", tags=["audit_logs"])
    app.include_router(insights.router, prefix="/api", tags=["insights"])
    app.include_router(chat.router, prefix="/api/chat", tags=["chat"])
    if settings.DEBUG:
        app.include_router(debug.router, prefix="/api/debug", tags=["debug"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "environment": settings.ENVIRONMENT,
            "version": VERSION,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
