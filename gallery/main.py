"""
FastAPI application entry point with async lifespan management.

This module initializes the FastAPI application with:
- Structured logging with request correlation IDs
- Database credentials, connection pool and S3 client built once at startup
- CORS middleware configuration
- Automatic route discovery and registration
- Graceful startup/shutdown handling

Architecture:
    - Logging configured before app creation (JSON/console)
    - Lifespan context manager builds the AppContext and disposes it on shutdown
    - Routes are auto-discovered from gallery/routes/ directory
    - Configuration is loaded from environment-specific .env files
"""

import uuid
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Any

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gallery.core.exceptions import register_exception_handlers
from gallery.core.lifespan import app_lifespan
from gallery.core.logging_config import setup_logging
from gallery.core.route_discovery import register_routers
from gallery.main_config import get_cors_config, get_fastapi_config


def create_app(
    lifespan: Callable[[FastAPI], AbstractAsyncContextManager[Any]] | None = app_lifespan,
) -> FastAPI:
    """Build the application. Tests pass ``lifespan=None`` and set their own context."""
    fastapi_config = get_fastapi_config()
    cors_config = get_cors_config()

    app = FastAPI(
        title=fastapi_config.title,
        description=fastapi_config.description,
        version=fastapi_config.version,
        docs_url=fastapi_config.docs_url,
        redoc_url=fastapi_config.redoc_url,
        openapi_url=fastapi_config.openapi_url,
        lifespan=lifespan,
        debug=fastapi_config.debug,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_config.origins_list,
        allow_credentials=cors_config.allow_credentials,
        allow_methods=cors_config.methods_list,
        allow_headers=cors_config.headers_list,
    )

    # Add correlation ID middleware (adds request_id to context)
    app.add_middleware(
        CorrelationIdMiddleware,
        header_name="X-Request-ID",
        generator=lambda: uuid.uuid4().hex[:16],
        validator=None,
        transformer=lambda x: x,
    )

    register_exception_handlers(app)
    register_routers(app)
    return app


# =============================================================================
# Setup Logging (before app creation)
# =============================================================================
setup_logging()

app = create_app()

if __name__ == "__main__":
    import uvicorn

    from gallery.main_config import get_settings

    settings = get_settings()
    uvicorn.run(
        "gallery.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_config=None,  # Disable uvicorn's logging config to use our structlog setup
    )
