"""
Application lifespan management for FastAPI.

Startup resolves database credentials, opens the connection pool, creates the
schema and builds the S3 client, all exactly once before the first request.
A failure at any step aborts startup. Shutdown disposes the pool.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from gallery.core.context import build_app_context
from gallery.main_config import (
    get_aws_config,
    get_database_config,
    get_gallery_config,
    get_parameter_store_config,
)


@asynccontextmanager
async def app_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifecycle events.

    Startup:
        - Resolve database credentials from the parameter store
        - Initialize database connection pool and schema
        - Create the object storage client

    Shutdown:
        - Cleanup database pool
    """
    context = await build_app_context(
        get_aws_config(),
        get_parameter_store_config(),
        get_database_config(),
        get_gallery_config(),
    )
    app.state.context = context

    yield

    await context.close()
