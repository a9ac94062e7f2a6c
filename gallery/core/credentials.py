"""Database credential resolution from the parameter store.

The three database parameters (username, password, host) are fetched in
parallel; the password is requested decrypted. The resolved values are
combined with the configured database name, port and TLS policy into a
``DatabaseCredentials`` value. Any failure is fatal for startup, there is
no retry.
"""

import asyncio

import structlog

from gallery.core.secrets import SecretsLoader
from gallery.main_config import (
    AWSConfig,
    DatabaseConfig,
    DatabaseCredentials,
    ParameterStoreConfig,
)

__all__ = ["CredentialResolutionError", "resolve_database_credentials"]

logger = structlog.get_logger(__name__)


class CredentialResolutionError(RuntimeError):
    """Raised when database credentials cannot be read from the parameter store."""


async def resolve_database_credentials(
    loader: SecretsLoader,
    parameters: ParameterStoreConfig,
    aws_config: AWSConfig,
    database_config: DatabaseConfig,
) -> DatabaseCredentials:
    """Fetch username, password and host concurrently and build credentials.

    Raises:
        CredentialResolutionError: If any of the three lookups fails.
    """
    try:
        username, password, host = await asyncio.gather(
            asyncio.to_thread(loader.get, parameters.username_name),
            asyncio.to_thread(loader.get, parameters.password_name, decrypt=True),
            asyncio.to_thread(loader.get, parameters.host_name),
        )
    except Exception as exc:
        logger.error(
            "database_credentials_unavailable",
            mode=loader.mode.value,
            error=str(exc),
        )
        msg = "Failed to resolve database credentials from the parameter store"
        raise CredentialResolutionError(msg) from exc

    logger.info("database_credentials_resolved", host=host, mode=loader.mode.value)
    return DatabaseCredentials(
        host=host,
        port=database_config.port,
        user=username,
        password=password,
        db_name=aws_config.database_name,
        ssl_reject_unauthorized=database_config.ssl_reject_unauthorized,
    )
