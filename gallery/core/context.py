"""Application context: the long-lived resources shared by all requests.

Built once in the lifespan and stored on ``app.state.context``; handlers get
it through ``gallery.core.dependencies``.
"""

from dataclasses import dataclass

import structlog

from gallery.core.credentials import resolve_database_credentials
from gallery.core.database import AsyncDBPool
from gallery.core.secrets_providers import build_secrets_loader
from gallery.core.storage import ObjectStorageClient
from gallery.main_config import (
    AWSConfig,
    DatabaseConfig,
    GalleryConfig,
    ParameterStoreConfig,
)

__all__ = ["AppContext", "build_app_context"]

logger = structlog.get_logger(__name__)


@dataclass
class AppContext:
    db: AsyncDBPool
    storage: ObjectStorageClient
    gallery_config: GalleryConfig

    async def close(self) -> None:
        await self.db.dispose()


async def build_app_context(
    aws_config: AWSConfig,
    parameters: ParameterStoreConfig,
    database_config: DatabaseConfig,
    gallery_config: GalleryConfig,
) -> AppContext:
    """Resolve credentials, open the database pool and create the S3 client.

    ``DATABASE_URL`` short-circuits the parameter store lookup.
    """
    if database_config.url:
        url = database_config.url
        reject_unauthorized = database_config.ssl_reject_unauthorized
        logger.info("database_url_from_config")
    else:
        loader = build_secrets_loader(parameters.secrets_mode, region=aws_config.region)
        creds = await resolve_database_credentials(loader, parameters, aws_config, database_config)
        url = database_config.url_for(creds)
        reject_unauthorized = creds.ssl_reject_unauthorized

    storage = ObjectStorageClient(
        bucket=aws_config.s3_bucket_name,
        region=aws_config.region,
        endpoint_url=aws_config.endpoint_url,
    )
    db = await AsyncDBPool.connect(url, database_config, reject_unauthorized=reject_unauthorized)
    return AppContext(db=db, storage=storage, gallery_config=gallery_config)
