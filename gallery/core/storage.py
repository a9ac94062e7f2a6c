"""
S3 object storage client for image payloads.

Objects are written with a single PutObject call: no multipart upload, no
checksum verification and no retries beyond botocore's defaults. URLs are
composed from bucket, region and key and assume the bucket allows public read.

Usage:
    storage = ObjectStorageClient(bucket="my-bucket", region="eu-west-1")
    await storage.put("abc.jpg", payload, "image/jpeg", len(payload))
    storage.url_for("abc.jpg")
    # -> "https://my-bucket.s3.eu-west-1.amazonaws.com/abc.jpg"
    await storage.delete("abc.jpg")
"""

import boto3
import structlog
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from fastapi.concurrency import run_in_threadpool

__all__ = ["ObjectStorageClient", "StorageError"]

logger = structlog.get_logger(__name__)


class StorageError(RuntimeError):
    """Raised when a put or delete against the bucket fails."""

    def __init__(self, operation: str, key: str, cause: Exception) -> None:
        super().__init__(f"S3 {operation} failed for key '{key}': {cause}")
        self.operation = operation
        self.key = key


class ObjectStorageClient:
    """Put/delete wrapper around a single S3 bucket."""

    def __init__(
        self,
        bucket: str,
        region: str,
        endpoint_url: str | None = None,
        client=None,
    ) -> None:
        if not bucket:
            raise ValueError("S3 bucket name not configured (AWS_S3_BUCKET_NAME)")
        self.bucket = bucket
        self.region = region
        self._client = client or boto3.client(
            "s3",
            endpoint_url=endpoint_url,
            config=Config(region_name=region, signature_version="s3v4"),
        )

    def url_for(self, key: str) -> str:
        """Public HTTPS address of ``key``."""
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    def put_object(self, key: str, body: bytes, content_type: str, content_length: int) -> None:
        try:
            self._client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=body,
                ContentType=content_type,
                ContentLength=content_length,
            )
        except (BotoCoreError, ClientError) as exc:
            raise StorageError("put", key, exc) from exc
        logger.debug("object_stored", bucket=self.bucket, key=key, size=content_length)

    def delete_object(self, key: str) -> None:
        try:
            self._client.delete_object(Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as exc:
            raise StorageError("delete", key, exc) from exc
        logger.debug("object_deleted", bucket=self.bucket, key=key)

    async def put(self, key: str, body: bytes, content_type: str, content_length: int) -> None:
        """Upload ``body`` under ``key``. Raises StorageError on failure."""
        await run_in_threadpool(self.put_object, key, body, content_type, content_length)

    async def delete(self, key: str) -> None:
        """Remove the object at ``key``. Raises StorageError on failure."""
        await run_in_threadpool(self.delete_object, key)
