"""Amazon S3 implementation of ``RemoteStore`` on top of boto3.

boto3 is blocking, so every call runs through ``run_sync``. Not-found
responses from ``head_bucket``/``head_object`` become ``False``; all
other client or transport errors are wrapped in ``StoreError``.
"""

from __future__ import annotations

import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from s3_config_sync.core.async_utils import run_sync
from s3_config_sync.errors import StoreError

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = frozenset({"404", "NotFound", "NoSuchBucket", "NoSuchKey"})


def is_not_found(error: ClientError) -> bool:
    """Return True when *error* is S3's way of saying "does not exist"."""
    code = str(error.response.get("Error", {}).get("Code", ""))
    if code in _NOT_FOUND_CODES:
        return True
    status = error.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
    return status == 404


def create_s3_client(
    access_key: str,
    secret_key: str,
    region: str = "us-east-1",
    endpoint_url: str | None = None,
) -> Any:
    """Build a boto3 S3 client with explicit credentials.

    Args:
        access_key: AWS access key id.
        secret_key: AWS secret access key.
        region: Region the bucket lives in.
        endpoint_url: Optional endpoint for S3-compatible services.
    """
    return boto3.client(
        "s3",
        region_name=region,
        aws_access_key_id=access_key,
        aws_secret_access_key=secret_key,
        endpoint_url=endpoint_url,
    )


class S3Store:
    """``RemoteStore`` backed by an S3 client.

    Args:
        client: A boto3 S3 client (or anything exposing ``head_bucket``,
            ``head_object``, ``get_object`` and ``put_object``).
    """

    def __init__(self, client: Any) -> None:
        self.client = client

    @classmethod
    def from_credentials(
        cls,
        access_key: str,
        secret_key: str,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
    ) -> S3Store:
        return cls(
            create_s3_client(access_key, secret_key, region, endpoint_url)
        )

    async def _head(self, what: str, **params: Any) -> bool:
        method = getattr(self.client, f"head_{what}")
        try:
            await run_sync(method, **params)
        except ClientError as exc:
            if is_not_found(exc):
                logger.debug("S3 %s not found: %s", what, params)
                return False
            raise StoreError(f"Failed to check {what} {params}: {exc}") from exc
        except BotoCoreError as exc:
            raise StoreError(f"Failed to check {what} {params}: {exc}") from exc
        return True

    async def container_exists(self, container: str) -> bool:
        return await self._head("bucket", Bucket=container)

    async def object_exists(self, container: str, key: str) -> bool:
        return await self._head("object", Bucket=container, Key=key)

    async def read_object(self, container: str, key: str) -> bytes:
        """Download ``s3://container/key`` in full."""

        def _download() -> bytes:
            response = self.client.get_object(Bucket=container, Key=key)
            body = response["Body"]
            try:
                return body.read()
            finally:
                body.close()

        try:
            data = await run_sync(_download)
        except (ClientError, BotoCoreError) as exc:
            raise StoreError(
                f"Failed to read s3://{container}/{key}: {exc}"
            ) from exc
        logger.debug("Read %d bytes from s3://%s/%s", len(data), container, key)
        return data

    async def write_object(
        self,
        container: str,
        key: str,
        data: bytes,
        content_type: str | None = None,
    ) -> None:
        """Upload *data* to ``s3://container/key``, replacing any object there."""
        params: dict[str, Any] = {"Bucket": container, "Key": key, "Body": data}
        if content_type:
            params["ContentType"] = content_type

        try:
            await run_sync(self.client.put_object, **params)
        except (ClientError, BotoCoreError) as exc:
            raise StoreError(
                f"Failed to write s3://{container}/{key}: {exc}"
            ) from exc
        logger.debug("Wrote %d bytes to s3://%s/%s", len(data), container, key)
