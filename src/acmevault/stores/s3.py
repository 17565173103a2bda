"""S3ObjectStore — ObjectStore implementation on top of boto3.

boto3 is blocking, so every SDK call is pushed to a worker thread with
``asyncio.to_thread``. botocore failures are mapped onto the acmevault
exception hierarchy:

- HTTP 404 / ``NoSuchKey`` / ``NotFound`` -> ObjectNotFoundError
- ``NoSuchBucket`` and everything else -> ObjectStoreError

Credentials are not handled here: boto3's default chain (environment,
shared config, instance role) resolves them when the client is built.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from acmevault.constants import SERVER_SIDE_ENCRYPTION
from acmevault.errors import ObjectNotFoundError, ObjectStoreError

if TYPE_CHECKING:
    from acmevault.config import StorageConfig

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES: frozenset[str] = frozenset({"404", "NoSuchKey", "NotFound"})


# ---------------------------------------------------------------------------
# botocore error -> exception mapping
# ---------------------------------------------------------------------------


def _translate_error(exc: Exception, bucket: str, key: str) -> ObjectStoreError:
    """Classify a botocore failure for ``s3://bucket/key``."""
    location = f"s3://{bucket}/{key}"
    if isinstance(exc, ClientError):
        error = exc.response.get("Error", {})
        code = str(error.get("Code", ""))
        status = exc.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
        if code != "NoSuchBucket" and (status == 404 or code in _NOT_FOUND_CODES):
            return ObjectNotFoundError(
                f"{location} not found", key=key, status_code=404
            )
        return ObjectStoreError(
            f"{location}: {code or 'request failed'}: {exc}",
            key=key,
            status_code=status,
        )
    return ObjectStoreError(f"{location}: {exc}", key=key)


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class S3ObjectStore:
    """Async ObjectStore over a boto3 S3 client.

    Accepts a ready-made client (tests pass a MagicMock); use
    ``from_config()`` to build one for a region/endpoint.
    """

    def __init__(self, client: Any) -> None:
        self._client = client

    @classmethod
    def from_config(cls, config: StorageConfig) -> S3ObjectStore:
        """Build a boto3 client for the configured region and endpoint."""
        session = boto3.session.Session()
        client = session.client(
            "s3",
            region_name=config.region,
            endpoint_url=config.endpoint_url,
        )
        return cls(client)

    async def _call(self, method: str, bucket: str, key: str, **params: Any) -> Any:
        func = getattr(self._client, method)
        try:
            return await asyncio.to_thread(func, Bucket=bucket, Key=key, **params)
        except (ClientError, BotoCoreError) as exc:
            raise _translate_error(exc, bucket, key) from exc

    async def head(self, bucket: str, key: str) -> bool:
        try:
            await self._call("head_object", bucket, key)
        except ObjectNotFoundError:
            return False
        return True

    async def get(self, bucket: str, key: str) -> bytes:
        response = await self._call("get_object", bucket, key)
        body = response["Body"]
        try:
            return await asyncio.to_thread(body.read)
        except BotoCoreError as exc:
            raise _translate_error(exc, bucket, key) from exc
        finally:
            body.close()

    async def put(
        self,
        bucket: str,
        key: str,
        body: bytes,
        *,
        server_side_encryption: str | None = SERVER_SIDE_ENCRYPTION,
        content_type: str | None = None,
    ) -> None:
        params: dict[str, Any] = {"Body": body, "ContentLength": len(body)}
        if server_side_encryption:
            params["ServerSideEncryption"] = server_side_encryption
        if content_type:
            params["ContentType"] = content_type
        await self._call("put_object", bucket, key, **params)
        logger.debug("Wrote %d bytes to s3://%s/%s", len(body), bucket, key)

    async def delete(self, bucket: str, key: str) -> None:
        await self._call("delete_object", bucket, key)

    async def close(self) -> None:
        """Release the client's connection pool."""
        await asyncio.to_thread(self._client.close)
