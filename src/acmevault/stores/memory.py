"""InMemoryObjectStore — dict-backed ObjectStore for development and testing."""

from __future__ import annotations

import threading
from dataclasses import dataclass

from acmevault.constants import SERVER_SIDE_ENCRYPTION
from acmevault.errors import ObjectNotFoundError


@dataclass(frozen=True)
class StoredObject:
    body: bytes
    server_side_encryption: str | None = None
    content_type: str | None = None


class InMemoryObjectStore:
    """Objects keyed by ``(bucket, key)``. Data is lost on process exit.

    Deleting a missing key raises ObjectNotFoundError, the strict end of
    what object stores do.
    """

    def __init__(self) -> None:
        self._objects: dict[tuple[str, str], StoredObject] = {}
        self._lock = threading.Lock()

    async def head(self, bucket: str, key: str) -> bool:
        with self._lock:
            return (bucket, key) in self._objects

    async def get(self, bucket: str, key: str) -> bytes:
        with self._lock:
            obj = self._objects.get((bucket, key))
        if obj is None:
            raise ObjectNotFoundError(
                f"s3://{bucket}/{key} not found", key=key, status_code=404
            )
        return obj.body

    async def put(
        self,
        bucket: str,
        key: str,
        body: bytes,
        *,
        server_side_encryption: str | None = SERVER_SIDE_ENCRYPTION,
        content_type: str | None = None,
    ) -> None:
        with self._lock:
            self._objects[(bucket, key)] = StoredObject(
                body=bytes(body),
                server_side_encryption=server_side_encryption,
                content_type=content_type,
            )

    async def delete(self, bucket: str, key: str) -> None:
        with self._lock:
            if self._objects.pop((bucket, key), None) is None:
                raise ObjectNotFoundError(
                    f"s3://{bucket}/{key} not found", key=key, status_code=404
                )

    def stored(self, bucket: str, key: str) -> StoredObject | None:
        """Return the raw stored object (with write options), if any."""
        with self._lock:
            return self._objects.get((bucket, key))

    def keys(self, bucket: str) -> list[str]:
        with self._lock:
            return sorted(k for b, k in self._objects if b == bucket)
