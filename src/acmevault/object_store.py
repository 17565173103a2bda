"""Abstract object store interface that TLSStorage depends on.

Concrete implementations (InMemoryObjectStore, S3ObjectStore) live in
``acmevault.stores``.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from acmevault.constants import SERVER_SIDE_ENCRYPTION


@runtime_checkable
class ObjectStore(Protocol):
    """Async head/get/put/delete over a bucket of opaque objects.

    Implementations must raise ``ObjectNotFoundError`` from ``get`` when
    nothing is stored at the key, and ``ObjectStoreError`` for every other
    failure, so callers can tell "absent" from "broken" without looking
    at status codes.
    """

    async def head(self, bucket: str, key: str) -> bool: ...

    async def get(self, bucket: str, key: str) -> bytes: ...

    async def put(
        self,
        bucket: str,
        key: str,
        body: bytes,
        *,
        server_side_encryption: str | None = SERVER_SIDE_ENCRYPTION,
        content_type: str | None = None,
    ) -> None: ...

    async def delete(self, bucket: str, key: str) -> None: ...
