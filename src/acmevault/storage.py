"""TLSStorage — certificate and ACME account persistence over an ObjectStore.

This is the whole surface a TLS engine needs: existence checks, load,
store and delete for sites and users, the most-recent-user pointer, and
named locks around issuance.

Not-found handling: a missing object on a site or user read surfaces as
NotExistError so hosts can tell "not issued yet" from "store is down".
Every other failure propagates untouched; nothing here retries.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from acmevault.errors import NotExistError, ObjectNotFoundError
from acmevault.keys import KeyNamespace
from acmevault.locks import NameLocks, Waiter
from acmevault.records import SiteData, UserData

if TYPE_CHECKING:
    from acmevault.config import StorageConfig
    from acmevault.object_store import ObjectStore

logger = logging.getLogger(__name__)

_JSON = "application/json"
_TEXT = "text/plain; charset=utf-8"


class TLSStorage:
    """Storage for one ACME CA namespace in one bucket.

    Bucket and prefix are fixed at construction. Each instance owns its
    own lock table; locks are advisory and process-local.
    """

    def __init__(self, store: ObjectStore, bucket: str, prefix: str) -> None:
        self._store = store
        self._bucket = bucket
        self._keys = KeyNamespace(prefix)
        self._locks = NameLocks()

    @classmethod
    def from_config(cls, store: ObjectStore, config: StorageConfig) -> TLSStorage:
        return cls(store, bucket=config.bucket, prefix=config.prefix)

    @property
    def bucket(self) -> str:
        return self._bucket

    @property
    def keys(self) -> KeyNamespace:
        return self._keys

    @property
    def locks(self) -> NameLocks:
        return self._locks

    async def _read(self, key: str) -> bytes:
        """Fetch ``key``, translating a missing object into NotExistError."""
        try:
            return await self._store.get(self._bucket, key)
        except ObjectNotFoundError as exc:
            raise NotExistError(key) from exc

    # -- locks ----------------------------------------------------------------

    def try_lock(self, name: str) -> Waiter | None:
        """Claim ``name``; returns a Waiter instead if someone else holds it."""
        return self._locks.try_lock(name)

    def unlock(self, name: str) -> None:
        """Release ``name``. Raises LockError if it was not claimed."""
        self._locks.unlock(name)

    # -- sites ----------------------------------------------------------------

    async def site_exists(self, domain: str) -> bool:
        """True if site data has been stored (and not deleted) for ``domain``."""
        return await self._store.head(self._bucket, self._keys.domain_key(domain))

    async def load_site(self, domain: str) -> SiteData:
        """Return stored site data.

        Raises NotExistError when nothing is stored for ``domain`` and
        DecodeError when the stored object is not a complete site record.
        """
        key = self._keys.domain_key(domain)
        payload = await self._read(key)
        logger.debug("Loaded site %s from %s", domain, key)
        return SiteData.from_json(payload)

    async def store_site(self, domain: str, data: SiteData) -> None:
        """Write ``data`` for ``domain``, replacing any previous record whole."""
        key = self._keys.domain_key(domain)
        await self._store.put(self._bucket, key, data.to_json(), content_type=_JSON)
        logger.debug("Stored site %s at %s", domain, key)

    async def delete_site(self, domain: str) -> None:
        """Delete the site record for ``domain``.

        Store errors pass through as-is, including a not-found from stores
        that report one; check ``site_exists`` first for idempotent deletes.
        """
        key = self._keys.domain_key(domain)
        await self._store.delete(self._bucket, key)
        logger.debug("Deleted site %s at %s", domain, key)

    # -- users ----------------------------------------------------------------

    async def load_user(self, email: str) -> UserData:
        """Return stored account data. NotExistError if absent."""
        key = self._keys.user_key(email)
        payload = await self._read(key)
        return UserData.from_json(payload)

    async def store_user(self, email: str, data: UserData) -> None:
        """Write the account record, then point the recent-user key at ``email``.

        The two writes are independent. If the pointer write fails the
        record is already stored and the error is re-raised; the pointer
        keeps its previous value.
        """
        key = self._keys.user_key(email)
        await self._store.put(self._bucket, key, data.to_json(), content_type=_JSON)
        try:
            await self._store.put(
                self._bucket,
                self._keys.recent_user_key(),
                email.encode("utf-8"),
                content_type=_TEXT,
            )
        except Exception:
            logger.warning(
                "Stored user %s but failed to update the most recent user pointer.",
                email,
            )
            raise
        logger.debug("Stored user %s at %s", email, key)

    async def most_recent_user_email(self) -> str:
        """Email passed to the last successful ``store_user``, or "".

        Any failure, not-found included, reads as "no recent user".
        """
        try:
            payload = await self._store.get(self._bucket, self._keys.recent_user_key())
            return payload.decode("utf-8")
        except ObjectNotFoundError:
            return ""
        except Exception:
            logger.warning("Failed to read the most recent user pointer.")
            return ""

    # -- lifecycle ------------------------------------------------------------

    async def close(self) -> None:
        """Close the underlying store if it holds resources."""
        close = getattr(self._store, "close", None)
        if close is not None:
            await close()

    async def __aenter__(self) -> TLSStorage:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
