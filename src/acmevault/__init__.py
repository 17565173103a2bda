"""acmevault — object-store persistence for ACME certificates and accounts.

Stores per-domain certificate bundles and ACME account data in S3 (or any
ObjectStore) and coordinates issuance with in-process named locks.
"""

__version__ = "0.1.0"

from acmevault.config import StorageConfig, prefix_for_ca
from acmevault.errors import (
    ConfigurationError,
    DecodeError,
    LockError,
    NotExistError,
    ObjectNotFoundError,
    ObjectStoreError,
    StorageError,
)
from acmevault.keys import KeyNamespace
from acmevault.locks import LockState, NameLocks, Waiter
from acmevault.object_store import ObjectStore
from acmevault.providers import (
    get_storage_provider,
    new_storage,
    register_storage_provider,
    storage_providers,
)
from acmevault.records import SiteData, UserData
from acmevault.storage import TLSStorage
from acmevault.stores import InMemoryObjectStore, S3ObjectStore

__all__ = [
    "StorageConfig",
    "prefix_for_ca",
    "ConfigurationError",
    "DecodeError",
    "LockError",
    "NotExistError",
    "ObjectNotFoundError",
    "ObjectStoreError",
    "StorageError",
    "KeyNamespace",
    "LockState",
    "NameLocks",
    "Waiter",
    "ObjectStore",
    "get_storage_provider",
    "new_storage",
    "register_storage_provider",
    "storage_providers",
    "SiteData",
    "UserData",
    "TLSStorage",
    "InMemoryObjectStore",
    "S3ObjectStore",
]
