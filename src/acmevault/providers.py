"""Named storage providers for TLS engines that pick storage by name.

``"s3"`` and ``"memory"`` are registered when this module is imported.
A factory takes the ACME CA directory URL and returns a TLSStorage.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping

from acmevault.config import StorageConfig, prefix_for_ca
from acmevault.errors import ConfigurationError
from acmevault.storage import TLSStorage
from acmevault.stores.memory import InMemoryObjectStore
from acmevault.stores.s3 import S3ObjectStore

logger = logging.getLogger(__name__)

StorageFactory = Callable[[str], TLSStorage]

_providers: dict[str, StorageFactory] = {}
_providers_lock = threading.Lock()


def register_storage_provider(
    name: str, factory: StorageFactory, *, replace: bool = False
) -> None:
    """Register ``factory`` under ``name``."""
    with _providers_lock:
        if name in _providers and not replace:
            raise ConfigurationError(f"storage provider {name!r} already registered")
        _providers[name] = factory


def get_storage_provider(name: str) -> StorageFactory:
    with _providers_lock:
        factory = _providers.get(name)
    if factory is None:
        raise ConfigurationError(f"unknown storage provider {name!r}")
    return factory


def storage_providers() -> list[str]:
    with _providers_lock:
        return sorted(_providers)


def new_storage(name: str, ca_url: str) -> TLSStorage:
    """Build storage for ``ca_url`` with the provider registered as ``name``."""
    return get_storage_provider(name)(ca_url)


# ---------------------------------------------------------------------------
# Built-in providers
# ---------------------------------------------------------------------------


def new_s3_storage(
    ca_url: str, environ: Mapping[str, str] | None = None
) -> TLSStorage:
    """S3-backed storage configured from ``ACMEVAULT_S3_*`` variables."""
    config = StorageConfig.from_env(ca_url, environ)
    logger.info(
        "Using S3 storage s3://%s/%s (region %s).",
        config.bucket, config.prefix, config.region,
    )
    return TLSStorage.from_config(S3ObjectStore.from_config(config), config)


def new_memory_storage(ca_url: str) -> TLSStorage:
    """Process-local storage; everything is lost on exit."""
    return TLSStorage(InMemoryObjectStore(), bucket="memory", prefix=prefix_for_ca(ca_url))


register_storage_provider("s3", new_s3_storage)
register_storage_provider("memory", new_memory_storage)
