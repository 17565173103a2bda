"""acmevault configuration — plain frozen dataclass, no pydantic.

Hosts either build StorageConfig directly or call ``from_env()`` once at
startup. Nothing is re-read per call.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from urllib.parse import urlsplit

from acmevault.constants import (
    DEFAULT_REGION,
    ENV_BUCKET,
    ENV_ENDPOINT_URL,
    ENV_REGION,
    PREFIX_ROOT,
)
from acmevault.errors import ConfigurationError


def prefix_for_ca(ca_url: str) -> str:
    """Return the key prefix for an ACME CA directory URL.

    ``https://acme-v02.api.letsencrypt.org/directory`` maps to
    ``acme/acme-v02.api.letsencrypt.org``. The host and port are used
    exactly as written (case and any port, ``:443`` included), without
    userinfo, so existing buckets keep resolving to the same keys.
    """
    try:
        authority = urlsplit(ca_url).netloc
    except ValueError as exc:
        raise ConfigurationError(f"invalid CA URL {ca_url!r}: {exc}") from exc
    host = authority.rpartition("@")[2]
    if not host:
        raise ConfigurationError(f"CA URL {ca_url!r} has no host")
    return f"{PREFIX_ROOT}/{host}"


@dataclass(frozen=True)
class StorageConfig:
    bucket: str
    prefix: str
    region: str = DEFAULT_REGION
    endpoint_url: str | None = None

    @classmethod
    def from_env(
        cls, ca_url: str, environ: Mapping[str, str] | None = None
    ) -> StorageConfig:
        """Resolve bucket, region and endpoint from the environment."""
        env = os.environ if environ is None else environ
        bucket = env.get(ENV_BUCKET, "").strip()
        if not bucket:
            raise ConfigurationError(f"{ENV_BUCKET} not set")
        return cls(
            bucket=bucket,
            prefix=prefix_for_ca(ca_url),
            region=env.get(ENV_REGION, "").strip() or DEFAULT_REGION,
            endpoint_url=env.get(ENV_ENDPOINT_URL, "").strip() or None,
        )
