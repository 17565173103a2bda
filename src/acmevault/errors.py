"""Exception hierarchy for acmevault storage operations."""

from __future__ import annotations


class StorageError(Exception):
    """Base exception for everything raised by acmevault."""


class NotExistError(StorageError):
    """No object exists at the requested key.

    Expected condition: hosts branch on it ("not issued yet") rather than
    treating it as a fault.
    """

    def __init__(self, key: str) -> None:
        super().__init__(f"no data stored at {key!r}")
        self.key = key


class DecodeError(StorageError):
    """Stored payload could not be parsed into the expected record."""

    def __init__(self, message: str, key: str | None = None) -> None:
        if key is not None:
            message = f"{message} (key {key!r})"
        super().__init__(message)
        self.key = key


class LockError(StorageError):
    """unlock() was called for a name that is not currently claimed."""

    def __init__(self, name: str) -> None:
        super().__init__(f"no lock to release for {name}")
        self.name = name


class ConfigurationError(StorageError):
    """Missing or invalid storage configuration."""


# ---------------------------------------------------------------------------
# Object store failures
# ---------------------------------------------------------------------------


class ObjectStoreError(StorageError):
    """Object store call failed (network, permissions, throttling, ...)."""

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.key = key
        self.status_code = status_code


class ObjectNotFoundError(ObjectStoreError):
    """404 — the object store has nothing at the key."""
