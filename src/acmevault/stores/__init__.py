"""ObjectStore implementations."""

from acmevault.stores.memory import InMemoryObjectStore
from acmevault.stores.s3 import S3ObjectStore

__all__ = ["InMemoryObjectStore", "S3ObjectStore"]
