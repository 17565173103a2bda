"""Tests for InMemoryObjectStore."""

import pytest

from acmevault.errors import ObjectNotFoundError
from acmevault.object_store import ObjectStore
from acmevault.stores.memory import InMemoryObjectStore


class TestInMemoryObjectStore:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(InMemoryObjectStore(), ObjectStore)

    @pytest.mark.asyncio
    async def test_put_get_head(self) -> None:
        store = InMemoryObjectStore()
        assert await store.head("b", "k") is False
        await store.put("b", "k", b"v")
        assert await store.head("b", "k") is True
        assert await store.get("b", "k") == b"v"

    @pytest.mark.asyncio
    async def test_get_missing_raises_not_found(self) -> None:
        store = InMemoryObjectStore()
        with pytest.raises(ObjectNotFoundError) as exc_info:
            await store.get("b", "missing")
        assert exc_info.value.status_code == 404
        assert exc_info.value.key == "missing"

    @pytest.mark.asyncio
    async def test_buckets_are_isolated(self) -> None:
        store = InMemoryObjectStore()
        await store.put("b1", "k", b"v")
        assert await store.head("b2", "k") is False

    @pytest.mark.asyncio
    async def test_records_write_options(self) -> None:
        store = InMemoryObjectStore()
        await store.put("b", "k", b"v", content_type="text/plain")
        stored = store.stored("b", "k")
        assert stored.server_side_encryption == "AES256"
        assert stored.content_type == "text/plain"

    @pytest.mark.asyncio
    async def test_delete(self) -> None:
        store = InMemoryObjectStore()
        await store.put("b", "k", b"v")
        await store.delete("b", "k")
        assert store.keys("b") == []

    @pytest.mark.asyncio
    async def test_delete_missing_raises_not_found(self) -> None:
        store = InMemoryObjectStore()
        with pytest.raises(ObjectNotFoundError):
            await store.delete("b", "k")
