# tests\adapters\test_filesystem_store.py
import asyncio

import pytest

from app.adapters.persistence.filesystem_store import FileSystemKeyValueStore


@pytest.fixture
def store(tmp_path):
    return FileSystemKeyValueStore(base_path=str(tmp_path / "store"))


@pytest.mark.asyncio
class TestFileSystemKeyValueStore:

    async def test_set_then_get(self, store):
        await store.set("words:it", [{"word": "pivo", "count": 2}])
        assert await store.get("words:it") == [{"word": "pivo", "count": 2}]

    async def test_missing_key(self, store):
        assert await store.get("words:fr") is None

    async def test_unicode_survives(self, store):
        await store.set("history:it", {"original": "Já chci kvatro piva"})
        assert (await store.get("history:it"))["original"] == "Já chci kvatro piva"

    async def test_overwrite(self, store):
        await store.set("k", 1)
        await store.set("k", 2)
        assert await store.get("k") == 2

    async def test_delete(self, store):
        await store.set("words:it", [])
        await store.delete("words:it")
        assert await store.get("words:it") is None

    async def test_delete_missing_is_silent(self, store):
        await store.delete("never-written")

    async def test_keys_by_prefix(self, store):
        await store.set("words:it", [])
        await store.set("words:es", [])
        await store.set("history:it", [])

        assert await store.keys("words:") == ["words:es", "words:it"]
        assert await store.keys() == ["history:it", "words:es", "words:it"]

    async def test_no_temp_files_left(self, store):
        await store.set("words:it", [])
        assert [p.name for p in store.base_path.iterdir()] == ["words%3Ait.json"]

    async def test_corrupt_file_reads_as_missing(self, store):
        await store.set("words:it", [])
        store._get_file_path("words:it").write_text("{not json", encoding="utf-8")

        assert await store.get("words:it") is None

    async def test_health(self, store):
        assert await store.health_check() is True

    async def test_update_creates_missing_key(self, store):
        value = await store.update("words:it", lambda current: (current or []) + ["pivo"])

        assert value == ["pivo"]
        assert await store.get("words:it") == ["pivo"]

    async def test_concurrent_updates_do_not_lose_writes(self, store):
        await store.set("counter", 0)

        await asyncio.gather(*[store.update("counter", lambda n: n + 1) for _ in range(10)])

        assert await store.get("counter") == 10
