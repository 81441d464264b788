"""Tests for the key-value storage implementations."""

import json

import pytest

from foodingo.core.exceptions import StorageError
from foodingo.services.storage import FileStorage, MemoryStorage


class TestMemoryStorage:

    @pytest.mark.asyncio
    async def test_set_get_remove(self):
        storage = MemoryStorage()

        await storage.set_item("token", "abc")
        assert await storage.get_item("token") == "abc"

        await storage.remove_item("token")
        assert await storage.get_item("token") is None

    @pytest.mark.asyncio
    async def test_simulated_failures(self):
        storage = MemoryStorage({"token": "abc"}, fail_reads=True, fail_writes=True)

        with pytest.raises(StorageError) as exc:
            await storage.get_item("token")
        assert exc.value.key == "token"

        with pytest.raises(StorageError):
            await storage.set_item("token", "new")
        assert storage.snapshot() == {"token": "abc"}


class TestFileStorage:

    @pytest.mark.asyncio
    async def test_values_survive_new_instance(self, tmp_path):
        path = tmp_path / "nested" / "storage.json"
        await FileStorage(path=path).set_item("token", "abc")

        reopened = FileStorage(path=path)

        assert await reopened.get_item("token") == "abc"
        assert json.loads(path.read_text(encoding="utf-8")) == {"token": "abc"}

    @pytest.mark.asyncio
    async def test_missing_file_reads_as_empty(self, tmp_path):
        storage = FileStorage(path=tmp_path / "storage.json")

        assert await storage.get_item("token") is None

    @pytest.mark.asyncio
    async def test_remove_keeps_other_keys(self, tmp_path):
        storage = FileStorage(path=tmp_path / "storage.json")
        await storage.set_item("token", "abc")
        await storage.set_item("isLoggedIn", "true")

        await storage.remove_item("token")

        assert await storage.get_item("token") is None
        assert await storage.get_item("isLoggedIn") == "true"

    @pytest.mark.asyncio
    async def test_corrupt_file_raises_storage_error(self, tmp_path):
        path = tmp_path / "storage.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")

        with pytest.raises(StorageError):
            await FileStorage(path=path).get_item("token")

    @pytest.mark.asyncio
    async def test_no_temp_file_left_behind(self, tmp_path):
        path = tmp_path / "storage.json"
        await FileStorage(path=path).set_item("categories", "[]")

        assert sorted(p.name for p in tmp_path.iterdir() if not p.name.endswith(".lock")) == [
            "storage.json"
        ]

    @pytest.mark.asyncio
    async def test_directory_blocked_by_file_raises_storage_error(self, tmp_path):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("", encoding="utf-8")
        storage = FileStorage(path=blocker / "storage.json", lock_timeout=1)

        with pytest.raises(StorageError) as exc:
            await storage.get_item("token")
        assert exc.value.key == "token"

        with pytest.raises(StorageError):
            await storage.set_item("token", "abc")
        with pytest.raises(StorageError):
            await storage.remove_item("token")
