"""
File-Backed Key-Value Storage with Concurrency Control

Persists all keys in a single JSON document. Every read-modify-write
cycle holds a FileLock so several client processes can share one file.

Version: 1.0.0
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

from filelock import FileLock, Timeout

from foodingo.core.config import get_settings
from foodingo.core.exceptions import StorageError
from foodingo.services.storage.base import BaseStorage

logger = logging.getLogger(__name__)


class FileStorage(BaseStorage):
    """JSON-file storage guarded by a FileLock."""

    def __init__(
        self,
        path: Optional[Path] = None,
        lock_timeout: Optional[int] = None,
    ):
        settings = get_settings()
        self.path = Path(path) if path else settings.storage_path
        self.lock_timeout = (
            lock_timeout if lock_timeout is not None else settings.storage_lock_timeout
        )
        self._lock_path = self.path.with_name(self.path.name + ".lock")

        logger.info(f"FileStorage initialized ({self.path})")

    @property
    def provider_name(self) -> str:
        return "file"

    def _ensure_directory(self) -> None:
        """Create the storage directory if needed."""
        if not self.path.parent.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
            logger.info(f"Created storage directory: {self.path.parent}")

    def _load(self) -> dict[str, str]:
        """Load the document. Caller must hold the lock."""
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, ValueError) as e:
            raise StorageError(f"Could not read {self.path}: {e}")
        if not isinstance(data, dict):
            raise StorageError(f"Corrupt storage file {self.path}")
        return data

    def _dump(self, data: dict[str, str]) -> None:
        """Write the document atomically. Caller must hold the lock."""
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            tmp_path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as e:
            raise StorageError(f"Could not write {self.path}: {e}")

    def _locked(self) -> FileLock:
        return FileLock(str(self._lock_path), timeout=self.lock_timeout)

    def _read_sync(self, key: str) -> Optional[str]:
        try:
            self._ensure_directory()
            with self._locked():
                return self._load().get(key)
        except Timeout:
            raise StorageError(f"Timed out waiting for lock on {self.path}", key=key)
        except OSError as e:
            raise StorageError(f"Could not open {self.path}: {e}", key=key)

    def _update_sync(self, key: str, value: Optional[str]) -> None:
        try:
            self._ensure_directory()
            with self._locked():
                data = self._load()
                if value is None:
                    data.pop(key, None)
                else:
                    data[key] = value
                self._dump(data)
                logger.debug(f"File storage: {'removed' if value is None else 'set'} {key}")
        except Timeout:
            raise StorageError(f"Timed out waiting for lock on {self.path}", key=key)
        except OSError as e:
            raise StorageError(f"Could not open {self.path}: {e}", key=key)

    async def get_item(self, key: str) -> Optional[str]:
        return await asyncio.to_thread(self._read_sync, key)

    async def set_item(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._update_sync, key, value)

    async def remove_item(self, key: str) -> None:
        await asyncio.to_thread(self._update_sync, key, None)
