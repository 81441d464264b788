"""
In-Memory Key-Value Storage

Used in development mode and in tests. Reads and writes can be made to
fail on demand to exercise the soft-failure paths of the session store.
"""

import logging
from typing import Optional

from foodingo.core.exceptions import StorageError
from foodingo.services.storage.base import BaseStorage

logger = logging.getLogger(__name__)


class MemoryStorage(BaseStorage):
    """Dict-backed storage with optional simulated I/O failures."""

    def __init__(
        self,
        initial: Optional[dict[str, str]] = None,
        fail_reads: bool = False,
        fail_writes: bool = False,
    ):
        self._data: dict[str, str] = dict(initial or {})
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes

    @property
    def provider_name(self) -> str:
        return "memory"

    async def get_item(self, key: str) -> Optional[str]:
        if self.fail_reads:
            raise StorageError("Simulated storage read failure", key=key)
        return self._data.get(key)

    async def set_item(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageError("Simulated storage write failure", key=key)
        self._data[key] = value
        logger.debug(f"Memory storage: set {key}")

    async def remove_item(self, key: str) -> None:
        if self.fail_writes:
            raise StorageError("Simulated storage write failure", key=key)
        self._data.pop(key, None)

    def snapshot(self) -> dict[str, str]:
        """Copy of the current contents."""
        return dict(self._data)
