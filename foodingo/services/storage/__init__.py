"""
Storage Service Factory

Returns MemoryStorage (development) or FileStorage (staging/production)
based on ENV_MODE.

Usage:
    from foodingo.services.storage import get_storage, TOKEN_KEY

    storage = get_storage()
    token = await storage.get_item(TOKEN_KEY)
"""

import logging
from functools import lru_cache

from foodingo.core.config import get_settings
from foodingo.services.storage.base import (
    BaseStorage,
    TOKEN_KEY,
    LOGGED_IN_KEY,
    CATEGORIES_KEY,
)
from foodingo.services.storage.file import FileStorage
from foodingo.services.storage.memory import MemoryStorage

logger = logging.getLogger(__name__)


@lru_cache()
def get_storage() -> BaseStorage:
    """Get the configured key-value storage."""
    settings = get_settings()

    if settings.is_development:
        logger.info("Storage: Using MemoryStorage (development mode)")
        return MemoryStorage()
    else:
        logger.info(f"Storage: Using FileStorage ({settings.env_mode.value} mode)")
        return FileStorage()


def reset_storage() -> None:
    """Clear the cached storage instance."""
    get_storage.cache_clear()


__all__ = [
    "get_storage",
    "reset_storage",
    "BaseStorage",
    "FileStorage",
    "MemoryStorage",
    "TOKEN_KEY",
    "LOGGED_IN_KEY",
    "CATEGORIES_KEY",
]
