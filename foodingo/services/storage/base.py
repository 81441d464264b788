"""
Key-Value Storage Abstract Base Class

Defines the interface for the durable string-valued store that holds the
auth token, the login flag and the category fallback cache.

Implementations raise StorageError on I/O failure; callers decide whether
a failure is soft (it always is for the session store).

Version: 1.0.0
"""

from abc import ABC, abstractmethod
from typing import Optional

# Well-known keys
TOKEN_KEY = "token"
LOGGED_IN_KEY = "isLoggedIn"
CATEGORIES_KEY = "categories"


class BaseStorage(ABC):
    """Abstract base class for key-value storage backends."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the backend name."""
        pass

    @abstractmethod
    async def get_item(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is absent."""
        pass

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        """Store a value."""
        pass

    @abstractmethod
    async def remove_item(self, key: str) -> None:
        """Remove a key. Missing keys are ignored."""
        pass
