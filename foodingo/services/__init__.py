"""
                        Services Module

Collaborators of the session store, each with the hybrid architecture
pattern: a Mock (development) and a Real (staging/production)
implementation behind an abstract base, selected by a cached factory.

Services:
    - api: Remote REST backend (MockApiClient / HttpApiClient)
    - storage: Durable key-value store (MemoryStorage / FileStorage)
    - notifications: User-facing toasts (MockNotifier / ConsoleNotifier)
"""

from foodingo.services.api import get_api_client
from foodingo.services.notifications import get_notifier
from foodingo.services.storage import get_storage

__all__ = ["get_api_client", "get_notifier", "get_storage"]
