"""
Notification Service Factory

Returns Mock or Console notifier based on ENV_MODE.
"""

import logging
from functools import lru_cache

from foodingo.core.config import get_settings
from foodingo.services.notifications.base import BaseNotifier, Notification
from foodingo.services.notifications.console import ConsoleNotifier
from foodingo.services.notifications.mock import MockNotifier

logger = logging.getLogger(__name__)


@lru_cache()
def get_notifier() -> BaseNotifier:
    """Get the configured notification channel."""
    settings = get_settings()

    if settings.is_development:
        logger.info("Notifications: Using MockNotifier (development mode)")
        return MockNotifier()
    else:
        logger.info(f"Notifications: Using ConsoleNotifier ({settings.env_mode.value} mode)")
        return ConsoleNotifier()


def reset_notifier() -> None:
    """Clear the cached notifier instance."""
    get_notifier.cache_clear()


__all__ = [
    "get_notifier",
    "reset_notifier",
    "BaseNotifier",
    "Notification",
    "MockNotifier",
    "ConsoleNotifier",
]
