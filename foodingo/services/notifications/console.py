"""
Console Notification Service

Headless stand-in for on-screen toasts: notifications go to the
application log at a level matching their type.
"""

import logging

from foodingo.schemas import NotificationType
from foodingo.services.notifications.base import BaseNotifier, Notification

logger = logging.getLogger(__name__)

_LEVELS = {
    NotificationType.ERROR: logging.WARNING,
    NotificationType.SUCCESS: logging.INFO,
    NotificationType.INFO: logging.INFO,
}


class ConsoleNotifier(BaseNotifier):
    """Writes notifications to the log."""

    @property
    def provider_name(self) -> str:
        return "console"

    def show(self, notification: Notification) -> None:
        logger.log(_LEVELS.get(notification.type, logging.INFO), str(notification))
