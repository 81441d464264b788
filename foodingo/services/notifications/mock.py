"""
Mock Notification Service

Records notifications in memory for development and tests.
Nothing is displayed - each notification is just logged and kept.
"""

import logging
from typing import Optional

from foodingo.schemas import NotificationType
from foodingo.services.notifications.base import BaseNotifier, Notification

logger = logging.getLogger(__name__)


class MockNotifier(BaseNotifier):
    """Mock notifier that keeps a history of everything shown."""

    def __init__(self):
        self.history: list[Notification] = []

    @property
    def provider_name(self) -> str:
        return "mock"

    def show(self, notification: Notification) -> None:
        self.history.append(notification)
        logger.info(f"Mock notification: {notification}")

    def of_type(self, kind: NotificationType) -> list[Notification]:
        return [n for n in self.history if n.type == kind]

    @property
    def errors(self) -> list[Notification]:
        return self.of_type(NotificationType.ERROR)

    @property
    def last(self) -> Optional[Notification]:
        return self.history[-1] if self.history else None

    def clear(self) -> None:
        self.history.clear()
