"""
Notification Service Abstract Base Class

Defines the interface for non-blocking user-facing notifications
("toasts"). The session store and screen models report every surfaced
failure through this channel instead of raising.

Version: 1.0.0
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from foodingo.schemas import NotificationType


@dataclass
class Notification:
    """A single user-facing notification."""
    type: NotificationType
    title: str
    message: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        if self.message:
            return f"[{self.type.value}] {self.title}: {self.message}"
        return f"[{self.type.value}] {self.title}"


class BaseNotifier(ABC):
    """Abstract base class for notification channels."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name."""
        pass

    @abstractmethod
    def show(self, notification: Notification) -> None:
        """Display a notification. Must not block or raise."""
        pass

    def error(self, title: str, message: Optional[str] = None) -> Notification:
        notification = Notification(NotificationType.ERROR, title, message)
        self.show(notification)
        return notification

    def success(self, title: str, message: Optional[str] = None) -> Notification:
        notification = Notification(NotificationType.SUCCESS, title, message)
        self.show(notification)
        return notification

    def info(self, title: str, message: Optional[str] = None) -> Notification:
        notification = Notification(NotificationType.INFO, title, message)
        self.show(notification)
        return notification
