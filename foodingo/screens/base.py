"""
Screen Model Base

A screen model holds one screen's state and actions without rendering.
It carries a liveness flag: once unmounted, results that arrive from
in-flight work are dropped instead of written.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from foodingo.services.api.base import BaseApiClient
from foodingo.services.notifications.base import BaseNotifier
from foodingo.store import SessionStore

logger = logging.getLogger(__name__)


@dataclass
class ScreenResult:
    """
    Outcome of a screen action.

    Attributes:
        success: Whether the action completed
        error: Short reason when it did not
        requires_login: The action needs a session that is not there
    """
    success: bool
    error: Optional[str] = None
    requires_login: bool = False


class ScreenModel:
    """Base class wiring a screen to the session store."""

    def __init__(self, store: SessionStore):
        self.store = store
        self.mounted = True
        self.render_count = 0
        self._unsubscribe = store.subscribe(self._on_store_change)

    @property
    def api(self) -> BaseApiClient:
        return self.store.api

    @property
    def notifier(self) -> BaseNotifier:
        return self.store.notifier

    def _on_store_change(self, store: SessionStore) -> None:
        if self.mounted:
            self.render_count += 1

    def _set(self, **changes: Any) -> bool:
        """Write state only while mounted. Returns whether it was applied."""
        if not self.mounted:
            logger.debug(f"{type(self).__name__}: dropped update after unmount {sorted(changes)}")
            return False
        for name, value in changes.items():
            setattr(self, name, value)
        return True

    def unmount(self) -> None:
        self.mounted = False
        self._unsubscribe()
