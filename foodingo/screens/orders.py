"""My Orders screen model: order history with a status filter."""

import logging

from foodingo.core.exceptions import ApiError, FoodingoError
from foodingo.schemas import Order, OrderStatusEnum
from foodingo.screens.base import ScreenModel
from foodingo.store import SessionStore

logger = logging.getLogger(__name__)

ALL_FILTER = "All"
FILTER_OPTIONS = [ALL_FILTER] + [status.value for status in OrderStatusEnum]


class MyOrdersScreen(ScreenModel):

    def __init__(self, store: SessionStore):
        super().__init__(store)
        self.orders: list[Order] = []
        self.loading = True
        self.refreshing = False
        self.active_filter = ALL_FILTER

    @property
    def filtered_orders(self) -> list[Order]:
        if self.active_filter == ALL_FILTER:
            return list(self.orders)
        return [o for o in self.orders if o.status == self.active_filter]

    def set_filter(self, value: str) -> None:
        if value not in FILTER_OPTIONS:
            raise ValueError(f"Unknown order filter: {value}")
        self.active_filter = value

    async def fetch_orders(self) -> bool:
        try:
            orders = await self.api.list_user_orders()
        except ApiError as e:
            logger.warning(f"Orders API error: {e}")
            self.notifier.error("Failed to load orders", e.server_message or "Something went wrong")
            return False
        except FoodingoError as e:
            logger.warning(f"Orders API error: {e}")
            self.notifier.error("Failed to load orders", "Something went wrong")
            return False
        finally:
            self._set(loading=False, refreshing=False)

        self._set(orders=orders)
        return True

    async def refresh(self) -> bool:
        self._set(refreshing=True)
        return await self.fetch_orders()
