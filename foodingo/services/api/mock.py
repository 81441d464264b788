"""
Mock API Client Implementation

Simulates the hosted backend without network calls.
Used in development mode (ENV_MODE=development) to:
    - Exercise the optimistic cart flow locally
    - Run the chaos simulation without a server
    - Develop without internet connectivity

Behavior:
    - Simulates response times (configurable latency range)
    - Randomly fails a share of calls (simulates flaky mobile networks)
    - Can fail specific operations on demand (fail_operations)
    - Backed by a DemoBackend holding catalog, cart and orders
"""

import asyncio
import logging
import random
from typing import Iterable, Optional

from foodingo.core.exceptions import ApiConnectionError
from foodingo.schemas import (
    ActionResponse,
    CartLine,
    Category,
    Offer,
    Order,
    OrderCreate,
    OrderCreateResponse,
    Restaurant,
    RestaurantCreate,
    UserProfile,
)
from foodingo.services.api.base import BaseApiClient
from foodingo.services.api.catalog import DemoBackend

logger = logging.getLogger(__name__)


class MockApiClient(BaseApiClient):
    """
    Mock implementation of the remote API.

    Attributes:
        backend: DemoBackend holding server-side state
        failure_rate: Probability of a simulated network failure (0.0-1.0)
        fail_operations: Operation names that always fail (e.g. "increment")

    Example:
        >>> client = MockApiClient(failure_rate=0.0, fail_operations={"increment"})
        >>> await client.increment_cart_item("prod-margherita")
        Traceback (most recent call last):
        ApiConnectionError: Simulated network failure (increment)
    """

    def __init__(
        self,
        backend: Optional[DemoBackend] = None,
        failure_rate: float = 0.05,
        min_latency: float = 0.05,
        max_latency: float = 0.3,
        fail_operations: Optional[Iterable[str]] = None,
    ):
        self.backend = backend or DemoBackend()
        self.failure_rate = failure_rate
        self.min_latency = min_latency
        self.max_latency = max_latency
        self.fail_operations: set[str] = set(fail_operations or ())
        self.calls: list[str] = []

        logger.info(
            f"MockApiClient initialized "
            f"(failure_rate={failure_rate:.0%}, "
            f"latency={min_latency}-{max_latency}s)"
        )

    @property
    def provider_name(self) -> str:
        return "mock"

    async def _simulate_latency(self) -> None:
        """Simulate network latency."""
        await asyncio.sleep(random.uniform(self.min_latency, self.max_latency))

    def _should_fail(self, operation: str) -> bool:
        if operation in self.fail_operations:
            return True
        return random.random() < self.failure_rate

    async def _call(self, operation: str) -> None:
        """Record the call, wait, and maybe fail."""
        self.calls.append(operation)
        await self._simulate_latency()
        if self._should_fail(operation):
            logger.warning(f"Mock API failure (simulated): {operation}")
            raise ApiConnectionError(f"Simulated network failure ({operation})")

    # ==========================================================================
    # CATALOG
    # ==========================================================================

    async def fetch_categories(self) -> list[Category]:
        await self._call("categories")
        return self._parse_categories(self.backend.categories_payload())

    async def fetch_restaurants(self) -> list[Restaurant]:
        await self._call("restaurants")
        return self._parse_list(Restaurant, self.backend.restaurants_payload(), "restaurants")

    async def fetch_offers(self) -> list[Offer]:
        await self._call("offers")
        return self._parse_list(Offer, self.backend.offers_payload(), "offers")

    async def create_restaurant(self, restaurant: RestaurantCreate) -> ActionResponse:
        await self._call("create_restaurant")
        return ActionResponse.model_validate(self.backend.create_restaurant(restaurant.to_wire()))

    # ==========================================================================
    # USER
    # ==========================================================================

    async def fetch_user(self) -> Optional[UserProfile]:
        await self._call("user")
        return self._parse_user(self.backend.user_payload())

    # ==========================================================================
    # CART
    # ==========================================================================

    async def fetch_cart(self) -> list[CartLine]:
        await self._call("cart")
        return self._parse_cart(self.backend.cart_payload())

    async def add_to_cart(self, product_id: str, quantity: int = 1) -> ActionResponse:
        await self._call("add")
        ok = self.backend.add_to_cart(product_id, quantity)
        return ActionResponse(success=ok, message=None if ok else "Product not found")

    async def increment_cart_item(self, product_id: str) -> ActionResponse:
        await self._call("increment")
        return ActionResponse(success=self.backend.increment(product_id))

    async def decrement_cart_item(self, product_id: str) -> ActionResponse:
        await self._call("decrement")
        return ActionResponse(success=self.backend.decrement(product_id))

    # ==========================================================================
    # ORDERS
    # ==========================================================================

    async def create_order(self, order: OrderCreate) -> OrderCreateResponse:
        await self._call("create_order")
        return OrderCreateResponse.model_validate(self.backend.create_order(order.to_wire()))

    async def list_user_orders(self) -> list[Order]:
        await self._call("orders")
        return self._parse_orders(self.backend.orders_payload())

    async def health_check(self) -> bool:
        """Mock always returns healthy."""
        return True
