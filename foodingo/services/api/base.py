"""
Remote API Client Abstract Base Class

Defines the interface contract for the food-ordering REST backend.
Both MockApiClient and HttpApiClient implement these methods and share the
payload parsing below, so the session store behaves identically against
the in-memory demo backend and the hosted API.

Failures are raised as ApiError subclasses; converting them into
notifications or fallbacks is the caller's job.

Design Pattern: Strategy Pattern
    - Runtime switching between demo and hosted backends
    - Tests substitute their own implementation

Version: 1.0.0
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from pydantic import ValidationError

from foodingo.core.exceptions import ApiError
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


class BaseApiClient(ABC):
    """
    Abstract base class for remote API clients.

    Example:
        >>> client = get_api_client()  # Mock or HTTP
        >>> lines = await client.fetch_cart()
        >>> result = await client.increment_cart_item(lines[0].product_id)
        >>> if not result.success:
        ...     print("Server refused the increment")
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the client name (e.g. "mock", "http")."""
        pass

    # ==========================================================================
    # CATALOG
    # ==========================================================================

    @abstractmethod
    async def fetch_categories(self) -> list[Category]:
        """GET /categories"""
        pass

    @abstractmethod
    async def fetch_restaurants(self) -> list[Restaurant]:
        """GET /restaurants"""
        pass

    @abstractmethod
    async def fetch_offers(self) -> list[Offer]:
        """GET /offers"""
        pass

    @abstractmethod
    async def create_restaurant(self, restaurant: RestaurantCreate) -> ActionResponse:
        """POST /restaurants"""
        pass

    # ==========================================================================
    # USER
    # ==========================================================================

    @abstractmethod
    async def fetch_user(self) -> Optional[UserProfile]:
        """GET /userdata. Returns None when the backend sends no user."""
        pass

    # ==========================================================================
    # CART
    # ==========================================================================

    @abstractmethod
    async def fetch_cart(self) -> list[CartLine]:
        """GET /cart"""
        pass

    @abstractmethod
    async def add_to_cart(self, product_id: str, quantity: int = 1) -> ActionResponse:
        """POST /cart/add"""
        pass

    @abstractmethod
    async def increment_cart_item(self, product_id: str) -> ActionResponse:
        """POST /cart/increment"""
        pass

    @abstractmethod
    async def decrement_cart_item(self, product_id: str) -> ActionResponse:
        """POST /cart/decrement"""
        pass

    # ==========================================================================
    # ORDERS
    # ==========================================================================

    @abstractmethod
    async def create_order(self, order: OrderCreate) -> OrderCreateResponse:
        """POST /orders/create"""
        pass

    @abstractmethod
    async def list_user_orders(self) -> list[Order]:
        """GET /orders/user"""
        pass

    # ==========================================================================
    # LIFECYCLE
    # ==========================================================================

    @abstractmethod
    async def health_check(self) -> bool:
        """Verify the backend is reachable."""
        pass

    async def aclose(self) -> None:
        """Release network resources."""
        return None

    # ==========================================================================
    # PAYLOAD PARSING
    # ==========================================================================

    @staticmethod
    def _parse(model: Any, data: Any, what: str) -> Any:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise ApiError(f"Malformed {what} payload: {e.error_count()} error(s)")

    def _parse_list(self, model: Any, items: Any, what: str) -> list:
        if not isinstance(items, list):
            raise ApiError(f"Malformed {what} payload: expected a list")
        return [self._parse(model, item, what) for item in items]

    def _parse_categories(self, payload: Any) -> list[Category]:
        data = payload.get("categories") if isinstance(payload, dict) else None
        return self._parse_list(Category, data or [], "categories")

    def _parse_cart(self, payload: Any) -> list[CartLine]:
        cart = payload.get("cart") if isinstance(payload, dict) else None
        if not cart:
            return []
        if not isinstance(cart, dict):
            raise ApiError("Malformed cart payload")
        items = cart.get("items") or []
        return self._parse_list(CartLine, items, "cart")

    def _parse_user(self, payload: Any) -> Optional[UserProfile]:
        user = payload.get("user") if isinstance(payload, dict) else None
        if not user:
            return None
        if not isinstance(user, dict):
            raise ApiError("Malformed user payload")
        return self._parse(UserProfile, user, "user")

    def _parse_orders(self, payload: Any) -> list[Order]:
        orders = payload.get("orders") if isinstance(payload, dict) else None
        return self._parse_list(Order, orders or [], "orders")
