"""
HTTP API Client Implementation

Production implementation talking to the hosted REST backend with httpx.
Used when ENV_MODE=production or ENV_MODE=staging.

The bearer token is looked up in storage for every request (request
event hook), so logging in or out takes effect on the next call without
rebuilding the client. Requests without a stored token carry no
Authorization header.

Version: 1.0.0
"""

import logging
from typing import Any, Optional

import httpx

from foodingo.core.config import get_settings
from foodingo.core.exceptions import (
    ApiAuthError,
    ApiConnectionError,
    ApiError,
    ApiTimeoutError,
    StorageError,
)
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
from foodingo.services.storage.base import BaseStorage, TOKEN_KEY

logger = logging.getLogger(__name__)


class HttpApiClient(BaseApiClient):
    """
    httpx-based client for the hosted backend.

    Example:
        >>> client = HttpApiClient(storage=get_storage())
        >>> categories = await client.fetch_categories()
        >>> await client.aclose()
    """

    def __init__(
        self,
        storage: BaseStorage,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self._storage = storage
        self.base_url = base_url or settings.api_base_url
        self.timeout = timeout if timeout is not None else settings.api_timeout_seconds

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers={"Content-Type": "application/json"},
            event_hooks={"request": [self._attach_token]},
            transport=transport,
        )

        logger.info(f"HttpApiClient initialized ({self.base_url}, timeout={self.timeout}s)")

    @property
    def provider_name(self) -> str:
        return "http"

    # ==========================================================================
    # TRANSPORT
    # ==========================================================================

    async def _attach_token(self, request: httpx.Request) -> None:
        """Inject the stored bearer token, if any."""
        try:
            token = await self._storage.get_item(TOKEN_KEY)
        except StorageError as e:
            logger.warning(f"Token lookup failed, sending unauthenticated: {e}")
            token = None

        if token:
            request.headers["Authorization"] = f"Bearer {token}"

    @staticmethod
    def _server_message(response: httpx.Response) -> Optional[str]:
        try:
            body = response.json()
        except ValueError:
            return None
        if not isinstance(body, dict):
            return None
        message = body.get("message") or body.get("error") or body.get("detail")
        # FastAPI validation errors put a list under "detail"
        return message if isinstance(message, str) else None

    async def _request(
        self,
        method: str,
        path: str,
        json: Optional[dict[str, Any]] = None,
    ) -> Any:
        """Send a request and return the decoded JSON body."""
        logger.debug(f"API {method} {path}")

        try:
            response = await self._client.request(method, path, json=json)
        except httpx.TimeoutException as e:
            logger.error(f"API timeout: {method} {path}")
            raise ApiTimeoutError(f"Request to {path} timed out") from e
        except httpx.HTTPError as e:
            logger.error(f"API transport error: {method} {path} - {e}")
            raise ApiConnectionError(f"Could not reach {path}: {e}") from e

        if response.status_code == 401:
            server_message = self._server_message(response)
            raise ApiAuthError(
                server_message or "Authentication required",
                status_code=401,
                response_body=response.text,
                server_message=server_message,
            )

        if response.is_error:
            server_message = self._server_message(response)
            message = server_message or f"HTTP {response.status_code}"
            logger.warning(f"API error: {method} {path} -> {response.status_code} ({message})")
            raise ApiError(
                message,
                status_code=response.status_code,
                response_body=response.text,
                server_message=server_message,
            )

        try:
            return response.json()
        except ValueError as e:
            raise ApiError(
                f"Invalid JSON from {path}",
                status_code=response.status_code,
                response_body=response.text,
            ) from e

    # ==========================================================================
    # CATALOG
    # ==========================================================================

    async def fetch_categories(self) -> list[Category]:
        return self._parse_categories(await self._request("GET", "/categories"))

    async def fetch_restaurants(self) -> list[Restaurant]:
        return self._parse_list(Restaurant, await self._request("GET", "/restaurants"), "restaurants")

    async def fetch_offers(self) -> list[Offer]:
        return self._parse_list(Offer, await self._request("GET", "/offers"), "offers")

    async def create_restaurant(self, restaurant: RestaurantCreate) -> ActionResponse:
        payload = await self._request("POST", "/restaurants", json=restaurant.to_wire())
        return self._parse(ActionResponse, payload, "restaurant")

    # ==========================================================================
    # USER
    # ==========================================================================

    async def fetch_user(self) -> Optional[UserProfile]:
        return self._parse_user(await self._request("GET", "/userdata"))

    # ==========================================================================
    # CART
    # ==========================================================================

    async def fetch_cart(self) -> list[CartLine]:
        return self._parse_cart(await self._request("GET", "/cart"))

    async def add_to_cart(self, product_id: str, quantity: int = 1) -> ActionResponse:
        payload = await self._request(
            "POST", "/cart/add", json={"productId": product_id, "quantity": quantity}
        )
        return self._parse(ActionResponse, payload, "cart")

    async def increment_cart_item(self, product_id: str) -> ActionResponse:
        payload = await self._request("POST", "/cart/increment", json={"productId": product_id})
        return self._parse(ActionResponse, payload, "cart")

    async def decrement_cart_item(self, product_id: str) -> ActionResponse:
        payload = await self._request("POST", "/cart/decrement", json={"productId": product_id})
        return self._parse(ActionResponse, payload, "cart")

    # ==========================================================================
    # ORDERS
    # ==========================================================================

    async def create_order(self, order: OrderCreate) -> OrderCreateResponse:
        payload = await self._request("POST", "/orders/create", json=order.to_wire())
        return self._parse(OrderCreateResponse, payload, "order")

    async def list_user_orders(self) -> list[Order]:
        return self._parse_orders(await self._request("GET", "/orders/user"))

    # ==========================================================================
    # LIFECYCLE
    # ==========================================================================

    async def health_check(self) -> bool:
        try:
            await self._request("GET", "/categories")
            return True
        except ApiError as e:
            logger.warning(f"API health check failed: {e}")
            return False

    async def aclose(self) -> None:
        await self._client.aclose()
