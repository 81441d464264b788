"""
Session & Cart State Store

Single source of truth for login status, the user profile, the category
list and the cart. Screens read its accessors and call its operations;
nothing else mutates this state.

Consistency model:
    - Cart quantity changes are optimistic: the local delta is applied
      synchronously, then the remote persist runs as a task.
    - A failed persist notifies the user once and re-fetches the cart
      from the server (rollback-by-refetch). With several operations in
      flight on the same line, the last resync wins; individual deltas
      are never reversed.
    - mapped_items is recomputed whenever the cart lines change.

No operation raises on collaborator failure: errors become notifications
or logged fallbacks.

Usage:
    store = build_session_store()
    await store.check_session()
    await store.fetch_categories()

    task = store.increase_quantity(item)   # local state already updated
    await task                             # remote persist settled

Version: 1.0.0
"""

import asyncio
import json
import logging
from typing import Any, Callable, Optional, Union

from foodingo.core.exceptions import ApiAuthError, ApiError, FoodingoError, StorageError
from foodingo.lookup import LookupOutcome, layered_lookup
from foodingo.schemas import CartItem, CartLine, Category, Product, UserProfile
from foodingo.services.api import BaseApiClient, get_api_client
from foodingo.services.notifications import BaseNotifier, get_notifier
from foodingo.services.storage import (
    CATEGORIES_KEY,
    LOGGED_IN_KEY,
    TOKEN_KEY,
    BaseStorage,
    get_storage,
)

logger = logging.getLogger(__name__)

ProductRef = Union[str, Product, CartLine, dict]
Listener = Callable[["SessionStore"], None]


def product_id_of(product: ProductRef) -> str:
    """Resolve the product identity of anything the UI hands us."""
    if isinstance(product, str):
        return product
    if isinstance(product, CartLine):
        return product.product_id
    if isinstance(product, Product):
        return product.id
    if isinstance(product, dict):
        ref = product.get("_id") or product.get("id") or product.get("productId")
        if isinstance(ref, dict):
            ref = ref.get("_id")
        if ref:
            return str(ref)
    raise ValueError(f"Cannot determine product id from {product!r}")


class SessionStore:
    """
    Explicitly constructed state container for session, profile,
    categories and cart.

    Attributes:
        api: Remote API collaborator
        storage: Durable key-value collaborator
        notifier: User-facing notification channel
    """

    def __init__(
        self,
        api: BaseApiClient,
        storage: BaseStorage,
        notifier: BaseNotifier,
    ):
        self.api = api
        self.storage = storage
        self.notifier = notifier

        self._is_logged_in = False
        self._user: Optional[UserProfile] = None
        self._categories: list[Category] = []
        self._cart_lines: list[CartLine] = []
        self._mapped_items: list[CartItem] = []

        # product id -> number of persist calls still in flight
        self._in_flight: dict[str, int] = {}
        self._tasks: set[asyncio.Task] = set()
        self._listeners: list[Listener] = []

    # ==========================================================================
    # READ ACCESSORS
    # ==========================================================================

    @property
    def is_logged_in(self) -> bool:
        return self._is_logged_in

    @property
    def user(self) -> Optional[UserProfile]:
        return self._user

    @property
    def categories(self) -> list[Category]:
        return list(self._categories)

    @property
    def cart_lines(self) -> list[CartLine]:
        return list(self._cart_lines)

    @property
    def mapped_items(self) -> list[CartItem]:
        """Flattened cart view; rebuilt on every cart change."""
        return list(self._mapped_items)

    @property
    def cart_count(self) -> int:
        """Total quantity across all lines (cart badge)."""
        return sum(line.quantity for line in self._cart_lines)

    @property
    def pending_products(self) -> set[str]:
        return set(self._in_flight)

    def is_pending(self, product: ProductRef) -> bool:
        return product_id_of(product) in self._in_flight

    def find_cart_item(self, product: ProductRef) -> Optional[CartItem]:
        product_id = product_id_of(product)
        return next((item for item in self._mapped_items if item.id == product_id), None)

    # ==========================================================================
    # CHANGE NOTIFICATION
    # ==========================================================================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a change listener.

        Returns:
            Callable that unregisters the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Store listener failed")

    # ==========================================================================
    # STATE MUTATION (internal)
    # ==========================================================================

    def _set_cart_lines(self, lines: list[CartLine]) -> None:
        self._cart_lines = list(lines)
        self._mapped_items = [CartItem.from_line(line) for line in self._cart_lines]
        self._emit()

    def _apply_delta(self, product_id: str, delta: int) -> bool:
        """Apply a quantity delta locally; lines reaching zero are dropped."""
        found = False
        lines = []
        for line in self._cart_lines:
            if line.product_id == product_id:
                found = True
                quantity = line.quantity + delta
                if quantity <= 0:
                    continue
                line = line.model_copy(update={"quantity": quantity})
            lines.append(line)

        if found:
            self._set_cart_lines(lines)
        return found

    def set_user(self, user: Optional[UserProfile]) -> None:
        self._user = user
        self._emit()

    # ==========================================================================
    # STORAGE HELPERS
    # ==========================================================================

    async def _read_token(self) -> Optional[str]:
        """Stored auth token; unreadable storage counts as no session."""
        try:
            return await self.storage.get_item(TOKEN_KEY)
        except StorageError as e:
            logger.warning(f"Token read failed, treating as logged out: {e}")
            return None

    async def has_token(self) -> bool:
        return bool(await self._read_token())

    async def _read_cached_categories(self) -> Optional[list[Category]]:
        raw = await self.storage.get_item(CATEGORIES_KEY)
        if not raw:
            return None
        data = json.loads(raw)
        # Older clients cached the whole {categories: [...]} response
        if isinstance(data, dict):
            data = data.get("categories")
        if not isinstance(data, list):
            raise ValueError("Cached categories are not a list")
        return [Category.model_validate(item) for item in data]

    async def _cache_categories(self, categories: list[Category]) -> None:
        try:
            payload = json.dumps([c.to_wire() for c in categories], ensure_ascii=False)
            await self.storage.set_item(CATEGORIES_KEY, payload)
        except StorageError as e:
            logger.warning(f"Category cache write failed: {e}")

    # ==========================================================================
    # SESSION
    # ==========================================================================

    async def check_session(self) -> bool:
        """
        Restore the session from storage.

        A stored token marks the session logged in and refreshes the cart;
        otherwise the session is logged out and the cart emptied.

        Returns:
            bool: Whether the session is logged in
        """
        token = await self._read_token()

        if token:
            self._is_logged_in = True
            self._emit()
            await self.get_cart_data()
        else:
            self._is_logged_in = False
            self._set_cart_lines([])

        logger.info(f"Session checked: logged_in={self._is_logged_in}")
        return self._is_logged_in

    async def login(self, token: str, user: Optional[UserProfile] = None) -> None:
        """Persist a freshly issued token and load the user's cart."""
        try:
            await self.storage.set_item(TOKEN_KEY, token)
            await self.storage.set_item(LOGGED_IN_KEY, "true")
        except StorageError as e:
            logger.warning(f"Could not persist session: {e}")

        self._is_logged_in = True
        self._user = user
        self._emit()
        await self.get_cart_data()

    async def logout(self) -> None:
        """Forget the token and clear profile and cart."""
        for key in (TOKEN_KEY, LOGGED_IN_KEY):
            try:
                await self.storage.remove_item(key)
            except StorageError as e:
                logger.warning(f"Could not clear '{key}' from storage: {e}")

        self._is_logged_in = False
        self._user = None
        self._set_cart_lines([])
        logger.info("Logged out")

    async def fetch_user(self) -> Optional[UserProfile]:
        """Load the profile of the logged-in user; failures are only logged."""
        if not await self._read_token():
            return None

        try:
            user = await self.api.fetch_user()
        except ApiAuthError as e:
            logger.warning(f"Token rejected while fetching user, ending session: {e}")
            await self.logout()
            return None
        except FoodingoError as e:
            logger.warning(f"User API error: {e}")
            return None

        if user:
            self.set_user(user)
        return user

    # ==========================================================================
    # CATEGORIES
    # ==========================================================================

    async def fetch_categories(self) -> LookupOutcome:
        """
        Load categories: remote first, then the local cache.

        A remote success replaces the list and refreshes the cache. When
        both layers miss, the current list is kept.
        """
        outcome = await layered_lookup([
            ("remote", self.api.fetch_categories),
            ("cache", self._read_cached_categories),
        ])

        if outcome.source == "remote":
            self._categories = list(outcome.value)
            self._emit()
            await self._cache_categories(self._categories)
        elif outcome.found:
            logger.info(f"Categories served from cache ({len(outcome.value)} items)")
            self._categories = list(outcome.value)
            self._emit()
        else:
            logger.warning(f"Categories unavailable: {outcome.errors}")

        return outcome

    # ==========================================================================
    # CART
    # ==========================================================================

    async def get_cart_data(self) -> bool:
        """
        Replace the cart with the server's version.

        No-op without a token. On failure the user is notified and the
        current cart is left untouched.

        Returns:
            bool: Whether the cart was refreshed
        """
        if not await self._read_token():
            return False

        try:
            lines = await self.api.fetch_cart()
        except FoodingoError as e:
            logger.warning(f"Cart fetch failed: {e}")
            self.notifier.error("Cart Error", "Failed to load cart")
            return False

        self._set_cart_lines(lines)
        return True

    async def add_to_cart(self, product: ProductRef, quantity: int = 1) -> bool:
        """Add a product that is not yet in the cart, then resync."""
        product_id = product_id_of(product)

        try:
            result = await self.api.add_to_cart(product_id, quantity)
        except ApiError as e:
            self.notifier.error(e.server_message or "Error adding to cart")
            return False
        except FoodingoError as e:
            logger.warning(f"Add to cart failed: {e}")
            self.notifier.error("Error adding to cart")
            return False

        if not result.success:
            self.notifier.error("Failed to add to cart")
            return False

        await self.get_cart_data()
        return True

    def increase_quantity(self, product: ProductRef) -> "asyncio.Future[bool]":
        """
        Optimistically add one to a cart line and persist it remotely.

        Must be called from within the running event loop. The local
        change is visible as soon as this returns.

        Returns:
            Awaitable resolving to True when the server accepted the change,
            False when it was rolled back or no line matched.
        """
        return self._optimistic_update(product_id_of(product), +1, "increment")

    def decrease_quantity(self, product: ProductRef) -> "asyncio.Future[bool]":
        """
        Optimistically remove one from a cart line (dropping it at zero)
        and persist it remotely. Same contract as increase_quantity.
        """
        return self._optimistic_update(product_id_of(product), -1, "decrement")

    def _optimistic_update(
        self,
        product_id: str,
        delta: int,
        operation: str,
    ) -> "asyncio.Future[bool]":
        loop = asyncio.get_running_loop()

        if self.find_cart_item(product_id) is None:
            logger.debug(f"No cart line for {product_id}; {operation} ignored")
            future = loop.create_future()
            future.set_result(False)
            return future

        # Listeners must already see the line as pending
        self._in_flight[product_id] = self._in_flight.get(product_id, 0) + 1
        self._apply_delta(product_id, delta)
        task = loop.create_task(self._persist(product_id, operation))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _persist(self, product_id: str, operation: str) -> bool:
        error: Optional[str] = None
        try:
            if operation == "increment":
                result = await self.api.increment_cart_item(product_id)
            else:
                result = await self.api.decrement_cart_item(product_id)
            if not result.success:
                error = result.message or "rejected by server"
        except FoodingoError as e:
            error = str(e)
        finally:
            remaining = self._in_flight.get(product_id, 1) - 1
            if remaining > 0:
                self._in_flight[product_id] = remaining
            else:
                self._in_flight.pop(product_id, None)

        if error is None:
            self._emit()
            return True

        logger.warning(f"Cart {operation} failed for {product_id}: {error}; resyncing")
        self.notifier.error("Update Failed", "Could not update cart")
        await self.get_cart_data()
        return False

    async def drain(self) -> None:
        """Wait for every outstanding cart persist to settle."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))


def build_session_store(
    api: Optional[BaseApiClient] = None,
    storage: Optional[BaseStorage] = None,
    notifier: Optional[BaseNotifier] = None,
) -> SessionStore:
    """
    Wire a SessionStore from explicit collaborators, falling back to the
    configured service factories for any that are omitted.
    """
    store = SessionStore(
        api=api or get_api_client(),
        storage=storage or get_storage(),
        notifier=notifier or get_notifier(),
    )
    logger.info(
        f"SessionStore built "
        f"(api={store.api.provider_name}, "
        f"storage={store.storage.provider_name}, "
        f"notifications={store.notifier.provider_name})"
    )
    return store


def describe_cart(store: SessionStore) -> list[dict[str, Any]]:
    """Compact cart summary for logs and CLI output."""
    return [
        {"product": item.name or item.id, "quantity": item.quantity, "line_total": item.line_total}
        for item in store.mapped_items
    ]
