"""
Home Screen Model

Boot sequence: offers, restaurants, user profile, categories, run one
after another. Each step fails on its own (logged) so a flaky endpoint
never blocks the rest of the screen.
"""

import logging
from typing import Optional

from foodingo.core.exceptions import FoodingoError
from foodingo.schemas import CartItem, Category, Offer, Restaurant
from foodingo.screens.base import ScreenModel
from foodingo.store import ProductRef, SessionStore

logger = logging.getLogger(__name__)


class HomeScreen(ScreenModel):

    def __init__(self, store: SessionStore):
        super().__init__(store)
        self.loading = True
        self.offers: list[Offer] = []
        self.restaurants: list[Restaurant] = []

    # ==========================================================================
    # DERIVED STATE
    # ==========================================================================

    @property
    def greeting(self) -> str:
        user = self.store.user
        return f"Hi {user.name if user and user.name else 'Guest'}"

    @property
    def categories(self) -> list[Category]:
        return self.store.categories

    @property
    def cart_count(self) -> int:
        return self.store.cart_count

    def cart_item(self, product: ProductRef) -> Optional[CartItem]:
        return self.store.find_cart_item(product)

    # ==========================================================================
    # BOOT
    # ==========================================================================

    async def fetch_offers(self) -> None:
        try:
            offers = await self.api.fetch_offers()
        except FoodingoError as e:
            logger.warning(f"Offers API error: {e}")
            return
        self._set(offers=offers)

    async def fetch_restaurants(self) -> None:
        try:
            restaurants = await self.api.fetch_restaurants()
        except FoodingoError as e:
            logger.warning(f"Restaurants API error: {e}")
            return
        self._set(restaurants=restaurants)

    async def boot(self) -> None:
        try:
            await self.fetch_offers()
            await self.fetch_restaurants()
            await self.store.fetch_user()
            await self.store.fetch_categories()
        finally:
            self._set(loading=False)

    # ==========================================================================
    # ITEM CARD ACTIONS
    # ==========================================================================

    async def add(self, product: ProductRef) -> bool:
        return await self.store.add_to_cart(product)

    async def increase(self, product: ProductRef) -> bool:
        return await self.store.increase_quantity(product)

    async def decrease(self, product: ProductRef) -> bool:
        return await self.store.decrease_quantity(product)
