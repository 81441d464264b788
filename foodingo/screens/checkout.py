"""
Checkout Screen Model

Shows the mapped cart with its price breakdown and places the order.
Address and phone are prefilled from the user profile; both are
required before anything is sent.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from foodingo.checkout import OrderTotals, build_order_payload, calculate_order_totals
from foodingo.core.exceptions import ApiError, FoodingoError
from foodingo.schemas import CartItem
from foodingo.screens.base import ScreenModel, ScreenResult
from foodingo.store import SessionStore

logger = logging.getLogger(__name__)


@dataclass
class CheckoutResult(ScreenResult):
    order_id: Optional[str] = None


class CheckoutScreen(ScreenModel):

    def __init__(self, store: SessionStore):
        super().__init__(store)
        user = store.user
        self.address = (user.address if user else None) or ""
        self.phone = (user.phone if user else None) or ""
        self.loading = False
        self.order_id: Optional[str] = None

    @property
    def items(self) -> list[CartItem]:
        return self.store.mapped_items

    @property
    def totals(self) -> OrderTotals:
        return calculate_order_totals(self.items)

    def _validate(self) -> Optional[CheckoutResult]:
        if not self.address.strip():
            self.notifier.error("Address Required", "Please enter your delivery address")
            return CheckoutResult(success=False, error="address")
        if not self.phone.strip():
            self.notifier.error("Phone Required", "Please enter your phone number")
            return CheckoutResult(success=False, error="phone")
        if not self.items:
            self.notifier.error("Cart Empty", "Add something to your cart first")
            return CheckoutResult(success=False, error="empty_cart")
        return None

    async def place_order(self) -> CheckoutResult:
        invalid = self._validate()
        if invalid:
            return invalid

        if not await self.store.has_token():
            self.notifier.error("Authentication Error", "Please login again")
            return CheckoutResult(success=False, error="auth", requires_login=True)

        payload = build_order_payload(
            self.items, self.address.strip(), self.phone.strip(), self.totals
        )

        self._set(loading=True)
        try:
            response = await self.api.create_order(payload)
        except ApiError as e:
            logger.warning(f"Order creation failed: {e}")
            self.notifier.error("Order Failed", e.server_message or "Something went wrong")
            return CheckoutResult(success=False, error=str(e))
        except FoodingoError as e:
            logger.warning(f"Order creation failed: {e}")
            self.notifier.error("Order Failed", "Something went wrong")
            return CheckoutResult(success=False, error=str(e))
        finally:
            self._set(loading=False)

        if not response.success:
            self.notifier.error("Order Failed", response.message or "Something went wrong")
            return CheckoutResult(success=False, error=response.message or "rejected")

        logger.info(f"Order placed: {response.order_id}")
        self.notifier.success("Order Placed!", "Your order has been confirmed")
        self._set(order_id=response.order_id)
        # The backend empties the cart once the order exists
        await self.store.get_cart_data()
        return CheckoutResult(success=True, order_id=response.order_id)
