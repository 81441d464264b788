"""
Order Totals & Payload

Pure helpers shared by the checkout screen model and the simulation
script. Amounts follow the client's pricing rule:

    subtotal = sum(offer_price * quantity)
    tax      = subtotal * tax_rate
    total    = subtotal + delivery_fee + tax
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from foodingo.core.config import get_settings
from foodingo.schemas import CartItem, OrderCreate, OrderItemCreate


@dataclass
class OrderTotals:
    """Price breakdown shown on the checkout screen."""
    subtotal: float
    delivery_fee: float
    tax: float
    total: float

    def to_dict(self) -> dict[str, float]:
        return {
            "subtotal": self.subtotal,
            "delivery_fee": self.delivery_fee,
            "tax": self.tax,
            "total": self.total,
        }


def calculate_order_totals(
    items: Iterable[CartItem],
    delivery_fee: Optional[float] = None,
    tax_rate: Optional[float] = None,
) -> OrderTotals:
    """Calculate order subtotal, tax, and total."""
    settings = get_settings()
    fee = settings.delivery_fee if delivery_fee is None else delivery_fee
    rate = settings.tax_rate if tax_rate is None else tax_rate

    subtotal = sum(item.offer_price * item.quantity for item in items)
    tax = subtotal * rate

    return OrderTotals(
        subtotal=round(subtotal, 2),
        delivery_fee=round(fee, 2),
        tax=round(tax, 2),
        total=round(subtotal + fee + tax, 2),
    )


def build_order_payload(
    items: list[CartItem],
    delivery_address: str,
    phone: str,
    totals: Optional[OrderTotals] = None,
) -> OrderCreate:
    """Build the POST /orders/create body from the mapped cart."""
    totals = totals or calculate_order_totals(items)
    return OrderCreate(
        items=[
            OrderItemCreate(item_id=item.id, quantity=item.quantity, price=item.offer_price)
            for item in items
        ],
        delivery_address=delivery_address,
        phone=phone,
        subtotal=totals.subtotal,
        delivery_fee=totals.delivery_fee,
        tax=totals.tax,
        total=totals.total,
    )
