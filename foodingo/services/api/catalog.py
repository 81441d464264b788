"""
In-Memory Demo Backend

Holds the state of a single-user demo backend: catalog, cart, orders.
Shared by MockApiClient (development mode) and the FastAPI dev server, and
speaks the same wire format as the hosted API (plain JSON-ready dicts).
"""

import copy
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Optional

logger = logging.getLogger(__name__)

_IMG = "https://images.foodingo.dev"

DEMO_CATEGORIES = [
    {"_id": "cat-biryani", "category": "Biryani", "image": {"url": f"{_IMG}/biryani.png"}},
    {"_id": "cat-pizza", "category": "Pizza", "image": {"url": f"{_IMG}/pizza.png"}},
    {"_id": "cat-burger", "category": "Burger", "image": {"url": f"{_IMG}/burger.png"}},
    {"_id": "cat-dessert", "category": "Desserts", "image": {"url": f"{_IMG}/dessert.png"}},
]

DEMO_RESTAURANTS = [
    {"_id": "rest-spice", "name": "Spice Route", "location": "MG Road",
     "image": {"url": f"{_IMG}/spice-route.png"}},
    {"_id": "rest-slice", "name": "Slice Society", "location": "Indiranagar",
     "image": {"url": f"{_IMG}/slice-society.png"}},
]

DEMO_PRODUCTS = [
    {"_id": "prod-veg-biryani", "name": "Veg Biryani", "price": 220, "offerPrice": 180,
     "discountPercent": 18, "isVeg": True, "category": "Biryani", "restaurant": "rest-spice",
     "image": {"url": f"{_IMG}/veg-biryani.png"}},
    {"_id": "prod-chicken-biryani", "name": "Chicken Biryani", "price": 300, "offerPrice": 250,
     "discountPercent": 17, "isVeg": False, "category": "Biryani", "restaurant": "rest-spice",
     "image": {"url": f"{_IMG}/chicken-biryani.png"}},
    {"_id": "prod-margherita", "name": "Margherita", "price": 250, "offerPrice": 199,
     "discountPercent": 20, "isVeg": True, "category": "Pizza", "restaurant": "rest-slice",
     "image": {"url": f"{_IMG}/margherita.png"}},
    {"_id": "prod-farmhouse", "name": "Farmhouse Pizza", "price": 350, "offerPrice": 299,
     "discountPercent": 15, "isVeg": True, "category": "Pizza", "restaurant": "rest-slice",
     "image": {"url": f"{_IMG}/farmhouse.png"}},
    {"_id": "prod-gulab-jamun", "name": "Gulab Jamun", "price": 90, "offerPrice": 70,
     "discountPercent": 22, "isVeg": True, "category": "Desserts", "restaurant": "rest-spice",
     "image": {"url": f"{_IMG}/gulab-jamun.png"}},
]

DEMO_OFFERS = [
    {"_id": "offer-first", "title": "50% off your first order", "image": {"url": f"{_IMG}/offer-1.png"}},
    {"_id": "offer-free-delivery", "title": "Free delivery over ₹499", "image": {"url": f"{_IMG}/offer-2.png"}},
]

DEMO_USER = {
    "_id": "user-demo",
    "name": "Asha",
    "email": "asha@example.com",
    "address": "12 Residency Road, Bengaluru",
    "phone": "9876543210",
}


class DemoBackend:
    """
    Single-user in-memory backend.

    Example:
        >>> backend = DemoBackend()
        >>> backend.add_to_cart("prod-margherita", 2)
        True
        >>> backend.cart_payload()["cart"]["items"][0]["quantity"]
        2
    """

    def __init__(self, user: Optional[dict[str, Any]] = None):
        self._initial_user = copy.deepcopy(user if user is not None else DEMO_USER)
        self.reset()

    def reset(self) -> None:
        """Restore the seeded catalog and clear cart and orders."""
        self.categories = copy.deepcopy(DEMO_CATEGORIES)
        self.restaurants = copy.deepcopy(DEMO_RESTAURANTS)
        self.products = {p["_id"]: copy.deepcopy(p) for p in DEMO_PRODUCTS}
        self.offers = copy.deepcopy(DEMO_OFFERS)
        self.user = copy.deepcopy(self._initial_user)
        self.cart: dict[str, int] = {}
        self.orders: list[dict[str, Any]] = []

    # ==========================================================================
    # READS
    # ==========================================================================

    def categories_payload(self) -> dict[str, Any]:
        return {"categories": copy.deepcopy(self.categories)}

    def restaurants_payload(self) -> list[dict[str, Any]]:
        return copy.deepcopy(self.restaurants)

    def offers_payload(self) -> list[dict[str, Any]]:
        return copy.deepcopy(self.offers)

    def user_payload(self) -> dict[str, Any]:
        return {"user": copy.deepcopy(self.user) if self.user else None}

    def cart_payload(self) -> dict[str, Any]:
        items = [
            {"productId": copy.deepcopy(self.products[pid]), "quantity": qty}
            for pid, qty in self.cart.items()
        ]
        return {"cart": {"items": items}}

    def orders_payload(self) -> dict[str, Any]:
        return {"orders": copy.deepcopy(list(reversed(self.orders)))}

    # ==========================================================================
    # CART MUTATIONS
    # ==========================================================================

    def add_to_cart(self, product_id: str, quantity: int = 1) -> bool:
        if product_id not in self.products or quantity < 1:
            return False
        self.cart[product_id] = self.cart.get(product_id, 0) + quantity
        return True

    def increment(self, product_id: str) -> bool:
        if product_id not in self.cart:
            return False
        self.cart[product_id] += 1
        return True

    def decrement(self, product_id: str) -> bool:
        if product_id not in self.cart:
            return False
        self.cart[product_id] -= 1
        if self.cart[product_id] <= 0:
            del self.cart[product_id]
        return True

    # ==========================================================================
    # ORDERS & RESTAURANTS
    # ==========================================================================

    def create_order(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Record an order and empty the cart."""
        items = payload.get("items") or []
        if not items:
            return {"success": False, "message": "Order has no items"}

        names = []
        restaurant_id = None
        for item in items:
            product = self.products.get(item.get("itemId"), {})
            names.append(product.get("name", item.get("itemId")))
            restaurant_id = restaurant_id or product.get("restaurant")

        restaurant = next((r for r in self.restaurants if r["_id"] == restaurant_id), None)
        order_id = uuid.uuid4().hex[:10].upper()
        self.orders.append({
            "_id": f"order-{order_id.lower()}",
            "orderId": order_id,
            "restaurantName": restaurant["name"] if restaurant else "Restaurant",
            "status": "Preparing",
            "total": payload.get("total", 0),
            "deliveryAddress": payload.get("deliveryAddress"),
            "phone": payload.get("phone"),
            "createdAt": datetime.now(timezone.utc).isoformat(),
            "items": names,
        })
        self.cart.clear()
        logger.info(f"Demo backend: order {order_id} created ({len(items)} items)")
        return {"success": True, "orderId": order_id}

    def create_restaurant(self, payload: dict[str, Any]) -> dict[str, Any]:
        name = (payload.get("name") or "").strip()
        location = (payload.get("location") or "").strip()
        if not name or not location:
            return {"success": False, "message": "Name and location are required"}
        self.restaurants.append({
            "_id": f"rest-{uuid.uuid4().hex[:8]}",
            "name": name,
            "location": location,
            "image": payload.get("image"),
            "owner": payload.get("owner"),
        })
        return {"success": True, "message": "Restaurant created"}
