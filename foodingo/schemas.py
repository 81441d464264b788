"""
Pydantic Schemas for the Remote API Contract

Field names follow Python conventions; aliases keep the backend's JSON
shape (``_id``, ``offerPrice``, ``productId`` ...) so payloads round-trip
unchanged through the cache and the dev server.

Version: 1.0.0
"""

from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class WireModel(BaseModel):
    """Base for backend payloads: alias-aware, tolerant of extra fields."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


# =============================================================================
# ENUMS
# =============================================================================

class OrderStatusEnum(str, Enum):
    PREPARING = "Preparing"
    ON_THE_WAY = "On the way"
    DELIVERED = "Delivered"


class NotificationType(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


# =============================================================================
# CATALOG
# =============================================================================

class ImageRef(WireModel):
    """Reference to an already-uploaded image."""
    url: str


class Category(WireModel):
    """Food category shown on the home screen."""
    id: str = Field(..., alias="_id")
    display_name: str = Field(..., alias="category")
    image: Optional[ImageRef] = None


class Product(WireModel):
    """
    Product snapshot as embedded in cart lines.

    Unknown backend fields are kept so the mapped cart view exposes the
    full snapshot.
    """
    id: str = Field(..., alias="_id")
    name: str = ""
    price: Optional[float] = None
    offer_price: float = Field(default=0.0, alias="offerPrice")
    discount_percent: Optional[float] = Field(default=None, alias="discountPercent")
    is_veg: Optional[bool] = Field(default=None, alias="isVeg")
    image: Optional[ImageRef] = None


class Restaurant(WireModel):
    id: str = Field(..., alias="_id")
    name: str
    location: Optional[str] = None
    image: Optional[ImageRef] = None
    owner: Optional[str] = None


class Offer(WireModel):
    id: str = Field(..., alias="_id")
    title: Optional[str] = None
    image: Optional[ImageRef] = None


class RestaurantCreate(WireModel):
    """Request schema for registering a restaurant."""
    name: str = Field(..., min_length=1, max_length=100)
    location: str = Field(..., min_length=1, max_length=255)
    image: ImageRef
    owner: Optional[str] = None


# =============================================================================
# USER
# =============================================================================

class UserProfile(WireModel):
    id: str = Field(..., alias="_id")
    name: str
    email: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None


# =============================================================================
# CART
# =============================================================================

class CartLine(WireModel):
    """One product/quantity pair; quantity is always a positive integer."""
    product: Product = Field(..., alias="productId")
    quantity: int = Field(..., ge=1)

    @field_validator("product", mode="before")
    @classmethod
    def expand_product_ref(cls, v: Any) -> Any:
        # Unpopulated lines carry only the product id
        if isinstance(v, str):
            return {"_id": v}
        return v

    @property
    def product_id(self) -> str:
        return self.product.id


class CartItem(Product):
    """Flattened cart entry: product snapshot merged with its quantity."""
    quantity: int

    @classmethod
    def from_line(cls, line: CartLine) -> "CartItem":
        data = line.product.model_dump(by_alias=True)
        data["quantity"] = line.quantity
        return cls.model_validate(data)

    @property
    def line_total(self) -> float:
        return self.offer_price * self.quantity


# =============================================================================
# ORDERS
# =============================================================================

class OrderItemCreate(WireModel):
    """Single item in an order request."""
    item_id: str = Field(..., alias="itemId")
    quantity: int = Field(..., ge=1)
    price: float = Field(..., ge=0)


class OrderCreate(WireModel):
    """Request schema for placing an order from the cart."""
    items: List[OrderItemCreate] = Field(..., min_length=1)
    delivery_address: str = Field(..., min_length=1, alias="deliveryAddress")
    phone: str = Field(..., min_length=1)
    subtotal: float
    delivery_fee: float = Field(..., alias="deliveryFee")
    tax: float
    total: float


class OrderCreateResponse(WireModel):
    success: bool
    order_id: Optional[str] = Field(default=None, alias="orderId")
    message: Optional[str] = None


class Order(WireModel):
    """Entry in the user's order history."""
    id: Optional[str] = Field(default=None, alias="_id")
    order_id: Optional[str] = Field(default=None, alias="orderId")
    restaurant_name: Optional[str] = Field(default=None, alias="restaurantName")
    status: str = OrderStatusEnum.PREPARING.value
    total: float = 0.0
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    items: List[Any] = Field(default_factory=list)

    @property
    def key(self) -> Optional[str]:
        return self.id or self.order_id

    @property
    def item_names(self) -> list[str]:
        names = []
        for item in self.items:
            if isinstance(item, dict):
                names.append(str(item.get("name") or item.get("itemId", "")))
            else:
                names.append(str(item))
        return names


class ActionResponse(WireModel):
    """Generic ``{success, message}`` reply."""
    success: bool
    message: Optional[str] = None
