"""Domain entities for the storefront.

Attributes are snake_case in Python; the serialized form uses camelCase keys
(``selectedSize``, ``originalPrice``, ``inStock`` ...) so persisted snapshots
keep the storefront's wire format.
"""

from __future__ import annotations

import copy
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Literal, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

Badge = Literal["new", "sale", "trending"]
CartKey = Tuple[str, Optional[str]]


class StorefrontModel(BaseModel):
    """Base model with camelCase aliases for the wire format."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> Dict[str, Any]:
        """JSON-ready dict with camelCase keys and unset optionals dropped."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Review(StorefrontModel):
    id: str
    user_name: str
    rating: float
    comment: str
    date: str
    avatar: Optional[str] = None


class ColorVariant(StorefrontModel):
    name: str
    image: str


class Product(StorefrontModel):
    """Catalog entity.

    Values are not range-checked: admin edits may store any price or rating,
    and ``original_price`` is not compared against ``price``.
    """
    id: str
    name: str
    description: str = ""
    price: float
    original_price: Optional[float] = None
    image: str = ""
    category: str
    rating: float = 0
    reviews: int = 0
    in_stock: bool = True
    badge: Optional[Badge] = None
    sizes: Optional[List[str]] = None
    colors: Optional[List[ColorVariant]] = None
    detailed_reviews: Optional[List[Review]] = None

    def as_product(self) -> "Product":
        """Plain catalog copy, dropping any cart-line fields."""
        source = self.model_copy(deep=True)
        return Product.model_validate({name: getattr(source, name) for name in Product.model_fields})

    @property
    def discount_percent(self) -> int:
        """Whole-percent discount against ``original_price``, 0 without one."""
        if not self.original_price or self.original_price <= self.price:
            return 0
        return round((1 - self.price / self.original_price) * 100)


class CartItem(Product):
    """A product line in the cart, keyed by (product id, selected size)."""
    selected_size: Optional[str] = None
    quantity: int = 1

    @classmethod
    def from_product(cls, product: Product, size: Optional[str] = None) -> "CartItem":
        base = product.as_product()
        return cls.model_validate({**dict(base), "selected_size": size, "quantity": 1})

    @property
    def key(self) -> CartKey:
        return (self.id, self.selected_size)

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


class OrderStatus(str, Enum):
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


class PaymentMethod(str, Enum):
    UPI = "UPI"
    CARD = "Card"
    COD = "COD"


class Order(StorefrontModel):
    """Snapshot of a checkout. ``items`` never shares objects with the cart."""
    id: str
    items: List[CartItem]
    total_amount: float
    address: str
    payment_method: PaymentMethod
    status: OrderStatus = OrderStatus.PROCESSING
    date: str
    estimated_delivery: str
    placed_at: datetime
    estimated_delivery_at: datetime

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)


class AppSettings(StorefrontModel):
    """Global app configuration edited from the admin dashboard."""
    app_name: str = "BuyWay"
    app_logo: Optional[str] = None  # None means use the bundled logo
    maintenance_mode: bool = False
    free_shipping_threshold: float = 999
    support_email: str = "support@buyway.com"
    store_currency: str = "₹"


class Patch(StorefrontModel):
    """Partial update: only fields explicitly given are applied."""

    def changes(self) -> Dict[str, Any]:
        return {name: copy.deepcopy(getattr(self, name)) for name in self.model_fields_set}

    @classmethod
    def coerce(cls, patch: Union["Patch", Mapping[str, Any]]) -> "Patch":
        if isinstance(patch, cls):
            return patch
        return cls.model_validate(dict(patch))


class ProductPatch(Patch):
    """Fields of a :class:`Product` an edit may change. ``id`` is not patchable."""
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    original_price: Optional[float] = None
    image: Optional[str] = None
    category: Optional[str] = None
    rating: Optional[float] = None
    reviews: Optional[int] = None
    in_stock: Optional[bool] = None
    badge: Optional[Badge] = None
    sizes: Optional[List[str]] = None
    colors: Optional[List[ColorVariant]] = None
    detailed_reviews: Optional[List[Review]] = None

    @field_validator(
        "name", "description", "price", "image", "category", "rating", "reviews", "in_stock",
        mode="before",
    )
    @classmethod
    def required_on_product(cls, value: Any) -> Any:
        # Omit the field to leave it alone; a product always has one.
        if value is None:
            raise ValueError("cannot be cleared")
        return value


class SettingsPatch(Patch):
    """Fields of :class:`AppSettings` an admin may change."""
    app_name: Optional[str] = None
    app_logo: Optional[str] = None
    maintenance_mode: Optional[bool] = None
    free_shipping_threshold: Optional[float] = None
    support_email: Optional[str] = None
    store_currency: Optional[str] = None

    @field_validator(
        "app_name", "maintenance_mode", "free_shipping_threshold", "support_email", "store_currency",
        mode="before",
    )
    @classmethod
    def required_on_settings(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("cannot be cleared")
        return value
