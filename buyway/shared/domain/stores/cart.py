"""Cart store: line items keyed by (product id, selected size)."""

from __future__ import annotations

import logging
from typing import Optional

from buyway.shared.domain.models import CartItem, CartKey, Product
from buyway.shared.domain.stores.base import PersistentEntityStore
from buyway.shared.infrastructure.persistence.backing import KeyValueBacking

logger = logging.getLogger(__name__)

CART_KEY = "user_cart"


class CartStore(PersistentEntityStore[CartItem]):
    """Shopping cart persisted to the key-value backing.

    The same product in two sizes is two lines; adding an existing
    product/size pair bumps its quantity instead.
    """

    name = "cart"
    model = CartItem

    def __init__(self, backing: KeyValueBacking, storage_key: str = CART_KEY) -> None:
        super().__init__(backing, storage_key)

    def _index_of(self, key: CartKey) -> int:
        for index, item in enumerate(self._items):
            if item.key == key:
                return index
        return -1

    def add_to_cart(self, product: Product, size: Optional[str] = None) -> None:
        index = self._index_of((product.id, size))
        if index > -1:
            self._items[index].quantity += 1
        else:
            self._items.append(CartItem.from_product(product, size))
        logger.debug(f"Added {product.id} (size={size}) to cart")
        self._commit()

    def remove_from_cart(self, product_id: str, size: Optional[str] = None) -> None:
        """Remove every line matching the composite key."""
        self._items = [item for item in self._items if item.key != (product_id, size)]
        self._commit()

    def update_quantity(self, product_id: str, size: Optional[str], delta: int) -> None:
        """Adjust a line's quantity; dropping to zero or below removes it."""
        index = self._index_of((product_id, size))
        if index == -1:
            self._not_found("update_quantity", (product_id, size))
            return

        new_quantity = self._items[index].quantity + delta
        if new_quantity > 0:
            self._items[index].quantity = new_quantity
        else:
            del self._items[index]
        self._commit()

    def clear_cart(self) -> None:
        self._items = []
        self._commit()

    def get_total_price(self) -> float:
        return sum(item.price * item.quantity for item in self._items)

    def get_item_count(self) -> int:
        """Total units across all lines (cart badge)."""
        return sum(item.quantity for item in self._items)
