from __future__ import annotations

from buyway.shared.domain.models import Product
from buyway.shared.domain.stores.base import PersistentEntityStore
from buyway.shared.infrastructure.persistence.backing import KeyValueBacking

WISHLIST_KEY = "user_wishlist"


class WishlistStore(PersistentEntityStore[Product]):
    """Saved products, unique by product id, in the order they were saved."""

    name = "wishlist"
    model = Product

    def __init__(self, backing: KeyValueBacking, storage_key: str = WISHLIST_KEY) -> None:
        super().__init__(backing, storage_key)

    def toggle_wishlist(self, product: Product) -> bool:
        """Add the product if absent, remove it if present.

        Returns:
            True if the product was just added, False if just removed
        """
        for index, item in enumerate(self._items):
            if item.id == product.id:
                del self._items[index]
                added = False
                break
        else:
            self._items.append(product.as_product())
            added = True

        self._commit()
        return added

    def is_in_wishlist(self, product_id: str) -> bool:
        return any(item.id == product_id for item in self._items)
