"""Product store: the catalog, seeded fresh on every start."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from buyway.shared.domain.models import Product, ProductPatch
from buyway.shared.domain.stores.base import EntityStore

logger = logging.getLogger(__name__)


class ProductStore(EntityStore[Product]):
    """In-memory catalog.

    Admin additions and edits live only as long as the process; a new store
    always starts from the seed catalog.
    """

    name = "products"

    def __init__(self, seed: Optional[Iterable[Product]] = None) -> None:
        super().__init__(product.model_copy(deep=True) for product in (seed or []))

    def update_product(self, product_id: str, patch: Union[ProductPatch, Mapping[str, Any]]) -> None:
        """Merge the patch's set fields into the product. Values are not checked."""
        changes = ProductPatch.coerce(patch).changes()
        for index, product in enumerate(self._items):
            if product.id == product_id:
                self._items[index] = product.model_copy(update=changes)
                logger.debug(f"Updated product {product_id}: {sorted(changes)}")
                self._commit()
                return
        self._not_found("update_product", product_id)

    def add_product(self, product: Product) -> None:
        """Prepend a product. Identifiers are not checked for duplicates."""
        self._items.insert(0, product.as_product())
        logger.info(f"Added product {product.id} ({product.category})")
        self._commit()

    def get_categories(self) -> List[str]:
        """Distinct categories in first-seen order."""
        return list(dict.fromkeys(product.category for product in self._items))

    def get_by_id(self, product_id: str) -> Optional[Product]:
        for product in self._items:
            if product.id == product_id:
                return product.model_copy(deep=True)
        return None

    def search(self, query: str) -> List[Product]:
        """Case-insensitive substring match on name or category."""
        needle = query.lower()
        return [
            product.model_copy(deep=True)
            for product in self._items
            if needle in product.name.lower() or needle in product.category.lower()
        ]

    def filter(self, query: str = "", category: Optional[str] = None) -> List[Product]:
        """Name substring plus optional exact category, as on the admin list."""
        needle = query.lower()
        return [
            product.model_copy(deep=True)
            for product in self._items
            if needle in product.name.lower() and (not category or product.category == category)
        ]

    def category_counts(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for product in self._items:
            counts[product.category] = counts.get(product.category, 0) + 1
        return counts
