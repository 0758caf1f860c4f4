"""Storefront State Container.

Holds one instance of every store and service for the running app. The
container is built explicitly and handed to the screens that need it; there
is no module-level instance.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, List, Optional

from buyway.shared.core.configuration import SystemConfig
from buyway.shared.domain.catalog.admin import CatalogAdminService
from buyway.shared.domain.catalog.seed import load_seed_catalog
from buyway.shared.domain.checkout.service import CheckoutService
from buyway.shared.domain.models import AppSettings
from buyway.shared.domain.stores import (
    CartStore,
    OrderStore,
    PersistentEntityStore,
    ProductStore,
    SettingsStore,
    WishlistStore,
)
from buyway.shared.infrastructure.persistence.backing import KeyValueBacking, MemoryKeyValueStore
from buyway.shared.infrastructure.persistence.duckdb_backing import DuckDBKeyValueStore

logger = logging.getLogger(__name__)


def build_backing(config: SystemConfig) -> KeyValueBacking:
    """Create the key-value backing selected by ``storage.backend``."""
    if config.storage.backend == "duckdb":
        return DuckDBKeyValueStore(config.storage.db_path)
    return MemoryKeyValueStore()


class Storefront:
    """Application-level container for the storefront state.

    Usage:
        # During app initialization
        storefront = Storefront.create(config)
        await storefront.start()

        # In a screen that received the container
        unsubscribe = storefront.cart.subscribe(render_cart)
        storefront.cart.add_to_cart(product, "M")
    """

    def __init__(
        self,
        config: SystemConfig,
        backing: KeyValueBacking,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """Initialize all stores and services.

        Args:
            config: Merged system configuration
            backing: Key-value storage for the cart and wishlist
            clock: Source of "now" for order dates
        """
        self.config = config
        self.backing = backing

        self.cart = CartStore(backing, config.storage.cart_key)
        self.wishlist = WishlistStore(backing, config.storage.wishlist_key)
        self.orders = OrderStore(
            clock=clock,
            delivery_days=config.checkout.delivery_days,
            id_prefix=config.checkout.order_id_prefix,
        )
        self.products = ProductStore(load_seed_catalog(config.catalog.seed_file))
        self.settings = SettingsStore(
            AppSettings.model_validate(config.settings.model_dump(exclude={"default_logo"}))
        )

        self.checkout = CheckoutService(self.cart, self.orders, self.settings, config.checkout)
        self.admin = CatalogAdminService(self.products, self.orders, self.settings, config.catalog)

        self._started = False

    @classmethod
    def create(
        cls,
        config: Optional[SystemConfig] = None,
        backing: Optional[KeyValueBacking] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> "Storefront":
        """Build a container, choosing the backing from config when none is given."""
        config = config or SystemConfig()
        return cls(config, backing or build_backing(config), clock=clock)

    @property
    def persistent_stores(self) -> List[PersistentEntityStore]:
        return [self.cart, self.wishlist]

    def logo_source(self) -> str:
        """Logo to render: the configured URL or the bundled asset."""
        return self.settings.resolve_logo(self.config.settings.default_logo)

    async def start(self) -> None:
        """Open the backing if needed and load persisted cart and wishlist."""
        if self._started:
            return

        if isinstance(self.backing, DuckDBKeyValueStore):
            await self.backing.start()

        for store in self.persistent_stores:
            await store.load()

        self._started = True
        logger.info(
            f"Storefront ready: {len(self.products)} products, "
            f"{len(self.cart)} cart line(s), {len(self.wishlist)} wishlist item(s)"
        )

    async def flush(self) -> None:
        """Wait for every queued cart/wishlist write."""
        for store in self.persistent_stores:
            await store.flush()

    async def reset_persisted(self) -> None:
        """Drop the persisted cart and wishlist (e.g. on logout).

        In-memory state is left alone; callers clear the stores if they need to.
        """
        await self.flush()
        try:
            await self.backing.remove([store.storage_key for store in self.persistent_stores])
        except Exception as e:
            logger.error(f"Error removing persisted storefront state: {e}")

    async def close(self) -> None:
        """Flush pending writes and release the backing."""
        await self.flush()
        if isinstance(self.backing, DuckDBKeyValueStore):
            self.backing.close()
        self._started = False
