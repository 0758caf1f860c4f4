"""
Shared Domain Module
====================

Entities, reactive stores and the checkout/catalog services built on them.
"""

# Entities
from buyway.shared.domain.models import (
    AppSettings,
    CartItem,
    ColorVariant,
    Order,
    OrderStatus,
    PaymentMethod,
    Product,
    ProductPatch,
    Review,
    SettingsPatch,
)

# Stores
from buyway.shared.domain.stores import (
    CartStore,
    EntityStore,
    OrderStore,
    PersistentEntityStore,
    ProductStore,
    SettingsStore,
    WishlistStore,
)

# Services
from buyway.shared.domain.checkout.service import AddressForm, CheckoutService
from buyway.shared.domain.catalog.admin import CatalogAdminService, DashboardStats, ProductForm
from buyway.shared.domain.catalog.seed import load_seed_catalog

__all__ = [
    # Entities
    "AppSettings",
    "CartItem",
    "ColorVariant",
    "Order",
    "OrderStatus",
    "PaymentMethod",
    "Product",
    "ProductPatch",
    "Review",
    "SettingsPatch",
    # Stores
    "CartStore",
    "EntityStore",
    "OrderStore",
    "PersistentEntityStore",
    "ProductStore",
    "SettingsStore",
    "WishlistStore",
    # Services
    "AddressForm",
    "CheckoutService",
    "CatalogAdminService",
    "DashboardStats",
    "ProductForm",
    "load_seed_catalog",
]
