"""Reactive stores for cart, wishlist, orders, products and settings."""

from .base import EntityStore, PersistentEntityStore
from .cart import CartStore
from .wishlist import WishlistStore
from .orders import OrderStore
from .products import ProductStore
from .settings import SettingsStore

__all__ = [
    "EntityStore",
    "PersistentEntityStore",
    "CartStore",
    "WishlistStore",
    "OrderStore",
    "ProductStore",
    "SettingsStore",
]
