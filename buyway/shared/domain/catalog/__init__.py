"""Catalog seeding and admin catalog actions."""

from .seed import load_seed_catalog
from .admin import CatalogAdminService, DashboardStats, ProductForm, format_revenue, parse_amount

__all__ = [
    "load_seed_catalog",
    "CatalogAdminService",
    "DashboardStats",
    "ProductForm",
    "format_revenue",
    "parse_amount",
]
