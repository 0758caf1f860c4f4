"""Admin catalog actions: product form handling, store config and dashboard stats."""

from __future__ import annotations

import logging
import re
from typing import Dict, Optional

from pydantic import BaseModel, Field

from buyway.shared.core.configuration import CatalogConfig
from buyway.shared.core.errors import CatalogValidationError
from buyway.shared.domain.models import OrderStatus, Product, ProductPatch, SettingsPatch
from buyway.shared.domain.stores.orders import OrderStore, generate_id
from buyway.shared.domain.stores.products import ProductStore
from buyway.shared.domain.stores.settings import SettingsStore

logger = logging.getLogger(__name__)

_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_amount(text: Optional[str]) -> float:
    """Parse the leading number of a form field; 0 when there is none."""
    match = _LEADING_NUMBER.match(text or "")
    return float(match.group(1)) if match else 0.0


def format_revenue(amount: float, currency: str = "₹") -> str:
    """``₹12.5k``"""
    return f"{currency}{amount / 1000:.1f}k"


class ProductForm(BaseModel):
    """Values typed into the admin product modal."""
    name: str = ""
    price: str = ""
    category: str = ""
    in_stock: bool = True
    # Set when the "new category" input is open; replaces ``category``
    new_category: Optional[str] = None

    @property
    def final_category(self) -> str:
        return self.new_category if self.new_category is not None else self.category


class DashboardStats(BaseModel):
    revenue: float = 0
    order_count: int = 0
    pending_orders: int = 0
    product_count: int = 0
    out_of_stock: int = 0
    category_counts: Dict[str, int] = Field(default_factory=dict)
    maintenance_mode: bool = False


class CatalogAdminService:
    """Backs the admin dashboard's product and configuration modals."""

    def __init__(
        self,
        products: ProductStore,
        orders: OrderStore,
        settings: SettingsStore,
        config: Optional[CatalogConfig] = None,
    ):
        self.products = products
        self.orders = orders
        self.settings = settings
        self.config = config or CatalogConfig()

    def save_product(self, form: ProductForm, editing_id: Optional[str] = None) -> Optional[Product]:
        """Create a product, or edit ``editing_id`` when given.

        Raises:
            CatalogValidationError: If name, price or category is blank
        """
        category = form.final_category
        if not form.name or not form.price or not category:
            raise CatalogValidationError("Please fill all required fields")

        price = parse_amount(form.price)

        if editing_id is not None:
            self.products.update_product(
                editing_id,
                ProductPatch(name=form.name, price=price, category=category, in_stock=form.in_stock),
            )
            return self.products.get_by_id(editing_id)

        product = Product(
            id=generate_id(self.config.product_id_prefix),
            name=form.name,
            price=price,
            category=category,
            in_stock=form.in_stock,
            image=self.config.default_image,
            badge="new",
            description=self.config.default_description,
            rating=0,
            reviews=0,
        )
        self.products.add_product(product)
        return product

    def save_config(
        self,
        app_name: str,
        app_logo: Optional[str],
        maintenance_mode: bool,
        free_shipping_threshold: str,
    ) -> None:
        """Apply the admin config modal. A blank logo falls back to the bundled one."""
        self.settings.update_settings(
            SettingsPatch(
                app_name=app_name,
                app_logo=app_logo or None,
                maintenance_mode=maintenance_mode,
                free_shipping_threshold=parse_amount(free_shipping_threshold),
            )
        )

    def dashboard_stats(self) -> DashboardStats:
        orders = self.orders.get_all()
        products = self.products.get_all()
        return DashboardStats(
            revenue=self.orders.get_revenue(),
            order_count=len(orders),
            pending_orders=sum(1 for order in orders if order.status == OrderStatus.PROCESSING),
            product_count=len(products),
            out_of_stock=sum(1 for product in products if not product.in_stock),
            category_counts=self.products.category_counts(),
            maintenance_mode=self.settings.is_maintenance_mode(),
        )
