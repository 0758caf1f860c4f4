"""Checkout Service for BuyWay.

Validates the checkout form at the boundary, then places the order and
empties the cart as two separate store calls. The second call is not rolled
back into the first: if clearing the cart fails, the order still stands.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from pydantic import BaseModel

from buyway.shared.core.configuration import CheckoutConfig
from buyway.shared.core.errors import CheckoutValidationError
from buyway.shared.domain.models import Order, PaymentMethod, Product
from buyway.shared.domain.stores.cart import CartStore
from buyway.shared.domain.stores.orders import OrderStore
from buyway.shared.domain.stores.settings import SettingsStore

logger = logging.getLogger(__name__)

MISSING_ADDRESS_MESSAGE = "Please fill all required address fields"
EMPTY_CART_MESSAGE = "Your cart is empty"
SIZE_REQUIRED_MESSAGE = "Please select a size"


class AddressForm(BaseModel):
    """Structured delivery address as entered at checkout."""
    house_no: str = ""
    area: str = ""
    landmark: str = ""
    city: str = ""
    state: str = ""
    pincode: str = ""

    def format(self) -> str:
        """``12B, MG Road, Near Park, Pune, Maharashtra - 411001``"""
        landmark = f"{self.landmark}, " if self.landmark else ""
        return f"{self.house_no}, {self.area}, {landmark}{self.city}, {self.state} - {self.pincode}"


class CheckoutService:
    """Boundary between the checkout screen and the cart/order stores."""

    def __init__(
        self,
        cart: CartStore,
        orders: OrderStore,
        settings: SettingsStore,
        config: Optional[CheckoutConfig] = None,
    ):
        self.cart = cart
        self.orders = orders
        self.settings = settings
        self.config = config or CheckoutConfig()

    def validate_address(self, form: AddressForm) -> None:
        """Raise CheckoutValidationError when the address cannot be used."""
        for field in ("house_no", "area", "city", "state", "pincode"):
            if not getattr(form, field):
                raise CheckoutValidationError(MISSING_ADDRESS_MESSAGE, field=field)

        if len(form.pincode) != self.config.pincode_length:
            raise CheckoutValidationError(
                f"Please enter a valid {self.config.pincode_length}-digit Pincode",
                field="pincode",
            )

    def validate_payment_method(self, method: Union[PaymentMethod, str]) -> PaymentMethod:
        try:
            return PaymentMethod(method)
        except ValueError:
            options = ", ".join(m.value for m in PaymentMethod)
            raise CheckoutValidationError(
                f"Please choose a payment method ({options})", field="payment_method"
            ) from None

    def require_size(self, product: Product, size: Optional[str]) -> None:
        """Products with size options need one chosen before add-to-cart."""
        if product.sizes and not size:
            raise CheckoutValidationError(SIZE_REQUIRED_MESSAGE, field="size")

    def delivery_fee(self, subtotal: float) -> float:
        threshold = self.settings.get_settings().free_shipping_threshold
        return 0.0 if subtotal >= threshold else self.config.flat_delivery_fee

    def order_total(self) -> float:
        subtotal = self.cart.get_total_price()
        return subtotal + self.delivery_fee(subtotal)

    def place_order(self, form: AddressForm, payment_method: Union[PaymentMethod, str]) -> Order:
        """Validate, record the order, then clear the cart.

        Raises:
            CheckoutValidationError: If the address, payment method or cart is not acceptable
        """
        self.validate_address(form)
        method = self.validate_payment_method(payment_method)

        items = self.cart.get_all()
        if not items:
            raise CheckoutValidationError(EMPTY_CART_MESSAGE)

        order = self.orders.place_order(items, self.order_total(), form.format(), method)
        self.cart.clear_cart()
        logger.info(f"Checkout complete for order {order.id}")
        return order
