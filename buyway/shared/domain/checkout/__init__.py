"""Checkout validation and order placement."""

from .service import AddressForm, CheckoutService

__all__ = ["AddressForm", "CheckoutService"]
