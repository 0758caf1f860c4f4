"""Error taxonomy for the storefront state layer.

Validation failures are raised at the boundary (checkout, admin forms) and
carry the message shown to the user. Persistence failures never surface here:
they are logged and swallowed inside the stores.
"""

from __future__ import annotations


class StorefrontError(Exception):
    """Base class for all storefront errors."""


class ValidationFailure(StorefrontError):
    """Input rejected before any store was touched."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


class CheckoutValidationError(ValidationFailure):
    """Checkout form or cart state is not acceptable for placing an order."""


class CatalogValidationError(ValidationFailure):
    """Admin product form is missing required fields."""
