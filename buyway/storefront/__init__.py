"""BuyWay storefront application layer."""
