"""BuyWay storefront state package."""

from .storefront.state import Storefront
from .shared.core.configuration import SystemConfig, load_config

__all__ = ["Storefront", "SystemConfig", "load_config"]
