"""
BuyWay Shared Kernel
====================

Storefront state shared by every BuyWay client.

Architecture:
- core: subscription broadcasting, configuration, logging, errors
- infrastructure: key-value persistence adapters
- domain: entities, reactive stores, checkout and catalog services
"""

__version__ = "1.0.0"

__all__ = []
