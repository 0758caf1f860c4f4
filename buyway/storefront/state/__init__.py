"""Storefront state container.

Architecture:
- Storefront: explicitly constructed holder of every store and service,
  passed to the screens instead of being imported as a global
"""

from .store import Storefront, build_backing

__all__ = ["Storefront", "build_backing"]
