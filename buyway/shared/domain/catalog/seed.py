"""Seed catalog loading."""

from __future__ import annotations

import logging
from importlib import resources
from pathlib import Path
from typing import List, Optional, Union

import yaml
from pydantic import TypeAdapter

from buyway.shared.domain.models import Product

logger = logging.getLogger(__name__)

SEED_RESOURCE = "seed_catalog.yaml"

_products_adapter = TypeAdapter(List[Product])


def _read_seed_text(path: Optional[Union[str, Path]]) -> str:
    if path is not None:
        return Path(path).read_text(encoding="utf-8")
    return resources.files("buyway.data").joinpath(SEED_RESOURCE).read_text(encoding="utf-8")


def load_seed_catalog(path: Optional[Union[str, Path]] = None) -> List[Product]:
    """Load the seed products from YAML.

    Args:
        path: Alternative catalog file; the bundled catalog when omitted

    Returns:
        Products in catalog order

    Raises:
        FileNotFoundError: If an explicit path does not exist
        ValueError: If the file does not hold a ``products`` list of valid products
    """
    data = yaml.safe_load(_read_seed_text(path)) or {}
    raw_products = data.get("products") if isinstance(data, dict) else None
    if not isinstance(raw_products, list):
        raise ValueError(f"Seed catalog {path or SEED_RESOURCE} has no 'products' list")

    products = _products_adapter.validate_python(raw_products)
    logger.debug(f"Loaded {len(products)} seed products from {path or SEED_RESOURCE}")
    return products
