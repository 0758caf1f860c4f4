"""Shared fixtures for the storefront state tests."""

import asyncio
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

import pytest

from buyway.shared.core.configuration import SystemConfig
from buyway.shared.domain.models import Product
from buyway.shared.infrastructure.persistence.backing import MemoryKeyValueStore
from buyway.storefront.state import Storefront

FIXED_NOW = datetime(2026, 10, 19, 10, 30)


class RecordingBacking(MemoryKeyValueStore):
    """Memory backing that remembers every write, optionally slowly."""

    def __init__(self, delays: Optional[List[float]] = None):
        super().__init__()
        self.writes: List[Tuple[str, str]] = []
        self._delays = list(delays or [])

    async def set(self, key: str, value: str) -> None:
        if self._delays:
            await asyncio.sleep(self._delays.pop(0))
        self.writes.append((key, value))
        await super().set(key, value)


class FailingBacking(MemoryKeyValueStore):
    """Backing whose reads and/or writes raise."""

    def __init__(self, fail_get: bool = False, fail_set: bool = True, fail_times: Optional[int] = None):
        super().__init__()
        self.fail_get = fail_get
        self.fail_set = fail_set
        self.fail_times = fail_times
        self.attempts = 0

    async def get(self, key: str) -> Optional[str]:
        if self.fail_get:
            raise OSError("storage unavailable")
        return await super().get(key)

    async def set(self, key: str, value: str) -> None:
        self.attempts += 1
        if self.fail_set and (self.fail_times is None or self.attempts <= self.fail_times):
            raise OSError("disk full")
        await super().set(key, value)

    async def remove(self, keys: Iterable[str]) -> None:
        raise OSError("storage unavailable")


def make_product(product_id: str = "1", price: float = 1299, category: str = "Men", **extra) -> Product:
    return Product(
        id=product_id,
        name=extra.pop("name", f"Product {product_id}"),
        description="",
        price=price,
        category=category,
        image="https://example.com/p.jpg",
        **extra,
    )


@pytest.fixture
def backing():
    return RecordingBacking()


@pytest.fixture
def shirt():
    return make_product("1", 1299, "Men", name="Premium Cotton Slim Fit Shirt", sizes=["S", "M", "L"])


@pytest.fixture
def polo():
    return make_product("3", 499, "Kids", name="Kids Red Cotton Polo", sizes=["2-3Y", "4-5Y"])


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def storefront(backing, clock):
    return Storefront.create(SystemConfig(), backing=backing, clock=clock)
