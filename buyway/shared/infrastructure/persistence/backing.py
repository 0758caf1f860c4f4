"""Key-value backing contract and an in-memory implementation."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class KeyValueBacking(Protocol):
    """Asynchronous string-keyed, string-valued storage."""

    async def get(self, key: str) -> Optional[str]:
        ...

    async def set(self, key: str, value: str) -> None:
        ...

    async def remove(self, keys: Iterable[str]) -> None:
        ...


class MemoryKeyValueStore:
    """Dict-backed storage. Lives as long as the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def remove(self, keys: Iterable[str]) -> None:
        for key in keys:
            self._data.pop(key, None)

    def snapshot(self) -> Dict[str, str]:
        """Copy of the stored data."""
        return dict(self._data)
