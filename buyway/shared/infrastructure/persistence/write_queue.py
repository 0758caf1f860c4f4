from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import Deque, Optional

from .backing import KeyValueBacking

logger = logging.getLogger(__name__)


class PersistenceQueue:
    """Single-flight, in-order writer for one storage key.

    Stores submit full snapshots and move on without waiting. Writes land in
    submission order; a failed write is logged and the next one still runs.
    """

    def __init__(self, backing: KeyValueBacking, key: str) -> None:
        self._backing = backing
        self.key = key
        self._pending: Deque[str] = deque()
        self._drain_task: Optional[asyncio.Task] = None
        # Lazy initialization to avoid event loop binding issues
        self._lock: Optional[asyncio.Lock] = None
        self._loop_id: Optional[int] = None
        self.failures = 0

    @property
    def pending(self) -> int:
        """Number of snapshots waiting to be written."""
        return len(self._pending)

    def _ensure_lock(self) -> asyncio.Lock:
        """Get or create lock for current event loop."""
        loop_id = id(asyncio.get_running_loop())

        # If we have a lock but it's for a different loop, recreate it
        if self._loop_id is not None and self._loop_id != loop_id:
            self._lock = None

        if self._lock is None:
            self._lock = asyncio.Lock()
            self._loop_id = loop_id

        return self._lock

    def submit(self, payload: str) -> None:
        """Queue a snapshot and make sure a drain task is running."""
        self._pending.append(payload)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug(f"No running event loop; write to '{self.key}' deferred until flush()")
            return

        task = self._drain_task
        if task is None or task.done() or task.get_loop() is not loop:
            self._drain_task = loop.create_task(self._drain())

    async def flush(self) -> None:
        """Wait until every submitted snapshot has been written."""
        await self._drain()

    async def _drain(self) -> None:
        async with self._ensure_lock():
            while self._pending:
                payload = self._pending.popleft()
                try:
                    await self._backing.set(self.key, payload)
                except Exception as exc:
                    self.failures += 1
                    logger.exception(f"Error saving '{self.key}'", exc_info=exc)
