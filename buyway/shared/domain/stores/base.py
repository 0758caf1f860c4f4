"""Reactive in-memory stores.

A store owns one ordered collection, serves synchronous reads as defensive
copies and, after every mutation, kicks off persistence (when it has any) and
then notifies subscribers synchronously. Persistence is never awaited by a
mutation, so subscribers can be ahead of what has reached the backing.
"""

from __future__ import annotations

import json
import logging
from typing import Generic, Iterable, List, Optional, Type, TypeVar

from pydantic import TypeAdapter

from buyway.shared.core.broadcaster import Broadcaster, Listener, Unsubscribe
from buyway.shared.domain.models import StorefrontModel
from buyway.shared.infrastructure.persistence.backing import KeyValueBacking
from buyway.shared.infrastructure.persistence.write_queue import PersistenceQueue

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=StorefrontModel)


class EntityStore(Generic[T]):
    """Ordered collection of entities with subscribe/notify semantics."""

    name = "entities"

    def __init__(self, items: Optional[Iterable[T]] = None) -> None:
        self._items: List[T] = list(items or [])
        self._broadcaster: Broadcaster[List[T]] = Broadcaster(self.name)

    def get_all(self) -> List[T]:
        """Defensive copy of the current collection."""
        return [item.model_copy(deep=True) for item in self._items]

    def subscribe(self, listener: Listener[List[T]]) -> Unsubscribe:
        """Register a listener; it is called immediately with the current state.

        Returns:
            A callable removing this registration
        """
        return self._broadcaster.subscribe(listener, self.get_all())

    @property
    def subscriber_count(self) -> int:
        return self._broadcaster.subscriber_count

    def __len__(self) -> int:
        return len(self._items)

    def _commit(self) -> None:
        """Persist (fire-and-forget) then notify."""
        self._persist()
        self._broadcaster.notify(self.get_all)

    def _persist(self) -> None:
        """In-memory stores keep nothing beyond the process."""

    def _not_found(self, operation: str, identifier: object) -> None:
        logger.debug(f"{self.name}.{operation}: no entry for {identifier!r}; nothing changed")


class PersistentEntityStore(EntityStore[T]):
    """Entity store mirrored to a key of a :class:`KeyValueBacking`.

    The full collection is written as a JSON array after every mutation.
    """

    model: Type[T]

    def __init__(self, backing: KeyValueBacking, storage_key: str) -> None:
        super().__init__()
        self.storage_key = storage_key
        self._backing = backing
        self._queue = PersistenceQueue(backing, storage_key)
        self._adapter: TypeAdapter[List[T]] = TypeAdapter(List[self.model])

    async def load(self) -> None:
        """Replace the in-memory collection with the persisted one, if any."""
        try:
            stored = await self._backing.get(self.storage_key)
            if not stored:
                logger.debug(f"No persisted {self.name} under '{self.storage_key}'")
                return
            self._items = self._adapter.validate_json(stored)
        except Exception as e:
            logger.error(f"Error loading {self.name}: {e}")
            return

        logger.info(f"Loaded {len(self._items)} {self.name} from '{self.storage_key}'")
        self._broadcaster.notify(self.get_all)

    async def flush(self) -> None:
        """Wait for every queued write to land."""
        await self._queue.flush()

    @property
    def pending_writes(self) -> int:
        return self._queue.pending

    def _persist(self) -> None:
        payload = json.dumps([item.to_wire() for item in self._items], ensure_ascii=False)
        self._queue.submit(payload)
