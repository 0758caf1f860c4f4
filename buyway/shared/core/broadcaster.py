from __future__ import annotations

import logging
from typing import Callable, Generic, List, Tuple, TypeAlias, TypeVar

S = TypeVar("S")

Listener: TypeAlias = Callable[[S], None]
Unsubscribe: TypeAlias = Callable[[], None]


class Broadcaster(Generic[S]):
    """Synchronous subscriber list for a single store.

    Every listener gets its own snapshot so one listener cannot observe
    another's edits. Registrations are tracked by token, so subscribing the
    same callable twice yields two independent registrations.
    """

    def __init__(self, name: str = "store") -> None:
        self.name = name
        self._listeners: List[Tuple[object, Listener[S]]] = []
        self._logger = logging.getLogger(__name__)

    @property
    def subscriber_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: Listener[S], snapshot: S) -> Unsubscribe:
        """Register a listener and call it once with the current state."""
        token = object()
        self._listeners.append((token, listener))
        self._logger.debug(f"Subscribed listener to '{self.name}' ({len(self._listeners)} total)")
        self._safe_dispatch(listener, snapshot)

        def unsubscribe() -> None:
            self._listeners = [entry for entry in self._listeners if entry[0] is not token]

        return unsubscribe

    def notify(self, snapshot_factory: Callable[[], S]) -> None:
        """Call every listener, in registration order, with a fresh snapshot."""
        listeners = [listener for _, listener in self._listeners]
        if not listeners:
            return

        self._logger.debug(f"Notifying {len(listeners)} listener(s) of '{self.name}'")
        for listener in listeners:
            self._safe_dispatch(listener, snapshot_factory())

    def _safe_dispatch(self, listener: Listener[S], snapshot: S) -> None:
        """Dispatch wrapper to keep one listener failure from stopping the rest."""
        try:
            listener(snapshot)
        except Exception as exc:
            listener_name = getattr(listener, "__name__", str(listener))
            self._logger.exception(
                f"Listener error in '{listener_name}' for '{self.name}'",
                exc_info=exc,
            )

    def clear(self) -> None:
        """Remove all subscriptions."""
        self._listeners.clear()
