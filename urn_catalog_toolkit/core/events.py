from __future__ import annotations

"""Minimal thread-safe event emitter.

Listeners are plain callables; :meth:`EventEmitter.subscribe` returns a
:class:`Disposable` that removes the listener again. A listener may dispose
itself while being dispatched.
"""

import logging
from threading import RLock
from typing import Callable, Generic, List, TypeVar

logger = logging.getLogger(__name__)

__all__ = ["Disposable", "EventEmitter"]

T = TypeVar("T")


class Disposable:
    """Handle returned by :meth:`EventEmitter.subscribe`."""

    def __init__(self, on_dispose: Callable[[], None]) -> None:
        self._on_dispose = on_dispose
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        self._on_dispose()


class EventEmitter(Generic[T]):
    """Fan out events of type ``T`` to subscribed listeners."""

    def __init__(self, name: str = "") -> None:
        self._name = name
        self._listeners: List[Callable[[T], None]] = []
        self._lock = RLock()

    @property
    def listener_count(self) -> int:
        with self._lock:
            return len(self._listeners)

    def subscribe(self, listener: Callable[[T], None]) -> Disposable:
        with self._lock:
            self._listeners.append(listener)

        def _remove() -> None:
            with self._lock:
                try:
                    self._listeners.remove(listener)
                except ValueError:
                    pass

        return Disposable(_remove)

    def fire(self, event: T) -> None:
        """Call every listener registered at the time of the call.

        A failing listener is logged and does not stop the others.
        """
        with self._lock:
            snapshot = list(self._listeners)
        for listener in snapshot:
            try:
                listener(event)
            except Exception:
                logger.error("Listener for %s failed", self._name or "event", exc_info=True)
