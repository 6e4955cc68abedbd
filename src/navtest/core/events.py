"""Synchronous event emitter shared by the tester and drivers."""
from __future__ import annotations

from collections import defaultdict
from typing import Any, Callable, DefaultDict, Dict, List, Optional


Listener = Callable[..., Any]


class EventEmitter:
    """Listener registry with deterministic, synchronous dispatch.

    Listeners run in registration order and have all returned before
    :meth:`emit` does. Filters are single named hooks that may rewrite a value.
    """

    def __init__(self) -> None:
        self._listeners: DefaultDict[str, List[Listener]] = defaultdict(list)
        self._filters: Dict[str, Listener] = {}

    def on(self, event: str, listener: Listener) -> None:
        self._listeners[event].append(listener)

    def off(self, event: str, listener: Listener) -> None:
        try:
            self._listeners[event].remove(listener)
        except ValueError:
            pass

    def listeners(self, event: str) -> List[Listener]:
        return list(self._listeners.get(event, ()))

    def emit(self, event: str, *args: Any) -> bool:
        """Call every listener of ``event``; returns whether any was called."""

        listeners = self.listeners(event)
        for listener in listeners:
            listener(*args)
        return bool(listeners)

    def set_filter(self, name: str, fn: Listener) -> None:
        self._filters[name] = fn

    def filter(self, name: str, *args: Any) -> Optional[Any]:
        fn = self._filters.get(name)
        if fn is None:
            return None
        return fn(*args)
