"""
Event dispatcher notifying a selector's owner.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Callable, Dict, List

EventHandler = Callable[..., None]

CHANGE = "change"
REBUILD = "rebuild"


class EventDispatcher:
    """
    Maintains handlers per event name and calls them in registration order.
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, List[EventHandler]] = defaultdict(list)

    def register(self, event: str, handler: EventHandler) -> None:
        self._handlers[event].append(handler)

    def unregister(self, event: str, handler: EventHandler) -> None:
        handlers = self._handlers.get(event, [])
        if handler in handlers:
            handlers.remove(handler)

    def fire(self, event: str, payload: Any, **context: Any) -> None:
        for handler in list(self._handlers.get(event, [])):
            handler(payload, **context)

    def clear(self) -> None:
        self._handlers.clear()
