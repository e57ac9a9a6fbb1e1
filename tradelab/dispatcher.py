"""Type-keyed event dispatching."""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Callable, DefaultDict, List, Type


class EventDispatcher:
    """Routes events to the handlers registered for their exact type."""

    def __init__(self) -> None:
        self._handlers: DefaultDict[type, List[Callable[[Any], None]]] = defaultdict(list)

    def register_handler(self, event_type: Type[Any], handler: Callable[[Any], None]) -> None:
        """Register ``handler`` to be called for every event of ``event_type``."""
        self._handlers[event_type].append(handler)

    def dispatch(self, event: Any) -> None:
        """Call every handler registered for the type of ``event``, in registration order."""
        for handler in self._handlers.get(type(event), ()):
            handler(event)