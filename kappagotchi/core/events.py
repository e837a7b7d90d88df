import inspect
import logging
from threading import Lock
from typing import Any, Callable, Coroutine, Dict, Iterable, List, Union

from kappagotchi.data.state_types import CoreEvent, EventType

Handler = Union[Callable[[CoreEvent], Any], Callable[[CoreEvent], Coroutine]]

ANY_EVENT = "*"


class EventEmitter:
    """Thread-safe async emitter for engine events.

    Handlers are keyed by ``EventType`` (or ``"*"`` for every event) and may
    be plain functions or coroutines. A failing handler is logged and does
    not stop the others.
    """

    def __init__(self):
        self._handlers: Dict[str, List[Handler]] = {}
        self._lock = Lock()
        self.logger = logging.getLogger(__name__)

    @staticmethod
    def _key(event: Union[EventType, str]) -> str:
        return event.value if isinstance(event, EventType) else str(event)

    def on(self, event: Union[EventType, str], handler: Handler) -> None:
        """Register sync or async event handler."""
        key = self._key(event)
        with self._lock:
            handlers = self._handlers.setdefault(key, [])
            if handler not in handlers:
                handlers.append(handler)

    def off(self, event: Union[EventType, str], handler: Handler) -> None:
        key = self._key(event)
        with self._lock:
            if handler in self._handlers.get(key, []):
                self._handlers[key].remove(handler)

    async def emit(self, event: CoreEvent) -> None:
        """Emit one event to its handlers, then to the catch-all handlers."""
        with self._lock:
            handlers = list(self._handlers.get(event.type.value, []))
            handlers += self._handlers.get(ANY_EVENT, [])

        for handler in handlers:
            try:
                if inspect.iscoroutinefunction(handler):
                    await handler(event)
                else:
                    handler(event)
            except Exception as e:
                self.logger.error(f"Error in {event.type.value} handler: {e}", exc_info=True)

    async def emit_all(self, events: Iterable[CoreEvent]) -> None:
        """Emit events in the order the engine produced them."""
        for event in events:
            await self.emit(event)
