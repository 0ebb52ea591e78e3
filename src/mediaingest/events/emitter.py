"""In-process event emitter supporting sync and async handlers."""

import inspect
import typing as t
from collections import defaultdict

from ..infrastructure.logging import get_logger
from .base import BaseEmitter

if t.TYPE_CHECKING:
    import loguru


class EventEmitter(BaseEmitter):
    """Dispatches events to subscribed handlers in subscription order.

    A failing handler is logged and skipped; it never stops other handlers
    or propagates into the component that emitted the event.
    """

    def __init__(self, logger: t.Optional["loguru.Logger"] = None) -> None:
        self._logger = logger or get_logger(__name__)
        self._handlers: dict[str, list[t.Callable]] = defaultdict(list)

    def on(self, event_type: str, handler: t.Callable) -> None:
        self._handlers[event_type].append(handler)

    def off(self, event_type: str, handler: t.Callable) -> None:
        handlers = self._handlers.get(event_type, [])
        if handler not in handlers:
            self._logger.warning(f"Handler {handler} not found for event {event_type}")
            return
        handlers.remove(handler)

    async def emit(self, event_type: str, event_data: t.Any) -> None:
        # Copy so handlers may unsubscribe while being dispatched
        for handler in list(self._handlers.get(event_type, [])):
            if inspect.iscoroutinefunction(handler):
                try:
                    await handler(event_data)
                except Exception as e:
                    self._logger.opt(exception=e).error(
                        f"Async handler {handler} failed for event {event_type}"
                    )
                continue

            try:
                handler(event_data)
            except Exception:
                self._logger.exception(
                    f"Handler {handler} failed for event {event_type}"
                )
