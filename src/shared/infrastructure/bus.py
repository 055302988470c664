"""In-memory event bus implementation.

Keeps three things for every published event:

* the append-only log (``events()``), in emission order;
* a bounded outbox queue that a future broker adapter drains
  (``drain()``);
* synchronous delivery to in-process subscribers (failures are logged,
  never raised to the publisher).
"""

from __future__ import annotations

import queue
import threading
from typing import Dict, List, Type

import structlog

from shared.domain.bus import IEventBus, IEventHandler
from shared.domain.events import DomainEvent

logger = structlog.get_logger(__name__)

DEFAULT_QUEUE_MAXSIZE = 1000


class InMemoryEventBus(IEventBus):
    """Simple in-process event bus with an append-only log."""

    def __init__(self, maxsize: int = DEFAULT_QUEUE_MAXSIZE) -> None:
        self._handlers: Dict[Type[DomainEvent], List[IEventHandler]] = {}
        self._log: List[DomainEvent] = []
        self._lock = threading.Lock()
        self._outbox: "queue.Queue[DomainEvent]" = queue.Queue(maxsize=maxsize)

    def subscribe(self, event_class: Type[DomainEvent], handler: IEventHandler) -> None:
        handlers = self._handlers.setdefault(event_class, [])
        if handler not in handlers:
            handlers.append(handler)

    def publish(self, event: DomainEvent) -> None:
        with self._lock:
            self._log.append(event)

        try:
            self._outbox.put_nowait(event)
        except queue.Full:
            logger.warning(
                "event_bus.queue_full",
                event_id=str(event.event_id),
                event_type=event.event_type,
            )

        logger.info(
            "domain_event.emitted",
            event_id=str(event.event_id),
            event_type=event.event_type,
            aggregate_id=event.aggregate_id,
        )

        # A failing subscriber never fails the publisher.
        for handler in self._handlers.get(type(event), []):
            try:
                handler.handle(event)
            except Exception:
                logger.exception(
                    "event_bus.handler_failed",
                    event_id=str(event.event_id),
                    event_type=event.event_type,
                    handler=type(handler).__name__,
                )

    def events(self) -> List[DomainEvent]:
        """Snapshot of the log in emission order."""
        with self._lock:
            return list(self._log)

    def drain(self, max_items: int | None = None) -> List[DomainEvent]:
        """Remove and return queued events for delivery to a broker."""
        drained: List[DomainEvent] = []
        while max_items is None or len(drained) < max_items:
            try:
                drained.append(self._outbox.get_nowait())
            except queue.Empty:
                break
        return drained
