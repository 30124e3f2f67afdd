"""Event bus carrying session and display events to the UI.

Publishers are the state machine and the display coordinator, both running
inside timer callbacks or button handlers on the NiceGUI loop, so publishing
is synchronous (:meth:`EventBus.publish_nowait`).  Delivery happens later on
a consumer task, which keeps a slow page update from delaying a timer.

* Handlers may be sync or async.
* A handler that raises is logged and unsubscribed.
* The queue is bounded; when full, the oldest event is dropped.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Any, Callable

from pomocat.core.models.event import Event

_log = logging.getLogger(__name__)

Handler = Callable[[Event], Any]


class EventBus:
    """Queue-backed pub/sub for ``pomodoro.*`` and ``display.*`` events.

    Args:
        queue_size: Events held before the oldest is dropped.
    """

    def __init__(self, queue_size: int = 1000) -> None:
        self._queue_size = queue_size
        self._queue: asyncio.Queue[Event] | None = None
        self._consumer: asyncio.Task[None] | None = None
        # event_type → {sub_id: handler}, in subscription order
        self._handlers: dict[str, dict[str, Handler]] = {}
        self._event_type_of: dict[str, str] = {}
        self.dropped = 0

    @property
    def is_started(self) -> bool:
        return self._queue is not None

    async def start(self) -> None:
        """Create the queue and the consumer task on the running loop."""
        self._queue = asyncio.Queue(maxsize=self._queue_size)
        self._consumer = asyncio.create_task(self._consume(), name="pomocat-event-bus")
        _log.info("Event bus started (queue_size=%d)", self._queue_size)

    async def stop(self) -> None:
        """Stop delivering and forget every subscription."""
        if self._consumer is not None:
            self._consumer.cancel()
            try:
                await self._consumer
            except asyncio.CancelledError:
                pass
            self._consumer = None
        self._queue = None
        self._handlers.clear()
        self._event_type_of.clear()
        _log.info("Event bus stopped")

    def publish_nowait(self, event_type: str, payload: dict[str, Any] | None = None) -> None:
        """Queue an event for delivery.

        Before :meth:`start` (and after :meth:`stop`) the event is dropped, so
        the state machine works the same with or without a UI attached.
        """
        queue = self._queue
        if queue is None:
            _log.debug("Event bus not started, dropping %s", event_type)
            return
        event = Event(event_type=event_type, payload=payload or {})
        if queue.full():
            oldest = queue.get_nowait()
            self.dropped += 1
            _log.warning("Event queue full, dropped %s", oldest.event_type)
        queue.put_nowait(event)

    def subscribe(self, event_type: str, handler: Handler) -> str:
        """Call *handler* for every *event_type* event; returns a subscription id."""
        sub_id = uuid.uuid4().hex
        self._handlers.setdefault(event_type, {})[sub_id] = handler
        self._event_type_of[sub_id] = event_type
        return sub_id

    def unsubscribe(self, sub_id: str) -> None:
        """Remove a subscription; unknown ids are ignored."""
        event_type = self._event_type_of.pop(sub_id, None)
        if event_type is not None:
            self._handlers.get(event_type, {}).pop(sub_id, None)

    async def _consume(self) -> None:
        assert self._queue is not None
        queue = self._queue
        while True:
            event = await queue.get()
            await self._deliver(event)

    async def _deliver(self, event: Event) -> None:
        for sub_id, handler in list(self._handlers.get(event.event_type, {}).items()):
            try:
                result = handler(event)
                if asyncio.iscoroutine(result):
                    await result
            except Exception:
                _log.exception("Handler %r for %s raised, unsubscribing it", handler, event.event_type)
                self.unsubscribe(sub_id)
