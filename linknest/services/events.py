import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from linknest.schemas.share import LinkSavedEvent

logger = logging.getLogger(__name__)


class LinkEventBroadcaster:
    """Fan-out of ``linkSaved`` events to connected application instances.

    Delivery is best-effort: a subscriber whose queue is full misses the
    event and picks the link up on its next read of the store.
    """

    def __init__(self, queue_size: int = 100) -> None:
        self.queue_size = queue_size
        self._subscribers: set[asyncio.Queue[LinkSavedEvent]] = set()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    @asynccontextmanager
    async def subscribe(self) -> AsyncIterator[asyncio.Queue[LinkSavedEvent]]:
        queue: asyncio.Queue[LinkSavedEvent] = asyncio.Queue(maxsize=self.queue_size)
        self._subscribers.add(queue)
        try:
            yield queue
        finally:
            self._subscribers.discard(queue)

    def publish(self, event: LinkSavedEvent) -> int:
        """Queue ``event`` for every subscriber; returns how many received it."""
        delivered = 0
        for queue in list(self._subscribers):
            try:
                queue.put_nowait(event)
            except asyncio.QueueFull:
                logger.debug("Subscriber queue full, dropping event for %s", event.url)
                continue
            delivered += 1
        return delivered
