"""Broadcast channel announcing which entity types were created, updated or deleted."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from data_repository.config.settings import settings

logger = logging.getLogger(__name__)

# Queued after the last event once a subscription ends
_END_OF_STREAM = object()


def _type_name(item_type: Any) -> str:
    return getattr(item_type, "__name__", repr(item_type))


@dataclass(frozen=True)
class BroadcastConfig:
    """Configuration used by :class:`EntityUpdateBroadcaster`."""

    queue_size: int

    @classmethod
    def from_settings(cls) -> "BroadcastConfig":
        return cls(queue_size=max(settings.NOTIFICATION_QUEUE_SIZE, 0))


class EntitySubscription:
    """A single listener on an :class:`EntityUpdateBroadcaster`.

    Iterate with ``async for`` to receive entity types in emission order. The
    iteration ends once the subscription is closed, either explicitly, by the
    broadcaster closing, or by being dropped as a slow consumer. Events queued
    before the end are still delivered.
    """

    def __init__(self, broadcaster: "EntityUpdateBroadcaster", queue: "asyncio.Queue[Any]", item_type: Optional[type] = None) -> None:
        self._broadcaster = broadcaster
        self._queue = queue
        self.item_type = item_type
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def matches(self, item_type: type) -> bool:
        return self.item_type is None or self.item_type is item_type

    def pending(self) -> List[type]:
        """Return the events already queued without waiting for new ones."""
        events: List[type] = []
        while not self._queue.empty():
            event = self._queue.get_nowait()
            if event is not _END_OF_STREAM:
                events.append(event)
        return events

    def close(self) -> None:
        self._broadcaster.unsubscribe(self)

    def _deliver(self, item_type: type) -> None:
        self._queue.put_nowait(item_type)

    def _end(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._queue.put_nowait(_END_OF_STREAM)
        except asyncio.QueueFull:
            # __anext__ stops on its own once the backlog is drained
            pass

    def __aiter__(self) -> "EntitySubscription":
        return self

    async def __anext__(self) -> type:
        if self._closed and self._queue.empty():
            raise StopAsyncIteration
        event = await self._queue.get()
        if event is _END_OF_STREAM:
            raise StopAsyncIteration
        return event

    def __enter__(self) -> "EntitySubscription":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    async def __aenter__(self) -> "EntitySubscription":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        self.close()


class EntityUpdateBroadcaster:
    """Fan-out of entity types to every currently registered subscriber.

    Events are not buffered for future subscribers: publishing with nobody
    listening drops the event.
    """

    def __init__(self, config: Optional[BroadcastConfig] = None) -> None:
        self._config = config or BroadcastConfig.from_settings()
        self._subscriptions: List[EntitySubscription] = []
        self._closed = False

    @property
    def config(self) -> BroadcastConfig:
        return self._config

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def subscribe(self, item_type: Optional[type] = None) -> EntitySubscription:
        """Register a listener, optionally restricted to a single entity type."""
        queue: asyncio.Queue[Any] = asyncio.Queue(maxsize=self.config.queue_size)
        subscription = EntitySubscription(self, queue, item_type)
        if self._closed:
            logger.debug("Subscribe after close; returning an ended subscription")
            subscription._end()
            return subscription

        self._subscriptions.append(subscription)
        return subscription

    def unsubscribe(self, subscription: EntitySubscription) -> None:
        try:
            self._subscriptions.remove(subscription)
        except ValueError:
            pass
        subscription._end()

    def publish(self, item_type: type) -> int:
        """Deliver ``item_type`` to every matching subscriber.

        Returns the number of subscribers that received the event. Never
        blocks and never raises, even after :meth:`close`.
        """
        if self._closed:
            logger.debug("Dropping %s update; broadcaster is closed", _type_name(item_type))
            return 0

        delivered = 0
        for subscription in list(self._subscriptions):
            if not subscription.matches(item_type):
                continue
            try:
                subscription._deliver(item_type)
                delivered += 1
            except asyncio.QueueFull:
                logger.warning(
                    "Dropping slow entity update subscriber (queue size %s)",
                    self.config.queue_size,
                )
                self.unsubscribe(subscription)

        logger.debug("Published %s update to %s subscriber(s)", _type_name(item_type), delivered)
        return delivered

    def close(self) -> None:
        """End every subscription and refuse further events."""
        if self._closed:
            return
        self._closed = True
        subscriptions, self._subscriptions = self._subscriptions, []
        for subscription in subscriptions:
            subscription._end()
        logger.info("Entity update broadcaster closed (%s subscriber(s) ended)", len(subscriptions))


__all__ = [
    "BroadcastConfig",
    "EntitySubscription",
    "EntityUpdateBroadcaster",
]
