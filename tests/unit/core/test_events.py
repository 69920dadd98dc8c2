import asyncio

import pytest

from data_repository.core.events import BroadcastConfig, EntityUpdateBroadcaster
from tests.utils.testdata import Author, Item


def test_publish_without_subscribers_is_dropped():
    broadcaster = EntityUpdateBroadcaster(BroadcastConfig(queue_size=0))

    assert broadcaster.publish(Item) == 0

    late = broadcaster.subscribe()
    assert late.pending() == []


def test_publish_fans_out_in_emission_order():
    broadcaster = EntityUpdateBroadcaster(BroadcastConfig(queue_size=0))
    first = broadcaster.subscribe()
    second = broadcaster.subscribe()

    broadcaster.publish(Item)
    broadcaster.publish(Author)
    broadcaster.publish(Item)

    assert first.pending() == [Item, Author, Item]
    assert second.pending() == [Item, Author, Item]


def test_typed_subscription_skips_other_types():
    broadcaster = EntityUpdateBroadcaster(BroadcastConfig(queue_size=0))
    authors = broadcaster.subscribe(Author)

    delivered = broadcaster.publish(Item)
    broadcaster.publish(Author)

    assert delivered == 0
    assert authors.pending() == [Author]


def test_unsubscribe_stops_delivery_and_is_idempotent():
    broadcaster = EntityUpdateBroadcaster(BroadcastConfig(queue_size=0))
    subscription = broadcaster.subscribe()

    subscription.close()
    subscription.close()
    broadcaster.publish(Item)

    assert subscription.closed
    assert broadcaster.subscriber_count == 0
    assert subscription.pending() == []


def test_context_manager_unsubscribes_on_exit():
    broadcaster = EntityUpdateBroadcaster(BroadcastConfig(queue_size=0))

    with broadcaster.subscribe() as subscription:
        assert broadcaster.subscriber_count == 1

    assert subscription.closed
    assert broadcaster.subscriber_count == 0


def test_slow_subscriber_is_dropped_when_queue_is_bounded():
    broadcaster = EntityUpdateBroadcaster(BroadcastConfig(queue_size=1))
    slow = broadcaster.subscribe()
    fast = broadcaster.subscribe()

    broadcaster.publish(Item)
    fast.pending()
    broadcaster.publish(Author)

    assert slow.closed
    assert broadcaster.subscriber_count == 1
    assert slow.pending() == [Item]
    assert fast.pending() == [Author]


def test_close_ends_subscriptions_and_ignores_later_publishes():
    broadcaster = EntityUpdateBroadcaster(BroadcastConfig(queue_size=0))
    subscription = broadcaster.subscribe()
    broadcaster.publish(Item)

    broadcaster.close()
    broadcaster.close()

    assert broadcaster.is_closed
    assert subscription.closed
    assert broadcaster.publish(Author) == 0
    assert subscription.pending() == [Item]


@pytest.mark.asyncio
async def test_iteration_delivers_backlog_before_ending():
    broadcaster = EntityUpdateBroadcaster(BroadcastConfig(queue_size=0))
    subscription = broadcaster.subscribe()
    broadcaster.publish(Item)
    broadcaster.publish(Author)
    broadcaster.close()

    received = [item_type async for item_type in subscription]

    assert received == [Item, Author]


@pytest.mark.asyncio
async def test_waiting_subscriber_wakes_up_on_close():
    broadcaster = EntityUpdateBroadcaster(BroadcastConfig(queue_size=0))

    async def consume():
        return [item_type async for item_type in broadcaster.subscribe()]

    consumer = asyncio.create_task(consume())
    await asyncio.sleep(0)
    broadcaster.close()

    assert await asyncio.wait_for(consumer, timeout=1) == []


@pytest.mark.asyncio
async def test_subscribe_after_close_returns_ended_subscription():
    broadcaster = EntityUpdateBroadcaster(BroadcastConfig(queue_size=0))
    broadcaster.close()

    async with broadcaster.subscribe() as subscription:
        received = [item_type async for item_type in subscription]

    assert subscription.closed
    assert received == []
    assert broadcaster.subscriber_count == 0


def test_default_config_comes_from_settings(monkeypatch):
    from data_repository.core import events

    monkeypatch.setattr(events.settings, "NOTIFICATION_QUEUE_SIZE", 5)

    assert EntityUpdateBroadcaster().config == BroadcastConfig(queue_size=5)
