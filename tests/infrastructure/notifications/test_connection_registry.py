"""Tests for the live connection registry and the push publisher."""

from __future__ import annotations

import asyncio

import pytest

from sponsorlink.infrastructure.notifications import (
    ChannelDeliveryError,
    ConnectionRegistry,
    PushPublisher,
)


def test_broadcast_reaches_only_connections_claimed_by_user(fake_websocket_factory) -> None:
    """A and B claim user 42, C claims user 7: only A and B receive the push."""

    registry = ConnectionRegistry()
    a, b, c = (fake_websocket_factory() for _ in range(3))

    async def scenario() -> int:
        for websocket in (a, b, c):
            await registry.connect(websocket)
        registry.claim_identity(a, 42)
        registry.claim_identity(b, 42)
        registry.claim_identity(c, 7)
        return await registry.broadcast_to(42, {"type": "x"})

    delivered = asyncio.run(scenario())

    assert delivered == 2
    assert a.received == [{"type": "x"}]
    assert b.received == [{"type": "x"}]
    assert c.received == []


def test_unclaimed_connections_receive_nothing(fake_websocket_factory) -> None:
    registry = ConnectionRegistry()
    websocket = fake_websocket_factory()

    async def scenario() -> int:
        await registry.connect(websocket)
        return await registry.broadcast_to(42, {"type": "x"})

    assert asyncio.run(scenario()) == 0
    assert websocket.accepted is True
    assert websocket.received == []
    assert registry.identity_of(websocket) is None


def test_failing_connection_is_dropped_without_blocking_others(fake_websocket_factory) -> None:
    registry = ConnectionRegistry()
    broken = fake_websocket_factory(fail=True)
    healthy = fake_websocket_factory()

    async def scenario() -> int:
        for websocket in (broken, healthy):
            await registry.connect(websocket)
            registry.claim_identity(websocket, 5)
        return await registry.broadcast_to(5, {"type": "new_message", "message": "hi"})

    delivered = asyncio.run(scenario())

    assert delivered == 1
    assert healthy.received == [{"type": "new_message", "message": "hi"}]
    assert broken not in registry
    assert healthy in registry


def test_slow_connection_times_out_and_is_dropped(fake_websocket_factory) -> None:
    registry = ConnectionRegistry(send_timeout=0.05)
    slow = fake_websocket_factory(delay=1.0)
    fast = fake_websocket_factory()

    async def scenario() -> int:
        for websocket in (slow, fast):
            await registry.connect(websocket)
            registry.claim_identity(websocket, 9)
        return await registry.broadcast_to(9, {"type": "x"})

    assert asyncio.run(scenario()) == 1
    assert slow.received == []
    assert fast.received == [{"type": "x"}]
    assert slow not in registry


def test_claim_lifecycle(fake_websocket_factory) -> None:
    registry = ConnectionRegistry()
    websocket = fake_websocket_factory()

    with pytest.raises(KeyError):
        registry.claim_identity(websocket, 1)

    asyncio.run(registry.connect(websocket))
    registry.claim_identity(websocket, 1)
    registry.claim_identity(websocket, 2)

    assert registry.identity_of(websocket) == 2
    assert registry.connections_for(1) == []
    assert registry.connections_for(2) == [websocket]

    registry.deregister(websocket)
    registry.deregister(websocket)
    assert len(registry) == 0


def test_publisher_schedules_broadcast_on_running_loop(fake_websocket_factory) -> None:
    registry = ConnectionRegistry()
    publisher = PushPublisher(registry)
    websocket = fake_websocket_factory()

    async def scenario() -> None:
        await registry.connect(websocket)
        registry.claim_identity(websocket, 3)
        message = {"type": "new_sponsorship", "message": "New sponsorship received from Ada"}
        publisher.publish(3, message)
        message["type"] = "mutated"
        for _ in range(5):
            await asyncio.sleep(0)

    asyncio.run(scenario())

    assert websocket.received == [
        {"type": "new_sponsorship", "message": "New sponsorship received from Ada"}
    ]


def test_publisher_without_event_loop_raises_channel_error() -> None:
    publisher = PushPublisher(ConnectionRegistry())

    with pytest.raises(ChannelDeliveryError) as exc_info:
        publisher.publish(1, {"type": "x", "message": "y"})

    assert exc_info.value.channel == "push"
