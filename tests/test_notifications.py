# tests/test_notifications.py
import asyncio
import logging

from socketio.exceptions import ConnectionError as SocketConnectionError

from freshcart.notifications import NEW_ORDER_EVENT, NewOrderEvent, OrderFeed


class FakeSocket:
    """Stands in for socketio.AsyncClient: records handlers and connect attempts."""

    def __init__(self, refusals=0):
        self.handlers = {}
        self.refusals = refusals
        self.attempts = []
        self.connected = False

    def on(self, event, handler=None):
        self.handlers[event] = handler

    async def connect(self, url, transports=None):
        self.attempts.append((url, transports))
        if len(self.attempts) <= self.refusals:
            raise SocketConnectionError("refused")
        self.connected = True
        await self.handlers["connect"]()

    async def wait(self):
        while self.connected:
            await asyncio.sleep(0)

    async def disconnect(self):
        self.connected = False
        await self.handlers["disconnect"]()


def feed_with(handler, sock, **kwargs):
    return OrderFeed(handler, base_url="http://localhost:5001/", client=sock, **kwargs)


def test_new_order_banner():
    event = NewOrderEvent.from_payload({"orderId": "A1", "totalAmount": "249.5"})
    assert event.banner() == "Order #A1 placed. Amount: ₹249.5"
    assert NewOrderEvent.from_payload({"totalAmount": 1}) is None
    assert NewOrderEvent.from_payload({"orderId": 7, "totalAmount": None}).total_amount == 0


def test_events_reach_async_and_plain_callbacks():
    received = []

    async def on_async(event):
        received.append(("async", event.order_id))

    async def scenario():
        for handler in (on_async, lambda e: received.append(("plain", e.order_id))):
            sock = FakeSocket()
            feed_with(handler, sock)
            await sock.handlers[NEW_ORDER_EVENT]({"orderId": "B2", "totalAmount": 99})
            await sock.handlers[NEW_ORDER_EVENT]("garbage")

    asyncio.run(scenario())
    assert received == [("async", "B2"), ("plain", "B2")]


def test_failing_callback_is_logged_and_feed_keeps_going(caplog):
    seen = []

    def on_new_order(event):
        seen.append(event.order_id)
        raise RuntimeError("render failed")

    sock = FakeSocket()
    feed_with(on_new_order, sock)

    async def scenario():
        await sock.handlers[NEW_ORDER_EVENT]({"orderId": "C1", "totalAmount": 10})
        await sock.handlers[NEW_ORDER_EVENT]({"orderId": "C2", "totalAmount": 20})

    with caplog.at_level(logging.ERROR, logger="freshcart.notifications"):
        asyncio.run(scenario())
    assert seen == ["C1", "C2"]
    assert "render failed" in caplog.text


def test_first_connect_is_retried_then_stop_ends_run():
    sock = FakeSocket(refusals=2)
    feed = feed_with(lambda e: None, sock, reconnect_delay=0.001)

    async def scenario():
        task = asyncio.ensure_future(feed.run())
        while not sock.connected:
            await asyncio.sleep(0.001)
        await feed.stop()
        await task

    asyncio.run(scenario())
    assert sock.attempts == [("http://localhost:5001", ["websocket"])] * 3
    assert feed.attempts == 0


def test_gives_up_after_max_reconnects():
    sock = FakeSocket(refusals=100)
    feed = feed_with(lambda e: None, sock, max_reconnects=2, reconnect_delay=0.001)
    asyncio.run(feed.run())
    assert len(sock.attempts) == 3
    assert not sock.connected
