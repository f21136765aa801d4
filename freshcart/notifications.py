# freshcart/notifications.py
"""
Live "new order" feed for the admin console.

The backend pushes a ``newOrder`` event over socket.io whenever a customer
checks out. The socket.io client owns the handshake, heartbeats and
reconnects once connected; ``OrderFeed.run`` only retries the first connect.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Union

import socketio
from socketio.exceptions import ConnectionError as SocketConnectionError

from .config import get_settings

logger = logging.getLogger(__name__)

NEW_ORDER_EVENT = "newOrder"


@dataclass(frozen=True)
class NewOrderEvent:
    order_id: str
    total_amount: float

    @classmethod
    def from_payload(cls, payload: Any) -> Optional["NewOrderEvent"]:
        if not isinstance(payload, dict) or "orderId" not in payload:
            return None
        try:
            total = float(payload.get("totalAmount", 0) or 0)
        except (TypeError, ValueError):
            total = 0.0
        return cls(order_id=str(payload["orderId"]), total_amount=total)

    def banner(self) -> str:
        return f"Order #{self.order_id} placed. Amount: ₹{self.total_amount:g}"


Handler = Callable[[NewOrderEvent], Union[None, Awaitable[None]]]


class OrderFeed:
    def __init__(
        self,
        on_new_order: Handler,
        base_url: Optional[str] = None,
        max_reconnects: int = 10,
        reconnect_delay: float = 1.0,
        max_delay: float = 60.0,
        client: Optional[socketio.AsyncClient] = None,
    ):
        self.url = (base_url or get_settings().socket_url).rstrip("/")
        self.on_new_order = on_new_order
        self.max_reconnects = max_reconnects
        self.reconnect_delay = reconnect_delay
        self.max_delay = max_delay
        self.attempts = 0
        self._running = False

        self.sio = client or socketio.AsyncClient(
            reconnection=True,
            reconnection_attempts=max_reconnects,
            reconnection_delay=reconnect_delay,
            reconnection_delay_max=max_delay,
        )
        self.sio.on("connect", self._on_connect)
        self.sio.on("disconnect", self._on_disconnect)
        self.sio.on(NEW_ORDER_EVENT, self.handle_new_order)

    async def run(self):
        self._running = True
        while self._running:
            try:
                await self.sio.connect(self.url, transports=["websocket"])
            except SocketConnectionError as e:
                logger.warning("order feed connection failed: %s", e)
                if self.attempts >= self.max_reconnects:
                    logger.error("order feed: max reconnects reached, giving up")
                    break
                self.attempts += 1
                delay = min(self.reconnect_delay * (2 ** (self.attempts - 1)), self.max_delay)
                logger.info("order feed reconnecting in %.1fs (attempt %d)", delay, self.attempts)
                await asyncio.sleep(delay)
                continue
            # returns once we disconnect or the client stops reconnecting
            await self.sio.wait()
            break
        self._running = False

    async def stop(self):
        self._running = False
        if self.sio.connected:
            await self.sio.disconnect()

    async def _on_connect(self):
        self.attempts = 0
        logger.info("order feed connected")

    async def _on_disconnect(self, *args):
        logger.info("order feed disconnected")

    async def handle_new_order(self, payload: Any):
        event = NewOrderEvent.from_payload(payload)
        if event is None:
            logger.warning("malformed newOrder payload: %r", payload)
            return
        try:
            result = self.on_new_order(event)
            if asyncio.iscoroutine(result):
                await result
        except Exception:
            logger.exception("new order handler failed for order %s", event.order_id)
