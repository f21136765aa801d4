# tests/test_concurrency.py
import asyncio

import httpx

from app.main import app
from freshcart.cart_sync import CartReconciler, SyncState
from freshcart.client import StoreClient
from freshcart.models import cart_from_lines
from freshcart.session import resolve_session

from conftest import client_for, make_user, reset


class SlowTransport(httpx.AsyncBaseTransport):
    """ASGI transport that holds every request for a moment and counts overlap."""

    def __init__(self, delay):
        self.inner = httpx.ASGITransport(app=app)
        self.delay = delay
        self.in_flight = 0
        self.max_in_flight = 0

    async def handle_async_request(self, request):
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            return await self.inner.handle_async_request(request)
        finally:
            self.in_flight -= 1


def test_overlapping_passes_run_one_at_a_time():
    reset()
    admin_token = make_user("admin@example.com", "admin")
    token = make_user("asha@example.com")
    admin = client_for(admin_token)
    ids = [admin.create_product({"name": n, "category": "x", "price": 10, "stock": 50})["_id"]
           for n in ("Apple", "Milk", "Bread")]

    transport = SlowTransport(delay=0.02)
    customer = StoreClient(base_url="http://testserver", session_provider=lambda: resolve_session(token),
                           async_transport=transport)

    async def scenario():
        cart = CartReconciler(customer, delay=0.01)
        cart.add(ids[0])
        cart.add(ids[1])
        first = asyncio.ensure_future(cart.reconcile())
        await asyncio.sleep(0.01)
        assert cart.state == SyncState.RECONCILING
        cart.increment(ids[0])
        cart.remove(ids[1])
        cart.add(ids[2])
        # the debounce timer fires while the first pass is still in flight
        await asyncio.sleep(0.03)
        await first
        await cart.flush()
        return cart, cart_from_lines(await customer.fetch_cart())

    cart, server = asyncio.run(scenario())
    assert transport.max_in_flight == 1
    assert server == {ids[0]: 2, ids[2]: 1}
    assert cart.snapshot == cart.cart == server
