#!/usr/bin/env python
# Two cart passes racing each other: a slow server and taps arriving while
# the first pass is still in flight. Runs in-process against the stub API.
import asyncio

import httpx

from app.database import clear_all
from app.main import app
from freshcart.cart_sync import CartReconciler
from freshcart.client import StoreClient
from freshcart.session import resolve_session

BASE_URL = "http://stub"


class SlowTransport(httpx.AsyncBaseTransport):
    def __init__(self, inner: httpx.AsyncBaseTransport, delay: float):
        self.inner = inner
        self.delay = delay
        self.calls = []

    async def handle_async_request(self, request):
        self.calls.append(f"{request.method} {request.url.path}")
        await asyncio.sleep(self.delay)
        return await self.inner.handle_async_request(request)


async def main():
    clear_all()
    transport = SlowTransport(httpx.ASGITransport(app=app), delay=0.3)
    async with httpx.AsyncClient(transport=transport, base_url=BASE_URL) as http:
        await http.post("/api/auth/signup", json={"name": "Admin", "email": "a@x.io", "mobile": "1", "password": "p", "userType": "admin"})
        token = (await http.post("/api/auth/signin", json={"email": "a@x.io", "password": "p"})).json()["token"]
        headers = {"Authorization": f"Bearer {token}"}
        pids = []
        for name in ("Milk", "Bread", "Eggs"):
            r = await http.post("/api/create-product", json={"name": name, "category": "Daily", "price": 40, "stock": 100}, headers=headers)
            pids.append(r.json()["_id"])

    client = StoreClient(base_url=BASE_URL, session_provider=lambda: resolve_session(token), async_transport=transport)
    cart = CartReconciler(client, delay=0.1, notify=lambda n: print(f"⚠️  {n.message}"))
    transport.calls.clear()

    print("⚡ tapping Milk three times...")
    for _ in range(3):
        cart.increment(pids[0])
    await asyncio.sleep(0.15)
    print(f"   state: {cart.state.value}")

    print("⚡ tapping Bread and Eggs while the first pass is running...")
    cart.add(pids[1])
    cart.add(pids[2])
    cart.increment(pids[0])
    await asyncio.sleep(2)

    print("\n🧾 calls issued:")
    for call in transport.calls:
        print("  ", call)
    print("\n📦 local cart:", cart.cart)
    print("🪞 snapshot:  ", cart.snapshot)
    print("✅ in sync" if cart.in_sync else "❌ drifted")


if __name__ == "__main__":
    asyncio.run(main())
