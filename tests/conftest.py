# tests/conftest.py
import asyncio

import httpx
import pytest
from fastapi.testclient import TestClient

from app.main import app
from freshcart.cart_sync import CartReconciler
from freshcart.client import StoreClient
from freshcart.models import Address
from freshcart.session import resolve_session

http = TestClient(app)


def reset():
    http.post("/reset")


def make_user(email: str, user_type: str = "user", name: str = "Test User") -> str:
    http.post("/api/auth/signup", json={
        "name": name, "email": email, "mobile": "9999999999", "password": "pw", "userType": user_type
    })
    return http.post("/api/auth/signin", json={"email": email, "password": "pw"}).json()["token"]


def client_for(token) -> StoreClient:
    return StoreClient(
        base_url="http://testserver",
        session=http,
        session_provider=lambda: resolve_session(token) if token else None,
        async_transport=httpx.ASGITransport(app=app),
    )


@pytest.fixture
def store():
    reset()
    admin = client_for(make_user("admin@example.com", "admin", name="Admin"))
    customer = client_for(make_user("asha@example.com", name="Asha"))
    apple = admin.create_product({"name": "Apple", "category": "Fruits", "price": 120, "stock": 10})
    milk = admin.create_product({"name": "Milk", "category": "Dairy", "price": 30, "stock": 5})
    return {"admin": admin, "customer": customer, "apple": apple["_id"], "milk": milk["_id"]}


def fill_cart(client, quantities, delay=0.01):
    async def scenario():
        cart = CartReconciler(client, delay=delay)
        await cart.load()
        for pid, qty in quantities.items():
            cart.set_quantity(pid, qty)
        await cart.flush()
        return cart

    return asyncio.run(scenario())


def home_address() -> Address:
    return Address(street="12 MG Road", city="Jodhpur", state="Rajasthan", pincode="342001")
