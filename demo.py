#!/usr/bin/env python
# Walks through the storefront against the stub API:
#   uvicorn app.main:app --port 8085
import asyncio

from freshcart.cart_sync import CartReconciler
from freshcart.client import StoreClient
from freshcart.models import Address, CartSummary, Product
from freshcart.orders import DashboardStats, OrderPager, change_status
from freshcart.session import resolve_session

BASE_URL = "http://127.0.0.1:8085"


def client_for(token: str) -> StoreClient:
    return StoreClient(base_url=BASE_URL, session_provider=lambda: resolve_session(token))


async def main():
    anon = StoreClient(base_url=BASE_URL, session_provider=lambda: None)

    # -----------------------------
    # Reset everything for demo
    # -----------------------------
    print("Resetting store...")
    anon.session.post(f"{BASE_URL}/reset")

    # -----------------------------
    # Accounts
    # -----------------------------
    print("\nCreating accounts...")
    anon.sign_up("Asha", "asha@example.com", "9000000001", "secret")
    anon.sign_up("Store Admin", "admin@example.com", "9000000000", "secret", user_type="admin")
    customer = client_for(anon.sign_in("asha@example.com", "secret"))
    admin = client_for(anon.sign_in("admin@example.com", "secret"))

    # -----------------------------
    # Catalog
    # -----------------------------
    print("\nAdding products...")
    admin.create_category("Fruits")
    apple = Product.model_validate(admin.create_product({"name": "Apple", "category": "Fruits", "price": 120, "stock": 50}))
    mango = Product.model_validate(admin.create_product({"name": "Mango", "category": "Fruits", "price": 250, "stock": 20}))
    print(customer.list_products())

    # -----------------------------
    # Cart: a burst of taps becomes one call per product
    # -----------------------------
    print("\nFilling the cart...")
    cart = CartReconciler(customer, delay=0.5, notify=lambda n: print(f"[{n.level}] {n.message}"))
    await cart.load()
    cart.add(apple.id)
    cart.increment(apple.id)
    cart.increment(apple.id)
    cart.add(mango.id)
    await asyncio.sleep(0.8)
    print("server cart:", await customer.fetch_cart())
    summary = CartSummary.build(cart.cart, [apple, mango])
    print(f"subtotal={summary.subtotal} delivery={summary.delivery_fee} handling={summary.handling_fee} total={summary.total}")

    # -----------------------------
    # Address + order
    # -----------------------------
    print("\nPlacing order...")
    customer.save_address(Address(street="12 Sardarpura", city="Jodhpur", state="Rajasthan", pincode="342003"))
    address = customer.list_addresses()[0]
    await cart.flush()
    print(customer.place_order(address.id))
    cart.clear_after_checkout()
    print(customer.list_orders())

    # -----------------------------
    # Admin workflow
    # -----------------------------
    print("\nAdmin dashboard...")
    pager = OrderPager(admin)
    orders = pager.load_first()
    print(DashboardStats.from_orders(orders))
    print(change_status(admin, orders[0], "Processing"))
    print(admin.sales_analytics("today"))


if __name__ == "__main__":
    asyncio.run(main())
