# tests/test_client.py
import asyncio

import pytest

from freshcart.cart_sync import NOT_FOUND_NOTICE, CartReconciler
from freshcart.errors import ApiError, ValidationError
from freshcart.models import Address, Order, cart_from_lines
from freshcart.search import ProductSearch

from conftest import client_for, fill_cart, home_address

DELAY = 0.01


def server_cart(client):
    return cart_from_lines(asyncio.run(client.fetch_cart()))


def test_cart_changes_reach_the_server(store):
    customer, apple, milk = store["customer"], store["apple"], store["milk"]

    async def scenario():
        cart = CartReconciler(customer, delay=DELAY)
        await cart.load()
        for _ in range(3):
            cart.increment(apple)
        while not cart.in_sync:
            await asyncio.sleep(DELAY)
        first = cart_from_lines(await customer.fetch_cart())

        cart.decrement(apple)
        cart.set_quantity(milk, 2)
        await cart.flush()
        second = cart_from_lines(await customer.fetch_cart())

        cart.remove(apple)
        await cart.flush()
        return first, second, cart

    first, second, cart = asyncio.run(scenario())
    assert first == {apple: 3}
    assert second == {apple: 2, milk: 2}
    assert server_cart(customer) == {milk: 2}
    assert cart.snapshot == cart.cart == {milk: 2}


def test_deleted_product_refetches_cart(store):
    customer, admin, apple, milk = store["customer"], store["admin"], store["apple"], store["milk"]
    fill_cart(customer, {apple: 1, milk: 1})

    async def scenario():
        notices = []
        cart = CartReconciler(customer, delay=DELAY, notify=notices.append)
        await cart.load()
        admin.delete_product(apple)  # also drops it from every cart
        cart.remove(apple)
        await cart.flush()
        return cart, notices

    cart, notices = asyncio.run(scenario())
    assert [n.message for n in notices] == [NOT_FOUND_NOTICE]
    assert cart.cart == cart.snapshot == {milk: 1}


def test_checkout(store):
    customer, apple = store["customer"], store["apple"]
    customer.save_address(home_address())
    [address] = customer.list_addresses()
    assert address.one_line() == "12 MG Road, Jodhpur, Rajasthan, 342001, India"

    cart = fill_cart(customer, {apple: 2})
    resp = customer.place_order(address.id)
    cart.clear_after_checkout()

    order = Order.model_validate(resp["order"])
    assert order.total_amount == 2 * 120 + 20 + 4
    assert order.items[0].name == "Apple"
    assert server_cart(customer) == {}
    assert [o["_id"] for o in customer.list_orders()] == [order.id]
    assert store["admin"].get_product(apple)["stock"] == 8


def test_empty_cart_cannot_be_ordered(store):
    customer = store["customer"]
    customer.save_address(home_address())
    [address] = customer.list_addresses()
    with pytest.raises(ApiError) as e:
        customer.place_order(address.id)
    assert e.value.message == "Cart is empty"
    assert e.value.status_code == 400


def test_address_edit_and_delete(store):
    customer = store["customer"]
    customer.save_address(home_address())
    [address] = customer.list_addresses()

    moved = address.model_copy(update={"city": "Jaipur"})
    customer.save_address(moved, address_id=address.id)
    assert [a.city for a in customer.list_addresses()] == ["Jaipur"]

    customer.delete_address(address.id)
    assert customer.list_addresses() == []


def test_incomplete_address_is_rejected_before_any_request(store):
    signed_out = client_for(None)
    with pytest.raises(ValidationError) as e:
        signed_out.save_address(Address(street="12 MG Road", city="Jodhpur", state="Rajasthan"))
    assert str(e.value) == "Pincode is required."


def test_calls_without_a_session_do_nothing(store):
    signed_out = client_for(None)
    assert signed_out.list_products() is None
    assert signed_out.list_addresses() == []
    assert asyncio.run(signed_out.fetch_cart()) is None
    assert asyncio.run(signed_out.add_cart_item(store["apple"], 1)) is None
    assert server_cart(store["customer"]) == {}


def test_server_messages_surface_as_api_errors(store):
    with pytest.raises(ApiError) as e:
        store["customer"].create_product({"name": "Tea", "category": "x", "price": 1})
    assert e.value.message == "Admin access required"

    with pytest.raises(ApiError) as e:
        store["customer"].get_product("missing")
    assert e.value.is_not_found

    with pytest.raises(ApiError) as e:
        store["admin"].create_category("Fruits")
        store["admin"].create_category("fruits")
    assert e.value.message == "Category already exists"


def test_catalog_listing_and_upload(store, tmp_path):
    admin = store["admin"]
    resp = admin.list_products(name="app")
    assert [p["name"] for p in resp["products"]] == ["Apple"]
    assert admin.list_products(page=1, limit=1)["totalProducts"] == 2

    admin.update_product(store["milk"], {"price": 32})
    assert admin.get_product(store["milk"])["price"] == 32

    image = tmp_path / "apple.png"
    image.write_bytes(b"\x89PNG")
    url = admin.upload_image(str(image))
    assert url.startswith("/uploads/") and url.endswith("apple.png")


def test_search_against_api(store):
    async def scenario():
        search = ProductSearch(store["customer"], delay=DELAY)
        search.set_query("mil")
        await search.flush()
        return search

    search = asyncio.run(scenario())
    assert [p.name for p in search.suggestions] == ["Milk"]
    assert [p.name for p in search.results] == ["Milk"]


def test_admin_customers(store):
    admin = store["admin"]
    [asha] = admin.list_customers()
    assert asha["name"] == "Asha"

    admin.edit_customer(asha["_id"], "Asha K", asha["email"], asha["mobile"])
    assert [c["name"] for c in admin.list_customers()] == ["Asha K"]

    with pytest.raises(ValidationError):
        admin.edit_customer(asha["_id"], "Asha", "", "9999999999")
