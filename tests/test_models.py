# tests/test_models.py
import pytest

from freshcart.errors import ApiError, ValidationError
from freshcart.models import (
    Address, CartSummary, Order, Product, canonical_product_id, cart_from_lines, merge_unique
)


def test_product_ids_collapse_to_plain_strings():
    assert canonical_product_id("abc") == "abc"
    assert canonical_product_id(12) == "12"
    assert canonical_product_id({"_id": "abc", "name": "Apple"}) == "abc"
    assert canonical_product_id({"id": "xyz"}) == "xyz"
    assert canonical_product_id({"name": "no id"}) is None
    assert canonical_product_id(None) is None
    assert canonical_product_id(["abc"]) is None


def test_cart_from_mixed_lines():
    items = [
        {"productId": "p1", "quantity": 2},
        {"productId": {"_id": "p2", "name": "Milk"}, "quantity": 1},
        {"productId": "p3", "quantity": 0},
        {"productId": None, "quantity": 4},
        {"productId": "p4", "quantity": "x"},
    ]
    assert cart_from_lines(items) == {"p1": 2, "p2": 1}


def test_merge_unique_keeps_first_copy():
    a = Product(_id="1", name="Apple", price=10)
    b = Product(_id="2", name="Bread", price=20)
    merged = merge_unique([a], [Product(_id="1", name="Apple v2"), b])
    assert [p.name for p in merged] == ["Apple", "Bread"]


def test_address_requires_fields_in_form_order():
    with pytest.raises(ValidationError) as e:
        Address(street="", city="", state="", pincode="").validate_required()
    assert str(e.value) == "Flat / House no / Building name is required."

    with pytest.raises(ValidationError) as e:
        Address(street="12 MG Road", city="Jodhpur", state="Rajasthan", pincode="  ").validate_required()
    assert e.value.label == "Pincode"

    addr = Address(street="12 MG Road", city="Jodhpur", state="Rajasthan", pincode="342001").validate_required()
    assert addr.one_line() == "12 MG Road, Jodhpur, Rajasthan, 342001, India"
    assert addr.location.lat == 26.2389


def test_order_status_helpers():
    order = Order.model_validate({
        "_id": "o1", "orderId": "A1", "status": "Delivered",
        "userId": {"_id": "u1", "name": "Asha"},
        "items": [{"productId": {"_id": "p1", "name": "Apple"}, "quantity": 2, "price": 10},
                  {"productId": "p2abcdefgh", "quantity": 1, "price": 5}],
        "totalAmount": 25,
    })
    assert order.is_delivered and not order.is_cancelled
    assert order.customer_name == "Asha"
    assert [i.name for i in order.items] == ["Apple", "Product p2abcdef"]
    assert order.item_count == 3
    assert Order.model_validate({"_id": "o2", "status": "Arrived"}).is_delivered
    assert Order.model_validate({"_id": "o3", "status": "Cancelled", "userId": "u9"}).customer_name == "u9"


def test_cart_summary_fees():
    catalog = [Product(_id="a", name="Apple", price=100), Product(_id="b", name="Basmati", price=500)]

    small = CartSummary.build({"a": 2, "unknown": 3}, catalog)
    assert small.subtotal == 200
    assert small.delivery_fee == 20
    assert small.total == 224

    big = CartSummary.build({"a": 1, "b": 1}, catalog)
    assert big.delivery_fee == 0
    assert big.total == 604

    empty = CartSummary.build({}, catalog)
    assert empty.total == 0


def test_api_error_messages():
    assert ApiError.from_payload(400, {"message": "Cart is empty"}).message == "Cart is empty"
    assert ApiError.from_payload(404, {"detail": "nope"}).is_not_found
    assert ApiError.from_payload(500, None).message == "Something went wrong"
    assert ApiError("Product not found in cart", 400).is_not_found
    assert not ApiError("boom", 500).is_not_found
