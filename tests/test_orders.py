# tests/test_orders.py
import asyncio
import time

import pytest

from freshcart.models import Order
from freshcart.orders import DashboardStats, OrderPager, change_status, next_statuses

from conftest import fill_cart, home_address


def order(oid, status="Pending", total=100):
    return Order.model_validate({"_id": oid, "orderId": oid.upper(), "status": status, "totalAmount": total})


def place_orders(client, product_id, n):
    client.save_address(home_address())
    [address] = client.list_addresses()
    for _ in range(n):
        fill_cart(client, {product_id: 1})
        client.place_order(address.id)


def test_delivered_orders_are_final():
    assert next_statuses("Delivered") == []
    assert next_statuses("Pending") == ["Processing", "Shipped", "Delivered", "Cancelled"]


def test_change_status_rules():
    class Recorder:
        def __init__(self):
            self.calls = []

        def update_order_status(self, oid, status):
            self.calls.append((oid, status))
            return {"_id": oid, "status": status}

    api = Recorder()
    shipped = change_status(api, order("o1"), "Shipped")
    assert shipped.status == "Shipped"
    assert api.calls == [("o1", "Shipped")]

    same = order("o2", "Processing")
    assert change_status(api, same, "Processing") is same
    with pytest.raises(ValueError):
        change_status(api, order("o3", "Delivered"), "Cancelled")
    with pytest.raises(ValueError):
        change_status(api, order("o4"), "Lost")
    assert len(api.calls) == 1


def test_dashboard_stats():
    stats = DashboardStats.from_orders([
        order("a", "Pending", 100), order("b", "Pending", 50), order("c", "Delivered", 25),
    ])
    assert stats.total_orders == 3
    assert stats.total_revenue == 175
    assert stats.new_orders == 2
    assert stats.by_status["Delivered"] == 1
    assert stats.by_status["Cancelled"] == 0


def test_pager_walks_all_pages(store):
    place_orders(store["customer"], store["milk"], 3)

    pager = OrderPager(store["admin"], limit=2)
    assert len(pager.load_first()) == 2
    assert pager.has_more
    assert len(pager.load_more()) == 3
    assert not pager.has_more
    assert pager.load_more() == pager.orders
    assert all(o.customer_name == "Asha" for o in pager.orders)


def test_status_change_against_api(store):
    admin = store["admin"]
    place_orders(store["customer"], store["apple"], 1)

    pager = OrderPager(admin)
    [placed] = pager.load_first()
    updated = change_status(admin, placed, "Delivered")
    pager.replace(updated)
    assert [o.status for o in pager.orders] == ["Delivered"]

    assert [o.id for o in OrderPager(admin, status="Delivered").load_first()] == [placed.id]
    assert OrderPager(admin, status="Pending").load_first() == []

    sales = admin.sales_analytics("today")
    assert sales["totalAmount"] == 120 + 20 + 4
    assert len(sales["data"]) == 1


def test_reload_keeps_the_event_loop_running():
    class SlowAdminApi:
        def list_all_orders(self, page, limit, status):
            time.sleep(0.1)  # a blocking requests call
            return {"orders": [{"_id": "o1", "status": "Pending", "totalAmount": 50}], "totalPages": 1}

    async def scenario():
        ticks = 0

        async def heartbeat():
            nonlocal ticks
            while True:
                ticks += 1
                await asyncio.sleep(0.005)

        beat = asyncio.ensure_future(heartbeat())
        orders = await OrderPager(SlowAdminApi()).reload()
        beat.cancel()
        return orders, ticks

    orders, ticks = asyncio.run(scenario())
    assert [o.id for o in orders] == ["o1"]
    assert ticks >= 5
