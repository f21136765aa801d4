# freshcart/orders.py
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from .models import Order

logger = logging.getLogger(__name__)

ORDER_STATUSES: Tuple[str, ...] = ("Pending", "Processing", "Shipped", "Delivered", "Cancelled")
FINAL_STATUS = "Delivered"

ANALYTICS_FILTERS: Tuple[Tuple[str, str], ...] = (
    ("Today", "today"),
    ("Yesterday", "yesterday"),
    ("This Week", "week"),
    ("Last Week", "last week"),
    ("This Month", "month"),
    ("Last Month", "last month"),
    ("This Year", "year"),
    ("Last Year", "last year"),
)


def next_statuses(current: str) -> List[str]:
    if current == FINAL_STATUS:
        return []
    return [s for s in ORDER_STATUSES if s != current]


def change_status(client, order: Order, new_status: str) -> Optional[Order]:
    if new_status not in ORDER_STATUSES:
        raise ValueError(f"unknown order status: {new_status}")
    if new_status == order.status:
        return order
    if new_status not in next_statuses(order.status):
        raise ValueError(f"order {order.order_id or order.id} is {order.status} and cannot become {new_status}")

    resp = client.update_order_status(order.id, new_status)
    if resp is None:
        return None
    logger.info("order %s: %s -> %s", order.order_id or order.id, order.status, new_status)
    return order.model_copy(update={"status": new_status})


@dataclass
class DashboardStats:
    total_orders: int = 0
    total_revenue: float = 0
    by_status: Dict[str, int] = field(default_factory=lambda: {s: 0 for s in ORDER_STATUSES})

    @property
    def new_orders(self) -> int:
        return self.by_status.get("Pending", 0)

    @classmethod
    def from_orders(cls, orders: Iterable[Order]) -> "DashboardStats":
        stats = cls()
        for o in orders:
            stats.total_orders += 1
            stats.total_revenue += o.total_amount
            if o.status in stats.by_status:
                stats.by_status[o.status] += 1
        return stats


class OrderPager:
    """Admin order list, loaded one page at a time."""

    def __init__(self, client, status: Optional[str] = None, limit: Optional[int] = None):
        self.client = client
        self.status = status
        self.limit = limit
        self.orders: List[Order] = []
        self.page = 0
        self.total_pages = 1

    @property
    def has_more(self) -> bool:
        return self.page < self.total_pages

    def load_first(self) -> List[Order]:
        self.orders = []
        self.page = 0
        self.total_pages = 1
        return self.load_more()

    async def reload(self) -> List[Order]:
        """load_first on a worker thread so the event loop keeps running."""
        return await asyncio.to_thread(self.load_first)

    def load_more(self) -> List[Order]:
        if not self.has_more:
            return self.orders
        resp = self.client.list_all_orders(page=self.page + 1, limit=self.limit, status=self.status)
        if resp is None:
            return self.orders
        self.orders.extend(Order.model_validate(o) for o in resp.get("orders", []))
        self.total_pages = int(resp.get("totalPages", 0) or 0)
        self.page += 1
        return self.orders

    def replace(self, order: Order):
        self.orders = [order if o.id == order.id else o for o in self.orders]
