# freshcart/cart_sync.py
"""
Cart reconciliation.

The local cart (product id -> quantity) is the source of truth. A snapshot
holds what we last know the server has; after a quiet period the difference
between the two is replayed as add / update / remove calls.

    idle -> debouncing -> reconciling -> idle

Passes are serialized: a timer firing while a pass is in flight waits for
it and then diffs against whatever the cart looks like at that moment.
"""
import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Dict, List, Optional, Set

from .errors import ApiError
from .models import cart_from_lines
from .session import UserSession

logger = logging.getLogger(__name__)

NOT_FOUND_NOTICE = "Product not found in cart. Please refresh and try again."
FAILURE_NOTICE = "Failed to update cart. Please try again."


class SyncState(str, Enum):
    IDLE = "idle"
    DEBOUNCING = "debouncing"
    RECONCILING = "reconciling"


@dataclass(frozen=True)
class Notice:
    level: str
    message: str


@dataclass(frozen=True)
class CartCall:
    action: str  # "add" | "update" | "remove"
    product_id: str
    quantity: int = 0


class Debouncer:
    """Collapse bursts of trigger() calls into one callback after `delay` seconds."""

    def __init__(self, delay: float, callback: Callable[[], Awaitable[None]]):
        self.delay = delay
        self.callback = callback
        self._handle: Optional[asyncio.TimerHandle] = None
        self._tasks: Set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self):
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire)

    def cancel(self):
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self):
        self._handle = None
        task = asyncio.ensure_future(self.callback())
        self._tasks.add(task)
        task.add_done_callback(self._finished)

    def _finished(self, task: asyncio.Task):
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("debounced callback failed", exc_info=task.exception())

    async def drain(self):
        """Wait for callbacks that already fired."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)


def plan_calls(snapshot: Dict[str, int], target: Dict[str, int]) -> List[CartCall]:
    calls: List[CartCall] = []
    # snapshot ids first, then ids only the cart has; first-seen order
    for pid in dict.fromkeys([*snapshot, *target]):
        prev = snapshot.get(pid, 0)
        curr = target.get(pid, 0)
        if curr <= 0 and prev > 0:
            calls.append(CartCall("remove", pid))
        elif prev <= 0 and curr > 0:
            calls.append(CartCall("add", pid, curr))
        elif prev > 0 and curr > 0 and prev != curr:
            calls.append(CartCall("update", pid, curr))
    return calls


class CartReconciler:
    def __init__(self, client, delay: float = 0.5, notify: Optional[Callable[[Notice], None]] = None):
        self.client = client
        self.cart: Dict[str, int] = {}
        self.snapshot: Dict[str, int] = {}
        self.notify = notify or (lambda notice: None)
        self._debouncer = Debouncer(delay, self.reconcile)
        self._lock = asyncio.Lock()

    @property
    def state(self) -> SyncState:
        if self._lock.locked():
            return SyncState.RECONCILING
        if self._debouncer.pending:
            return SyncState.DEBOUNCING
        return SyncState.IDLE

    @property
    def in_sync(self) -> bool:
        return self.cart == self.snapshot

    # ---------------------------
    # Local mutations
    # ---------------------------
    def add(self, product_id: str):
        self.cart[product_id] = 1
        self._changed()

    def increment(self, product_id: str):
        self.cart[product_id] = self.cart.get(product_id, 0) + 1
        self._changed()

    def decrement(self, product_id: str):
        self.set_quantity(product_id, self.cart.get(product_id, 0) - 1)

    def remove(self, product_id: str):
        self.set_quantity(product_id, 0)

    def set_quantity(self, product_id: str, quantity: int):
        if quantity <= 0:
            self.cart.pop(product_id, None)
        else:
            self.cart[product_id] = quantity
        self._changed()

    def _changed(self):
        self._debouncer.trigger()

    # ---------------------------
    # Server side
    # ---------------------------
    async def load(self, user: Optional[UserSession] = None) -> bool:
        """Replace cart and snapshot with the server's cart."""
        try:
            items = await self.client.fetch_cart(user=user)
        except ApiError as e:
            logger.warning("could not load cart: %s", e)
            return False
        if items is None:
            return False
        cart = cart_from_lines(items)
        self.cart = dict(cart)
        self.snapshot = dict(cart)
        return True

    async def flush(self):
        self._debouncer.cancel()
        await self._debouncer.drain()
        await self.reconcile()

    def clear_after_checkout(self):
        # the server empties its own cart once the order is placed
        self._debouncer.cancel()
        self.cart = {}
        self.snapshot = {}

    async def reconcile(self):
        async with self._lock:
            await self._run_pass()

    async def _run_pass(self):
        target = dict(self.cart)
        calls = plan_calls(self.snapshot, target)
        if not calls:
            return
        user = self.client.current_session()
        if user is None:
            logger.debug("no session, cart pass skipped")
            return
        logger.debug("reconciling %d cart change(s)", len(calls))

        conflict = False
        for call in calls:
            try:
                if call.action == "remove":
                    await self.client.remove_cart_item(call.product_id, user=user)
                elif call.action == "add":
                    await self.client.add_cart_item(call.product_id, call.quantity, user=user)
                else:
                    await self.client.update_cart_item(call.product_id, call.quantity, user=user)
            except ApiError as e:
                if e.is_not_found:
                    logger.warning("cart %s %s: %s", call.action, call.product_id, e)
                    self.notify(Notice("error", NOT_FOUND_NOTICE))
                    conflict = True
                else:
                    logger.warning("cart %s %s failed: %s", call.action, call.product_id, e)
                    self.notify(Notice("error", FAILURE_NOTICE))
                continue

            if call.action == "remove":
                self.snapshot.pop(call.product_id, None)
            else:
                self.snapshot[call.product_id] = call.quantity

        if conflict:
            await self.load(user)
