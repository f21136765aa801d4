# cli.py - interactive FreshCart console (customers and admins)
import asyncio
import sys
from datetime import datetime
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.text import Text
from rich import box

from prompt_toolkit import PromptSession
from prompt_toolkit.application import get_app_or_none
from prompt_toolkit.completion import Completer, Completion, WordCompleter
from prompt_toolkit.patch_stdout import patch_stdout
from prompt_toolkit.styles import Style as PromptStyle

from freshcart.cart_sync import CartReconciler, Notice
from freshcart.client import StoreClient
from freshcart.config import configure_logging, get_settings
from freshcart.errors import ApiError, ValidationError
from freshcart.models import Address, CartSummary, Customer, Order, Product, merge_unique
from freshcart.notifications import NewOrderEvent, OrderFeed
from freshcart.orders import ANALYTICS_FILTERS, ORDER_STATUSES, DashboardStats, OrderPager, change_status, next_statuses
from freshcart.search import ProductSearch
from freshcart.session import TokenStore, resolve_session

console = Console()
settings = get_settings()
c = StoreClient()
tokens = TokenStore()

# Custom prompt style for prompt_toolkit
custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})
prompt_session: PromptSession = PromptSession(style=custom_style)

# products seen so far, used for names, totals and autocompletion
product_cache: List[Product] = []


# ---------------------------
# Display helpers
# ---------------------------
def money(amount: float) -> str:
    return f"₹{amount:.2f}"


def show_products(products: List[Product], title: str = "🥦 Products"):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(title=title, box=box.ROUNDED, header_style="bold cyan", title_style="bold magenta", show_lines=True)
    table.add_column("ID", style="dim", width=12)
    table.add_column("Name", style="bold", width=24)
    table.add_column("Category", width=15)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Stock", justify="right", width=8)

    for p in products:
        table.add_row(p.id[:12], p.name, p.category or "-", money(p.price), "-" if p.stock is None else str(p.stock))
    console.print(table)


def show_cart(cart: CartReconciler):
    summary = CartSummary.build(cart.cart, product_cache)

    title = Text()
    title.append("🛒 My Cart", style="bold")
    title.append(f"  [{cart.state.value}]", style="dim")

    if not cart.cart:
        console.print(Panel("Your cart is empty.", title=title, style="blue"))
        return

    table = Table(box=box.ROUNDED, header_style="bold blue", show_lines=True)
    table.add_column("Product", style="bold", width=30)
    table.add_column("Qty", justify="right", width=8)
    table.add_column("Price", justify="right", width=12)
    table.add_column("Subtotal", justify="right", width=12)

    known = {line.product.id for line in summary.lines}
    for line in summary.lines:
        table.add_row(line.product.name, str(line.quantity), money(line.product.price), money(line.line_total))
    for pid, qty in cart.cart.items():
        if pid not in known:
            table.add_row(f"[red]Unknown product: {pid[:12]}[/red]", str(qty), "-", "-")

    delivery = money(summary.delivery_fee) if summary.delivery_fee else "[green]Free[/green]"
    footer = (
        f"Items total: {money(summary.subtotal)}\n"
        f"Delivery: {delivery} [dim](Free above ₹599)[/dim]\n"
        f"Handling: {money(summary.handling_fee)}\n"
        f"[bold]Grand total: {money(summary.total)}[/bold]"
    )
    console.print(Panel(table, title=title, border_style="blue"))
    console.print(footer)


def show_addresses(addresses: List[Address]):
    if not addresses:
        console.print("[italic yellow]No saved addresses[/italic yellow]")
        return
    table = Table(title="🏠 Addresses", box=box.ROUNDED, header_style="bold green", show_lines=True)
    table.add_column("#", justify="right", width=4)
    table.add_column("Label", width=12)
    table.add_column("Address", width=50)
    for i, a in enumerate(addresses, 1):
        table.add_row(str(i), a.label, a.one_line())
    console.print(table)


def status_style(order: Order) -> str:
    if order.is_delivered:
        return "green"
    if order.is_cancelled:
        return "red"
    return "yellow"


def show_orders(orders: List[Order], title: str = "📋 Orders", admin: bool = False):
    if not orders:
        console.print("[italic yellow]No orders found[/italic yellow]")
        return

    table = Table(title=title, box=box.ROUNDED, header_style="bold yellow", title_style="bold yellow", show_lines=True)
    table.add_column("#", justify="right", width=4)
    table.add_column("Order", style="dim", width=10)
    if admin:
        table.add_column("Customer", width=16)
    table.add_column("Contents", width=36)
    table.add_column("Status", width=12)
    table.add_column("Total", justify="right", width=10)

    for i, o in enumerate(orders, 1):
        names = [f"{it.name} x{it.quantity}" for it in o.items[:3]]
        contents = ", ".join(names) if names else "No items"
        if len(o.items) > 3:
            contents += f" +{len(o.items) - 3} more"
        style = status_style(o)
        row = [str(i), o.order_id or o.id[:8]]
        if admin:
            row.append(o.customer_name)
        row += [contents, f"[{style}]{o.status}[/{style}]", money(o.total_amount)]
        table.add_row(*row)
    console.print(table)


def show_stats(stats: DashboardStats):
    grid = Table.grid(padding=(0, 3))
    for _ in range(4):
        grid.add_column()
    grid.add_row(
        f"[bold]Orders:[/bold] {stats.total_orders}",
        f"[bold]Revenue:[/bold] {money(stats.total_revenue)}",
        f"[bold yellow]New:[/bold yellow] {stats.new_orders}",
        f"[bold green]Delivered:[/bold green] {stats.by_status['Delivered']}",
    )
    grid.add_row(
        f"Processing: {stats.by_status['Processing']}",
        f"Shipped: {stats.by_status['Shipped']}",
        f"Cancelled: {stats.by_status['Cancelled']}",
        "",
    )
    console.print(Panel(grid, title="📊 Dashboard", border_style="cyan"))


def show_customers(customers: List[Customer]):
    if not customers:
        console.print("[italic yellow]No customers found[/italic yellow]")
        return
    table = Table(title="👥 Customers", box=box.ROUNDED, header_style="bold cyan", show_lines=True)
    table.add_column("#", justify="right", width=4)
    table.add_column("Name", width=20)
    table.add_column("Email", width=28)
    table.add_column("Mobile", width=14)
    table.add_column("Addresses", justify="right", width=10)
    for i, cu in enumerate(customers, 1):
        table.add_row(str(i), cu.name, cu.email, cu.mobile, str(len(cu.addresses)))
    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


def show_notice(notice: Notice):
    console.print(show_status(notice.message, notice.level != "error"))


def show_new_order(event: NewOrderEvent):
    console.print(Panel.fit(f"[bold]{event.banner()}[/bold]", title="🔔 New Order Received", border_style="magenta"))


def create_header(role: str):
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)
    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row("🥕 FreshCart", f"[bold blue]{role} console[/bold blue]", f"[dim]{now}[/dim]")
    return Panel(header, style="bold blue")


# ---------------------------
# API wrappers
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner. API and form errors are
    shown as a status panel and turn into None.
    """
    try:
        with Progress(SpinnerColumn(), TextColumn("[progress.description]{task.description}"), transient=True) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)
    except (ApiError, ValidationError) as e:
        console.print(show_status(f"Error: {e}", False))
        return None
    if success_msg and result is not None:
        console.print(show_status(success_msg, True))
    return result


async def try_api_async(coro, success_msg: Optional[str] = None):
    try:
        result = await coro
    except ApiError as e:
        console.print(show_status(f"Error: {e}", False))
        return None
    if success_msg and result is not None:
        console.print(show_status(success_msg, True))
    return result


# ---------------------------
# Input helpers
# ---------------------------
async def ask(message: str, completer=None, default: str = "") -> str:
    return (await prompt_session.prompt_async(f"{message} ", completer=completer, default=default)).strip()


async def ask_int(message: str, default: int = 1) -> int:
    while True:
        raw = await ask(message, default=str(default))
        try:
            return int(raw)
        except ValueError:
            console.print("[red]Please enter a whole number.[/red]")


async def ask_float(message: str, default: float = 0.0) -> float:
    while True:
        raw = await ask(message, default=str(default))
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


async def confirm(message: str) -> bool:
    return (await ask(f"{message} [y/N]")).lower() in ("y", "yes")


async def pick(items: List[Any], message: str) -> Optional[Any]:
    if not items:
        return None
    raw = await ask(f"{message} (1-{len(items)}, blank to cancel)")
    if not raw:
        return None
    try:
        idx = int(raw)
    except ValueError:
        idx = 0
    if not 1 <= idx <= len(items):
        console.print("[red]No such entry.[/red]")
        return None
    return items[idx - 1]


def product_completer():
    words = [p.name for p in product_cache] + [p.id for p in product_cache]
    return WordCompleter([w for w in words if w], ignore_case=True, sentence=True)


class SearchCompleter(Completer):
    """Feeds what the user types into the debounced search and offers its suggestions."""

    def __init__(self, search: ProductSearch):
        self.search = search

    def get_completions(self, document, complete_event):
        self.search.set_query(document.text)
        for p in self.search.suggestions:
            yield Completion(p.name, start_position=-len(document.text), display_meta=money(p.price))


def refresh_completions(search: ProductSearch):
    app = get_app_or_none()
    if app is not None and app.is_running:
        app.current_buffer.start_completion(select_first=False)


def remember(products: List[Product]):
    global product_cache
    product_cache = merge_unique(product_cache, products)


def resolve_product(text: str) -> Optional[Product]:
    for p in product_cache:
        if text in (p.id, p.name) or p.name.lower() == text.lower():
            return p
    return None


def parse_products(resp: Any) -> List[Product]:
    if not isinstance(resp, dict):
        return []
    return [Product.model_validate(p) for p in resp.get("products", [])]


# ---------------------------
# Auth
# ---------------------------
async def auth_menu() -> bool:
    console.print(Panel("1) Sign in   2) Sign up   q) Quit", title="🔐 Welcome", border_style="yellow"))
    choice = (await ask("Choose an option", completer=WordCompleter(["1", "2", "q"]))).lower()

    if choice == "1":
        email = await ask("Email")
        password = await prompt_session.prompt_async("Password ", is_password=True)
        token = try_api(c.sign_in, email, password, success_msg="Signed in")
        if token:
            tokens.save(token)
    elif choice == "2":
        name = await ask("Name")
        email = await ask("Email")
        mobile = await ask("Mobile")
        password = await prompt_session.prompt_async("Password ", is_password=True)
        try_api(c.sign_up, name, email, mobile, password, success_msg="Account created, please sign in")
    elif choice in ("q", "quit", "exit"):
        return False
    return True


# ---------------------------
# Customer console
# ---------------------------
async def browse_products():
    page = 1
    while True:
        resp = try_api(c.list_products, page)
        products = parse_products(resp)
        remember(products)
        show_products(products, title=f"🥦 Products (page {page})")
        total = resp.get("totalProducts", 0) if isinstance(resp, dict) else 0
        if page * settings.page_size >= total or not await confirm("Load more?"):
            return
        page += 1


async def search_products(search: ProductSearch):
    term = await ask("🔍 Search products", completer=SearchCompleter(search))
    search.set_query(term)
    await search.flush()
    remember(search.results)
    show_products(search.results, title=f"Results for '{term}'")


async def manage_addresses():
    while True:
        addresses = try_api(c.list_addresses) or []
        show_addresses(addresses)
        choice = (await ask("a) Add  e) Edit  d) Delete  b) Back", completer=WordCompleter(["a", "e", "d", "b"]))).lower()
        if choice == "a":
            await edit_address(None)
        elif choice == "e":
            addr = await pick(addresses, "Edit which address")
            if addr:
                await edit_address(addr)
        elif choice == "d":
            addr = await pick(addresses, "Delete which address")
            if addr and await confirm(f"Delete '{addr.one_line()}'?"):
                try_api(c.delete_address, addr.id, success_msg="Address deleted")
        else:
            return


async def edit_address(existing: Optional[Address]) -> Optional[Address]:
    base = existing or Address()
    addr = Address(
        label=await ask("Address Type", completer=WordCompleter(["Home", "Work", "Other place"]), default=base.label),
        street=await ask("Flat / House no / Building name", default=base.street),
        city=await ask("City", default=base.city),
        state=await ask("State", default=base.state),
        pincode=await ask("Pincode", default=base.pincode),
        country=await ask("Country", default=base.country),
        landmark=await ask("Landmark (optional)", default=base.landmark),
        location=base.location,
    )
    saved = try_api(c.save_address, addr, existing.id if existing else None, success_msg="Address saved")
    return addr if saved is not None else None


async def place_order(cart: CartReconciler):
    if not cart.cart:
        console.print("[italic yellow]Your cart is empty.[/italic yellow]")
        return
    # the order is built from the server cart, so push pending changes first
    await cart.flush()
    if not cart.in_sync:
        console.print(show_status("Cart is not saved yet, please try again.", False))
        return
    show_cart(cart)

    addresses = try_api(c.list_addresses) or []
    if not addresses:
        console.print("[yellow]Add a delivery address first.[/yellow]")
        if await edit_address(None) is None:
            return
        addresses = try_api(c.list_addresses) or []
    show_addresses(addresses)
    addr = await pick(addresses, "Deliver to")
    if addr is None:
        return

    resp = try_api(c.place_order, addr.id)
    if resp is None:
        return
    cart.clear_after_checkout()
    console.print(Panel.fit("[green]Order placed successfully![/green]\nPayment: Cash on Delivery", title="✅ Order Confirmation"))


async def order_history():
    page = 1
    orders: List[Order] = []
    while True:
        resp = try_api(c.list_orders, page)
        batch = [Order.model_validate(o) for o in resp] if isinstance(resp, list) else []
        orders += batch
        show_orders(orders, title="📋 My Orders")
        if len(batch) < settings.page_size or not await confirm("Load more?"):
            return
        page += 1


async def cart_product(cart: CartReconciler) -> Optional[str]:
    text = await ask("Product (name or ID)", completer=product_completer())
    if not text:
        return None
    p = resolve_product(text)
    if p is None and text in cart.cart:
        return text
    if p is None:
        console.print(f"[red]Unknown product '{text}'. Browse or search first.[/red]")
        return None
    return p.id


async def customer_menu() -> bool:
    cart = CartReconciler(c, delay=settings.cart_debounce, notify=show_notice)
    search = ProductSearch(c, delay=settings.search_debounce, on_update=refresh_completions)

    remember(parse_products(try_api(c.list_products)))
    await cart.load()

    try:
        while True:
            menu_table = Table.grid(padding=(0, 2))
            menu_table.add_column("Key", style="bold cyan", width=4)
            menu_table.add_column("Option", width=28)
            menu_table.add_column("Key", style="bold cyan", width=4)
            menu_table.add_column("Option", width=28)
            for row in [
                ("1", "🥦 Browse products", "6", "🗑️ Remove from cart"),
                ("2", "🔍 Search products", "7", "🏠 Addresses"),
                ("3", "🛒 View cart", "8", "✅ Place order"),
                ("4", "➕ Add / increase", "9", "📋 My orders"),
                ("5", "➖ Decrease", "s", "🚪 Sign out"),
                ("", "", "q", "👋 Quit"),
            ]:
                menu_table.add_row(*row)
            console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

            choice = (await ask("\nChoose an option", completer=WordCompleter([str(i) for i in range(1, 10)] + ["s", "q"]))).lower()

            if choice == "1":
                await browse_products()
            elif choice == "2":
                await search_products(search)
            elif choice == "3":
                show_cart(cart)
            elif choice == "4":
                pid = await cart_product(cart)
                if pid and pid in cart.cart:
                    cart.increment(pid)
                    show_cart(cart)
                elif pid:
                    cart.add(pid)
                    show_cart(cart)
            elif choice == "5":
                pid = await cart_product(cart)
                if pid:
                    cart.decrement(pid)
                    show_cart(cart)
            elif choice == "6":
                pid = await cart_product(cart)
                if pid:
                    cart.remove(pid)
                    show_cart(cart)
            elif choice == "7":
                await manage_addresses()
            elif choice == "8":
                await place_order(cart)
            elif choice == "9":
                await order_history()
            elif choice == "s":
                await cart.flush()
                tokens.clear()
                return True
            elif choice in ("q", "quit", "exit"):
                return False

            console.print()
            console.rule(style="dim")
    finally:
        await cart.flush()


# ---------------------------
# Admin console
# ---------------------------
async def orders_dashboard(pager: OrderPager):
    show_orders(pager.orders, title=f"📋 Orders ({pager.status or 'all'})", admin=True)
    show_stats(DashboardStats.from_orders(pager.orders))


async def update_status(pager: OrderPager):
    order = await pick(pager.orders, "Which order")
    if order is None:
        return
    options = next_statuses(order.status)
    if not options:
        console.print("[yellow]Delivered orders can no longer change status.[/yellow]")
        return
    status = await ask(f"New status ({', '.join(options)})", completer=WordCompleter(options, ignore_case=True))
    status = next((s for s in options if s.lower() == status.lower()), status)
    try:
        updated = try_api(change_status, c, order, status, success_msg=f"Order {order.order_id or order.id[:8]} is now {status}")
    except ValueError as e:
        console.print(show_status(str(e), False))
        return
    if updated:
        pager.replace(updated)


async def product_form(existing: Optional[Product]) -> Dict[str, Any]:
    categories = [cat["name"] for cat in (try_api(c.list_categories) or [])]
    fields: Dict[str, Any] = {
        "name": await ask("Name", default=existing.name if existing else ""),
        "category": await ask("Category", completer=WordCompleter(categories, ignore_case=True),
                              default=(existing.category or "") if existing else ""),
        "price": await ask_float("Price", default=existing.price if existing else 0.0),
        "stock": await ask_int("Stock", default=(existing.stock or 0) if existing else 0),
        "description": await ask("Description", default=(existing.description or "") if existing else ""),
    }
    image = await ask("Image file to upload (blank to skip)")
    if image:
        url = try_api(c.upload_image, image, success_msg="Image uploaded")
        if url:
            fields["image"] = url
    return fields


async def admin_products():
    products: List[Product] = []
    page = 1
    while True:
        resp = try_api(c.list_products, page)
        products = merge_unique(products, parse_products(resp))
        remember(products)
        show_products(products, title="🥦 Products")
        choice = (await ask("m) More  c) Create  e) Edit  d) Delete  b) Back",
                            completer=WordCompleter(["m", "c", "e", "d", "b"]))).lower()
        if choice == "m":
            page += 1
        elif choice == "c":
            fields = await product_form(None)
            if try_api(c.create_product, fields, success_msg="Product created"):
                products, page = [], 1
        elif choice == "e":
            p = await pick(products, "Edit which product")
            if p:
                fields = await product_form(p)
                if try_api(c.update_product, p.id, fields, success_msg="Product updated"):
                    products, page = [], 1
        elif choice == "d":
            p = await pick(products, "Delete which product")
            if p and await confirm(f"Delete '{p.name}'?"):
                if try_api(c.delete_product, p.id, success_msg="Product deleted"):
                    products = [x for x in products if x.id != p.id]
        else:
            return


async def admin_categories():
    cats = try_api(c.list_categories) or []
    console.print(Panel(", ".join(cat["name"] for cat in cats) or "No categories yet", title="🏷️ Categories"))
    name = await ask("New category (blank to go back)")
    if name:
        try_api(c.create_category, name, success_msg=f"Category '{name}' added")


async def admin_customers():
    customers = [Customer.model_validate(x) for x in (try_api(c.list_customers) or [])]
    show_customers(customers)
    cu = await pick(customers, "Edit which customer")
    if cu is None:
        return
    name = await ask("Name", default=cu.name)
    email = await ask("Email", default=cu.email)
    mobile = await ask("Mobile", default=cu.mobile)
    try_api(c.edit_customer, cu.id, name, email, mobile, success_msg="Customer updated")


async def sales_analytics():
    labels = [label for label, _ in ANALYTICS_FILTERS]
    label = await ask("Period", completer=WordCompleter(labels, ignore_case=True, sentence=True), default="Today")
    value = next((v for l, v in ANALYTICS_FILTERS if l.lower() == label.lower()), "today")
    resp = try_api(c.sales_analytics, value)
    if not resp:
        return
    table = Table(title=f"💹 Sales - {label}", box=box.ROUNDED, header_style="bold green")
    table.add_column("Date")
    table.add_column("Sales", justify="right")
    for row in resp.get("data", []):
        table.add_row(str(row.get("date", "-")), money(float(row.get("total", 0))))
    console.print(table)
    console.print(f"[bold]Total:[/bold] {money(float(resp.get('totalAmount', 0)))}")


async def admin_menu() -> bool:
    pager = OrderPager(c)

    async def on_new_order(event: NewOrderEvent):
        show_new_order(event)
        try:
            await pager.reload()
        except ApiError as e:
            console.print(show_status(f"Error: {e}", False))

    feed = OrderFeed(on_new_order)
    feed_task = asyncio.create_task(feed.run())
    try_api(pager.load_first)

    try:
        while True:
            menu_table = Table.grid(padding=(0, 2))
            menu_table.add_column("Key", style="bold cyan", width=4)
            menu_table.add_column("Option", width=28)
            menu_table.add_column("Key", style="bold cyan", width=4)
            menu_table.add_column("Option", width=28)
            for row in [
                ("1", "📋 Orders dashboard", "6", "🏷️ Categories"),
                ("2", "🔎 Filter by status", "7", "👥 Customers"),
                ("3", "⏬ Load more orders", "8", "💹 Sales analytics"),
                ("4", "🔄 Update order status", "s", "🚪 Sign out"),
                ("5", "🥦 Products", "q", "👋 Quit"),
            ]:
                menu_table.add_row(*row)
            console.print(Panel(menu_table, title="📋 Admin Menu", border_style="yellow"))

            choice = (await ask("\nChoose an option", completer=WordCompleter([str(i) for i in range(1, 9)] + ["s", "q"]))).lower()

            if choice == "1":
                try_api(pager.load_first)
                await orders_dashboard(pager)
            elif choice == "2":
                status = await ask("Status (blank for all)", completer=WordCompleter(list(ORDER_STATUSES), ignore_case=True))
                pager.status = next((s for s in ORDER_STATUSES if s.lower() == status.lower()), None)
                try_api(pager.load_first)
                await orders_dashboard(pager)
            elif choice == "3":
                if pager.has_more:
                    try_api(pager.load_more)
                await orders_dashboard(pager)
            elif choice == "4":
                show_orders(pager.orders, admin=True)
                await update_status(pager)
            elif choice == "5":
                await admin_products()
            elif choice == "6":
                await admin_categories()
            elif choice == "7":
                await admin_customers()
            elif choice == "8":
                await sales_analytics()
            elif choice == "s":
                tokens.clear()
                return True
            elif choice in ("q", "quit", "exit"):
                return False

            console.print()
            console.rule(style="dim")
    finally:
        await feed.stop()
        feed_task.cancel()
        try:
            await feed_task
        except asyncio.CancelledError:
            pass
        except Exception as e:
            console.print(show_status(f"Order feed stopped: {e}", False))


# ---------------------------
# Main loop
# ---------------------------
async def main():
    configure_logging()
    with patch_stdout():
        running = True
        while running:
            user = resolve_session()
            if user is None:
                running = await auth_menu()
                continue
            role = "Admin" if user.is_admin else "Customer"
            console.clear()
            console.print(create_header(role))
            running = await (admin_menu() if user.is_admin else customer_menu())

    console.print(Panel.fit("[bold green]Thank you for shopping with FreshCart! 👋[/bold green]", title="Goodbye"))


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, EOFError):
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
