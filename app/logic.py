import math
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any, List

from fastapi import HTTPException

from freshcart.models import DELIVERY_FEE, FREE_DELIVERY_THRESHOLD, HANDLING_FEE
from freshcart.orders import ORDER_STATUSES

from .core import (
    SignUpIn, SignInIn, ProductIn, ProductUpdateIn, CartItemIn,
    AddressIn, CustomerEditIn, OrderIn, _make_product_dict
)
from .database import (
    USERS, PRODUCTS, CATEGORIES, CARTS, ORDERS, UPLOADS,
    create_token, clear_all
)

# This file contains the core logic for all stub API endpoints.

def _now() -> datetime:
    return datetime.now(timezone.utc)

def _page(items: List[Any], page: int, limit: int) -> List[Any]:
    page = max(page, 1)
    limit = max(limit, 1)
    start = (page - 1) * limit
    return items[start:start + limit]

def _public_user(u: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in u.items() if k != "password"}

# Auth
async def signup_logic(payload: SignUpIn):
    if any(u["email"] == payload.email for u in USERS.values()):
        raise HTTPException(status_code=400, detail="User already exists")
    uid = uuid.uuid4().hex
    USERS[uid] = {
        "_id": uid,
        "name": payload.name,
        "email": payload.email,
        "mobile": payload.mobile,
        "password": payload.password,
        "userType": payload.userType,
        "addresses": [],
    }
    return {"message": "User registered successfully"}

async def signin_logic(payload: SignInIn):
    for u in USERS.values():
        if u["email"] == payload.email and u["password"] == payload.password:
            return {"message": "Login successful", "token": create_token(u)}
    raise HTTPException(status_code=401, detail="Invalid email or password")

# Products
async def list_products_logic(page: int, limit: int, name: Optional[str]):
    out = list(PRODUCTS.values())
    if name:
        term = name.lower()
        out = [p for p in out if term in p["name"].lower()]
    return {"products": _page(out, page, limit), "totalProducts": len(out)}

async def get_product_logic(product_id: str):
    p = PRODUCTS.get(product_id)
    if not p:
        raise HTTPException(status_code=404, detail="Product not found")
    return p

async def create_product_logic(payload: ProductIn):
    pid = uuid.uuid4().hex
    PRODUCTS[pid] = _make_product_dict(pid, payload)
    return PRODUCTS[pid]

async def update_product_logic(product_id: str, payload: ProductUpdateIn):
    p = await get_product_logic(product_id)
    p.update(payload.model_dump(exclude_none=True))
    return p

async def delete_product_logic(product_id: str):
    await get_product_logic(product_id)
    del PRODUCTS[product_id]
    for cart in CARTS.values():
        cart.pop(product_id, None)
    return {"message": "Product deleted"}

async def list_categories_logic():
    return CATEGORIES

async def create_category_logic(name: str):
    if any(c["name"].lower() == name.lower() for c in CATEGORIES):
        raise HTTPException(status_code=400, detail="Category already exists")
    cat = {"_id": uuid.uuid4().hex, "name": name}
    CATEGORIES.append(cat)
    return cat

async def upload_image_logic(filename: str, content: bytes):
    key = f"{uuid.uuid4().hex}_{filename}"
    UPLOADS[key] = content
    return {"url": f"/uploads/{key}"}

# Cart endpoints
async def view_cart_logic(user: Dict[str, Any]):
    cart = CARTS.get(user["_id"], {})
    items = []
    for pid, qty in cart.items():
        prod = PRODUCTS.get(pid)
        # expanded when we still know the product, bare id otherwise
        items.append({"productId": prod if prod else pid, "quantity": qty})
    return {"items": items}

async def cart_add_logic(user: Dict[str, Any], payload: CartItemIn):
    if payload.quantity <= 0:
        raise HTTPException(status_code=400, detail="quantity must be > 0")
    if payload.productId not in PRODUCTS:
        raise HTTPException(status_code=404, detail="Product not found")
    cart = CARTS.setdefault(user["_id"], {})
    cart[payload.productId] = cart.get(payload.productId, 0) + payload.quantity
    return await view_cart_logic(user)

async def cart_update_logic(user: Dict[str, Any], payload: CartItemIn):
    if payload.quantity <= 0:
        raise HTTPException(status_code=400, detail="quantity must be > 0")
    cart = CARTS.setdefault(user["_id"], {})
    if payload.productId not in cart:
        raise HTTPException(status_code=404, detail="Product not found in cart")
    cart[payload.productId] = payload.quantity
    return await view_cart_logic(user)

async def cart_remove_logic(user: Dict[str, Any], product_id: str):
    cart = CARTS.setdefault(user["_id"], {})
    if product_id not in cart:
        raise HTTPException(status_code=404, detail="Product not found in cart")
    del cart[product_id]
    return await view_cart_logic(user)

# Customers / addresses
def _customer(customer_id: str) -> Dict[str, Any]:
    u = USERS.get(customer_id)
    if not u:
        raise HTTPException(status_code=404, detail="Customer not found")
    return u

def _own(user: Dict[str, Any], customer_id: str) -> Dict[str, Any]:
    if user["_id"] != customer_id and user["userType"] != "admin":
        raise HTTPException(status_code=403, detail="Forbidden")
    return _customer(customer_id)

async def get_customer_logic(user: Dict[str, Any], customer_id: str):
    return _public_user(_own(user, customer_id))

async def list_customers_logic():
    return [_public_user(u) for u in USERS.values() if u["userType"] != "admin"]

async def edit_customer_logic(customer_id: str, payload: CustomerEditIn):
    u = _customer(customer_id)
    u.update(payload.model_dump())
    return _public_user(u)

async def add_address_logic(user: Dict[str, Any], customer_id: str, payload: AddressIn):
    u = _own(user, customer_id)
    addr = {"_id": uuid.uuid4().hex, **payload.model_dump()}
    u["addresses"].append(addr)
    return addr

def _find_address(u: Dict[str, Any], address_id: str) -> Dict[str, Any]:
    for a in u["addresses"]:
        if a["_id"] == address_id:
            return a
    raise HTTPException(status_code=404, detail="Address not found")

async def update_address_logic(user: Dict[str, Any], customer_id: str, address_id: str, payload: AddressIn):
    addr = _find_address(_own(user, customer_id), address_id)
    addr.update(payload.model_dump())
    return addr

async def delete_address_logic(user: Dict[str, Any], customer_id: str, address_id: str):
    u = _own(user, customer_id)
    addr = _find_address(u, address_id)
    u["addresses"].remove(addr)
    return {"message": "Address deleted"}

# Orders
def _address_line(a: Dict[str, Any]) -> str:
    parts = [a.get("street"), a.get("city"), a.get("state"), a.get("pincode"), a.get("country")]
    return ", ".join(p for p in parts if p)

async def place_order_logic(user: Dict[str, Any], payload: OrderIn):
    cart = CARTS.get(user["_id"], {})
    if not cart:
        raise HTTPException(status_code=400, detail="Cart is empty")
    addr = _find_address(user, payload.addressId)

    items = []
    subtotal = 0.0
    for pid, qty in cart.items():
        prod = PRODUCTS.get(pid)
        if not prod:
            raise HTTPException(status_code=404, detail=f"Product not found: {pid}")
        if prod["stock"] < qty:
            raise HTTPException(status_code=409, detail=f"Insufficient stock for {prod['name']}")
        subtotal += prod["price"] * qty
        items.append({"productId": pid, "productName": prod["name"], "quantity": qty, "price": prod["price"]})

    for it in items:
        PRODUCTS[it["productId"]]["stock"] -= it["quantity"]

    delivery = DELIVERY_FEE if subtotal < FREE_DELIVERY_THRESHOLD else 0
    oid = uuid.uuid4().hex
    order = {
        "_id": oid,
        "orderId": oid[:8].upper(),
        "userId": user["_id"],
        "status": "Pending",
        "items": items,
        "totalAmount": subtotal + delivery + HANDLING_FEE,
        "address": _address_line(addr),
        "paymentMode": payload.paymentMode,
        "createdAt": _now().isoformat(),
        "deliveryCharge": delivery,
        "handlingCharge": HANDLING_FEE,
    }
    ORDERS[oid] = order
    CARTS[user["_id"]] = {}
    return {"message": "Order placed successfully", "order": order}

def _newest_first(orders) -> List[Dict[str, Any]]:
    return sorted(orders, key=lambda o: o["createdAt"], reverse=True)

async def list_orders_logic(user: Dict[str, Any], page: int, limit: int):
    mine = [o for o in ORDERS.values() if o["userId"] == user["_id"]]
    return _page(_newest_first(mine), page, limit)

async def list_all_orders_logic(page: int, limit: int, status: Optional[str]):
    out = _newest_first(ORDERS.values())
    if status:
        out = [o for o in out if o["status"] == status]
    total_pages = math.ceil(len(out) / max(limit, 1))
    orders = []
    for o in _page(out, page, limit):
        u = USERS.get(o["userId"])
        expanded = {k: u[k] for k in ("_id", "name", "email", "mobile")} if u else o["userId"]
        orders.append({**o, "userId": expanded})
    return {"orders": orders, "totalPages": total_pages}

async def update_order_status_logic(order_id: str, status: str):
    if status not in ORDER_STATUSES:
        raise HTTPException(status_code=400, detail="Invalid status")
    o = ORDERS.get(order_id)
    if not o:
        raise HTTPException(status_code=404, detail="Order not found")
    o["status"] = status
    return o

# Analytics
def _analytics_range(filter: str, now: datetime):
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    week = today - timedelta(days=today.weekday())
    month = today.replace(day=1)
    year = today.replace(month=1, day=1)
    ranges = {
        "today": (today, now),
        "yesterday": (today - timedelta(days=1), today),
        "week": (week, now),
        "last week": (week - timedelta(days=7), week),
        "month": (month, now),
        "last month": ((month - timedelta(days=1)).replace(day=1), month),
        "year": (year, now),
        "last year": (year.replace(year=year.year - 1), year),
    }
    if filter not in ranges:
        raise HTTPException(status_code=400, detail="Invalid filter")
    return ranges[filter]

async def sales_analytics_logic(filter: str):
    start, end = _analytics_range(filter, _now())
    per_day: Dict[str, float] = {}
    for o in ORDERS.values():
        if o["status"] == "Cancelled":
            continue
        created = datetime.fromisoformat(o["createdAt"])
        if start <= created <= end:
            day = created.date().isoformat()
            per_day[day] = per_day.get(day, 0) + o["totalAmount"]
    data = [{"date": d, "total": t} for d, t in sorted(per_day.items())]
    return {"data": data, "totalAmount": sum(per_day.values())}

# Utility: reset (for tests/demo)
async def reset_all_logic():
    clear_all()
    return {"status": "reset"}
