import os
import time
from typing import Dict, Any, List, Optional

from jose import jwt, JWTError

# This file holds all the in-memory data stores and token helpers.

USERS: Dict[str, Dict[str, Any]] = {}
PRODUCTS: Dict[str, Dict[str, Any]] = {}
CATEGORIES: List[Dict[str, Any]] = []
CARTS: Dict[str, Dict[str, int]] = {}
ORDERS: Dict[str, Dict[str, Any]] = {}
UPLOADS: Dict[str, bytes] = {}

SECRET_KEY = os.environ.get("STUB_SECRET_KEY", "freshcart-stub-secret")
ALGORITHM = "HS256"
TOKEN_TTL_SECONDS = 7 * 24 * 3600

def create_token(user: Dict[str, Any], ttl: int = TOKEN_TTL_SECONDS) -> str:
    payload = {"id": user["_id"], "userType": user["userType"], "exp": int(time.time()) + ttl}
    return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)

def user_from_token(token: str) -> Optional[Dict[str, Any]]:
    try:
        claims = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
    return USERS.get(str(claims.get("id")))

def clear_all():
    USERS.clear()
    PRODUCTS.clear()
    CATEGORIES.clear()
    CARTS.clear()
    ORDERS.clear()
    UPLOADS.clear()
