# freshcart/client.py
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import httpx
import requests

from .config import get_settings
from .errors import ApiError
from .models import Address, Customer
from .session import UserSession, resolve_session

logger = logging.getLogger(__name__)

SessionProvider = Callable[[], Optional[UserSession]]


class StoreClient:
    """
    Thin wrapper over the storefront REST API.

    Every authenticated call resolves the current user first and quietly
    returns None when nobody is signed in.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        session: Optional[requests.Session] = None,
        session_provider: SessionProvider = resolve_session,
        async_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout or settings.timeout
        self.session = session or requests.Session()
        self.session_provider = session_provider
        self.async_transport = async_transport

    # ---------------------------
    # Plumbing
    # ---------------------------
    def current_session(self) -> Optional[UserSession]:
        return self.session_provider()

    def _auth(self) -> Optional[UserSession]:
        user = self.current_session()
        if user is None:
            logger.debug("no active session, skipping call")
        return user

    @staticmethod
    def _headers(user: Optional[UserSession]) -> Dict[str, str]:
        return {"Authorization": f"Bearer {user.token}"} if user else {}

    @staticmethod
    def _decode(r) -> Any:
        try:
            data = r.json()
        except ValueError:
            data = None
        if r.status_code >= 400:
            raise ApiError.from_payload(r.status_code, data)
        return data

    def _request(self, method: str, endpoint: str, user: Optional[UserSession] = None, **kwargs) -> Any:
        try:
            r = self.session.request(
                method, f"{self.base_url}{endpoint}", headers=self._headers(user), timeout=self.timeout, **kwargs
            )
        except requests.RequestException as e:
            raise ApiError(str(e) or "An unexpected error occurred") from e
        return self._decode(r)

    async def _arequest(self, method: str, endpoint: str, user: UserSession, **kwargs) -> Any:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.async_transport) as client:
                r = await client.request(method, f"{self.base_url}{endpoint}", headers=self._headers(user), **kwargs)
        except httpx.HTTPError as e:
            raise ApiError(str(e) or "An unexpected error occurred") from e
        return self._decode(r)

    # ---------------------------
    # Auth (no session needed)
    # ---------------------------
    def sign_in(self, email: str, password: str) -> str:
        data = self._request("POST", "/api/auth/signin", json={"email": email, "password": password})
        return data["token"]

    def sign_up(self, name: str, email: str, mobile: str, password: str, user_type: str = "user"):
        payload = {"name": name, "email": email, "mobile": mobile, "password": password, "userType": user_type}
        return self._request("POST", "/api/auth/signup", json=payload)

    # ---------------------------
    # Catalog
    # ---------------------------
    def list_products(self, page: int = 1, limit: Optional[int] = None, name: Optional[str] = None):
        user = self._auth()
        if user is None:
            return None
        params: Dict[str, Any] = {"page": page, "limit": limit or get_settings().page_size}
        if name:
            params["name"] = name
        return self._request("GET", "/api/products", user, params=params)

    def get_product(self, product_id: str):
        user = self._auth()
        if user is None:
            return None
        return self._request("GET", f"/api/products/{product_id}", user)

    def create_product(self, fields: Dict[str, Any]):
        user = self._auth()
        if user is None:
            return None
        return self._request("POST", "/api/create-product", user, json=fields)

    def update_product(self, product_id: str, fields: Dict[str, Any]):
        user = self._auth()
        if user is None:
            return None
        return self._request("PUT", f"/api/products/{product_id}", user, json=fields)

    def delete_product(self, product_id: str):
        user = self._auth()
        if user is None:
            return None
        return self._request("DELETE", f"/api/products/{product_id}", user)

    def list_categories(self):
        user = self._auth()
        if user is None:
            return None
        return self._request("GET", "/api/categories", user)

    def create_category(self, name: str):
        user = self._auth()
        if user is None:
            return None
        return self._request("POST", "/api/categories", user, json={"name": name})

    def upload_image(self, path: str) -> Optional[str]:
        user = self._auth()
        if user is None:
            return None
        p = Path(path)
        with p.open("rb") as fh:
            data = self._request("POST", "/api/upload-image", user, files={"image": (p.name, fh)})
        return data["url"]

    async def search_products(self, name: str, limit: int):
        user = self._auth()
        if user is None:
            return None
        return await self._arequest("GET", "/api/products", user, params={"name": name, "limit": limit})

    # ---------------------------
    # Cart (remote store behind the reconciler)
    # ---------------------------
    # A reconciliation pass hands in the session it resolved once at its start.
    async def fetch_cart(self, user: Optional[UserSession] = None) -> Optional[List[Dict[str, Any]]]:
        user = user or self._auth()
        if user is None:
            return None
        data = await self._arequest("GET", "/api/cart", user)
        if isinstance(data, dict):
            return data.get("items") or []
        return data or []

    async def add_cart_item(self, product_id: str, quantity: int, user: Optional[UserSession] = None):
        user = user or self._auth()
        if user is None:
            return None
        return await self._arequest("POST", "/api/cart/add", user, json={"productId": product_id, "quantity": quantity})

    async def update_cart_item(self, product_id: str, quantity: int, user: Optional[UserSession] = None):
        user = user or self._auth()
        if user is None:
            return None
        return await self._arequest("PUT", "/api/cart/update", user, json={"productId": product_id, "quantity": quantity})

    async def remove_cart_item(self, product_id: str, user: Optional[UserSession] = None):
        user = user or self._auth()
        if user is None:
            return None
        return await self._arequest("DELETE", f"/api/cart/{product_id}", user)

    # ---------------------------
    # Customer profile / addresses
    # ---------------------------
    def get_customer(self) -> Optional[Customer]:
        user = self._auth()
        if user is None:
            return None
        data = self._request("GET", f"/api/get-customer/{user.user_id}", user)
        return Customer.model_validate(data)

    def list_addresses(self) -> List[Address]:
        customer = self.get_customer()
        return customer.addresses if customer else []

    def save_address(self, address: Address, address_id: Optional[str] = None):
        address.validate_required()
        user = self._auth()
        if user is None:
            return None
        base = f"/api/customers/{user.user_id}/addresses"
        if address_id:
            return self._request("PUT", f"{base}/{address_id}", user, json=address.to_payload())
        return self._request("POST", base, user, json=address.to_payload())

    def delete_address(self, address_id: str):
        user = self._auth()
        if user is None:
            return None
        return self._request("DELETE", f"/api/customers/{user.user_id}/addresses/{address_id}", user)

    # ---------------------------
    # Orders
    # ---------------------------
    def place_order(self, address_id: str, payment_mode: str = "Cash on Delivery"):
        user = self._auth()
        if user is None:
            return None
        return self._request("POST", "/api/orders", user, json={"addressId": address_id, "paymentMode": payment_mode})

    def list_orders(self, page: int = 1, limit: Optional[int] = None):
        user = self._auth()
        if user is None:
            return None
        params = {"page": page, "limit": limit or get_settings().page_size}
        return self._request("GET", "/api/orders", user, params=params)

    # ---------------------------
    # Admin
    # ---------------------------
    def list_customers(self):
        user = self._auth()
        if user is None:
            return None
        return self._request("GET", "/api/customers", user)

    def edit_customer(self, customer_id: str, name: str, email: str, mobile: str):
        Customer(_id=customer_id, name=name, email=email, mobile=mobile).validate_required()
        user = self._auth()
        if user is None:
            return None
        payload = {"name": name, "email": email, "mobile": mobile}
        return self._request("PUT", f"/api/customers/edit/{customer_id}", user, json=payload)

    def list_all_orders(self, page: int = 1, limit: Optional[int] = None, status: Optional[str] = None):
        user = self._auth()
        if user is None:
            return None
        params: Dict[str, Any] = {"page": page, "limit": limit or get_settings().page_size}
        if status:
            params["status"] = status
        return self._request("GET", "/api/all-orders", user, params=params)

    def update_order_status(self, order_id: str, status: str):
        user = self._auth()
        if user is None:
            return None
        return self._request("PUT", f"/api/orders/{order_id}/status", user, json={"status": status})

    def sales_analytics(self, filter: str = "today"):
        user = self._auth()
        if user is None:
            return None
        return self._request("GET", "/api/sales-analytics", user, params={"filter": filter})
