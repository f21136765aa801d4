# freshcart/models.py
from typing import Any, ClassVar, Dict, Iterable, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from .errors import ValidationError

DELIVERY_FEE = 20
FREE_DELIVERY_THRESHOLD = 599
HANDLING_FEE = 4


# ---------------------------
# Identifiers
# ---------------------------
def canonical_product_id(value: Any) -> Optional[str]:
    """
    productId comes back either as a bare id or as an expanded product
    object; both collapse to the plain id string here.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (str, int)):
        value = str(value).strip()
        return value or None
    if isinstance(value, dict):
        return canonical_product_id(value.get("_id", value.get("id")))
    return None


class ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# ---------------------------
# Cart
# ---------------------------
class CartLine(ApiModel):
    product_id: str
    quantity: int

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> Optional["CartLine"]:
        pid = canonical_product_id(item.get("productId"))
        if pid is None:
            return None
        try:
            qty = int(item.get("quantity", 0))
        except (TypeError, ValueError):
            return None
        return cls(product_id=pid, quantity=qty)


def cart_from_lines(items: Iterable[Dict[str, Any]]) -> Dict[str, int]:
    cart: Dict[str, int] = {}
    for item in items or []:
        if not isinstance(item, dict):
            continue
        line = CartLine.from_api(item)
        if line is None or line.quantity <= 0:
            continue
        cart[line.product_id] = line.quantity
    return cart


# ---------------------------
# Catalog
# ---------------------------
class Product(ApiModel):
    id: str = Field(alias="_id")
    name: str
    category: Optional[str] = None
    price: float = 0
    stock: Optional[int] = None
    description: Optional[str] = None
    image: Optional[str] = None


def merge_unique(existing: List[Product], incoming: Iterable[Product]) -> List[Product]:
    seen = {p.id for p in existing}
    out = list(existing)
    for p in incoming:
        if p.id in seen:
            continue
        seen.add(p.id)
        out.append(p)
    return out


# ---------------------------
# Addresses / customers
# ---------------------------
class Location(ApiModel):
    lat: float = 26.2389
    lng: float = 73.0243


class Address(ApiModel):
    id: Optional[str] = Field(default=None, alias="_id")
    label: str = "Home"
    street: str = ""
    city: str = ""
    state: str = ""
    pincode: str = ""
    country: str = "India"
    landmark: str = ""
    location: Location = Field(default_factory=Location)

    REQUIRED_FIELDS: ClassVar[Tuple[Tuple[str, str], ...]] = (
        ("label", "Address Type"),
        ("street", "Flat / House no / Building name"),
        ("city", "City"),
        ("state", "State"),
        ("pincode", "Pincode"),
    )

    def validate_required(self) -> "Address":
        for field, label in self.REQUIRED_FIELDS:
            value = getattr(self, field)
            if not value or not str(value).strip():
                raise ValidationError(field, label)
        return self

    def one_line(self) -> str:
        parts = [self.street, self.city, self.state, self.pincode, self.country]
        return ", ".join(p for p in parts if p)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(exclude={"id"})


class Customer(ApiModel):
    id: str = Field(alias="_id")
    name: str = ""
    email: str = ""
    mobile: str = ""
    addresses: List[Address] = Field(default_factory=list)

    REQUIRED_FIELDS: ClassVar[Tuple[Tuple[str, str], ...]] = (("name", "Name"), ("email", "Email"), ("mobile", "Mobile"))

    def validate_required(self) -> "Customer":
        for field, label in self.REQUIRED_FIELDS:
            if not str(getattr(self, field) or "").strip():
                raise ValidationError(field, label)
        return self


# ---------------------------
# Orders
# ---------------------------
class OrderItem(ApiModel):
    product_id: Union[str, Dict[str, Any], None] = Field(default=None, alias="productId")
    product_name: Optional[str] = Field(default=None, alias="productName")
    quantity: int = 1
    price: float = 0

    @property
    def name(self) -> str:
        if isinstance(self.product_id, dict) and self.product_id.get("name"):
            return self.product_id["name"]
        if self.product_name:
            return self.product_name
        pid = canonical_product_id(self.product_id) or "?"
        return f"Product {pid[:8]}"


class Order(ApiModel):
    id: str = Field(alias="_id")
    order_id: Optional[str] = Field(default=None, alias="orderId")
    user_id: Union[str, Dict[str, Any], None] = Field(default=None, alias="userId")
    status: str = "Pending"
    items: List[OrderItem] = Field(default_factory=list)
    total_amount: float = Field(default=0, alias="totalAmount")
    address: Optional[str] = None
    payment_mode: Optional[str] = Field(default=None, alias="paymentMode")
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    delivery_charge: Optional[float] = Field(default=None, alias="deliveryCharge")
    handling_charge: Optional[float] = Field(default=None, alias="handlingCharge")

    @property
    def customer_name(self) -> str:
        if isinstance(self.user_id, dict):
            return self.user_id.get("name") or self.user_id.get("email") or "Unknown"
        return self.user_id or "Unknown"

    @property
    def is_delivered(self) -> bool:
        s = (self.status or "").lower()
        return "arrived" in s or "delivered" in s

    @property
    def is_cancelled(self) -> bool:
        return "cancel" in (self.status or "").lower()

    @property
    def item_count(self) -> int:
        return sum(i.quantity for i in self.items)


# ---------------------------
# Cart summary (drawer totals)
# ---------------------------
class SummaryLine(ApiModel):
    product: Product
    quantity: int

    @property
    def line_total(self) -> float:
        return self.product.price * self.quantity


class CartSummary(ApiModel):
    lines: List[SummaryLine] = Field(default_factory=list)
    subtotal: float = 0
    delivery_fee: float = 0
    handling_fee: float = 0

    @property
    def total(self) -> float:
        return self.subtotal + self.delivery_fee + self.handling_fee

    @classmethod
    def build(cls, cart: Dict[str, int], catalog: Iterable[Product]) -> "CartSummary":
        by_id = {p.id: p for p in catalog}
        # products we have not loaded yet are left out, as the drawer does
        lines = [SummaryLine(product=by_id[pid], quantity=qty) for pid, qty in cart.items() if pid in by_id]
        if not lines:
            return cls()
        subtotal = sum(l.line_total for l in lines)
        return cls(
            lines=lines,
            subtotal=subtotal,
            delivery_fee=DELIVERY_FEE if subtotal < FREE_DELIVERY_THRESHOLD else 0,
            handling_fee=HANDLING_FEE,
        )
