from pydantic import BaseModel, Field
from typing import Optional, Dict, Any

class SignUpIn(BaseModel):
    name: str
    email: str
    mobile: str
    password: str
    userType: str = "user"

class SignInIn(BaseModel):
    email: str
    password: str

class ProductIn(BaseModel):
    name: str
    category: str
    price: float
    stock: int = 0
    description: Optional[str] = None
    image: Optional[str] = None

class ProductUpdateIn(BaseModel):
    name: Optional[str] = None
    category: Optional[str] = None
    price: Optional[float] = None
    stock: Optional[int] = None
    description: Optional[str] = None
    image: Optional[str] = None

class CategoryIn(BaseModel):
    name: str

class CartItemIn(BaseModel):
    productId: str
    quantity: int = 1

class LocationIn(BaseModel):
    lat: float = 26.2389
    lng: float = 73.0243

class AddressIn(BaseModel):
    label: str = "Home"
    street: str
    city: str
    state: str
    pincode: str
    country: str = "India"
    landmark: str = ""
    location: LocationIn = Field(default_factory=LocationIn)

class CustomerEditIn(BaseModel):
    name: str
    email: str
    mobile: str

class OrderIn(BaseModel):
    addressId: str
    paymentMode: str = "Cash on Delivery"

class StatusIn(BaseModel):
    status: str

def _make_product_dict(product_id: str, p: ProductIn) -> Dict[str, Any]:
    return {
        "_id": product_id,
        "name": p.name,
        "category": p.category,
        "price": p.price,
        "stock": p.stock,
        "description": p.description,
        "image": p.image,
    }
