# app/main.py
from fastapi import FastAPI, HTTPException, Header, Depends, Query, UploadFile, File, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from typing import Optional, Dict, Any

from . import logic
from .core import (
    SignUpIn, SignInIn, ProductIn, ProductUpdateIn, CategoryIn, CartItemIn,
    AddressIn, CustomerEditIn, OrderIn, StatusIn
)
from .database import user_from_token

app = FastAPI(title="freshcart stub api (in-memory demo)")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(HTTPException)
async def message_errors(request: Request, exc: HTTPException):
    # the storefront backend reports errors as {"message": ...}
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail})

# ---------------------------
# Auth dependencies
# ---------------------------
def current_user(authorization: Optional[str] = Header(None)) -> Dict[str, Any]:
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Authorization token missing")
    user = user_from_token(authorization[len("Bearer "):])
    if not user:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    return user

def admin_user(user: Dict[str, Any] = Depends(current_user)) -> Dict[str, Any]:
    if user["userType"] != "admin":
        raise HTTPException(status_code=403, detail="Admin access required")
    return user

# ---------------------------
# Auth endpoints
# ---------------------------
@app.post("/api/auth/signup", status_code=201)
async def signup(payload: SignUpIn):
    return await logic.signup_logic(payload)

@app.post("/api/auth/signin")
async def signin(payload: SignInIn):
    return await logic.signin_logic(payload)

# ---------------------------
# Product endpoints
# ---------------------------
@app.get("/api/products")
async def list_products(page: int = 1, limit: int = 24, name: Optional[str] = None, user=Depends(current_user)):
    return await logic.list_products_logic(page, limit, name)

@app.get("/api/products/{product_id}")
async def get_product(product_id: str, user=Depends(current_user)):
    return await logic.get_product_logic(product_id)

@app.post("/api/create-product", status_code=201)
async def create_product(payload: ProductIn, user=Depends(admin_user)):
    return await logic.create_product_logic(payload)

@app.put("/api/products/{product_id}")
async def update_product(product_id: str, payload: ProductUpdateIn, user=Depends(admin_user)):
    return await logic.update_product_logic(product_id, payload)

@app.delete("/api/products/{product_id}")
async def delete_product(product_id: str, user=Depends(admin_user)):
    return await logic.delete_product_logic(product_id)

@app.get("/api/categories")
async def list_categories(user=Depends(current_user)):
    return await logic.list_categories_logic()

@app.post("/api/categories", status_code=201)
async def create_category(payload: CategoryIn, user=Depends(admin_user)):
    return await logic.create_category_logic(payload.name)

@app.post("/api/upload-image")
async def upload_image(image: UploadFile = File(...), user=Depends(admin_user)):
    return await logic.upload_image_logic(image.filename, await image.read())

# ---------------------------
# Cart endpoints
# ---------------------------
@app.get("/api/cart")
async def view_cart(user=Depends(current_user)):
    return await logic.view_cart_logic(user)

@app.post("/api/cart/add")
async def cart_add(payload: CartItemIn, user=Depends(current_user)):
    return await logic.cart_add_logic(user, payload)

@app.put("/api/cart/update")
async def cart_update(payload: CartItemIn, user=Depends(current_user)):
    return await logic.cart_update_logic(user, payload)

@app.delete("/api/cart/{product_id}")
async def cart_remove(product_id: str, user=Depends(current_user)):
    return await logic.cart_remove_logic(user, product_id)

# ---------------------------
# Customer endpoints
# ---------------------------
@app.get("/api/get-customer/{customer_id}")
async def get_customer(customer_id: str, user=Depends(current_user)):
    return await logic.get_customer_logic(user, customer_id)

@app.post("/api/customers/{customer_id}/addresses", status_code=201)
async def add_address(customer_id: str, payload: AddressIn, user=Depends(current_user)):
    return await logic.add_address_logic(user, customer_id, payload)

@app.put("/api/customers/{customer_id}/addresses/{address_id}")
async def update_address(customer_id: str, address_id: str, payload: AddressIn, user=Depends(current_user)):
    return await logic.update_address_logic(user, customer_id, address_id, payload)

@app.delete("/api/customers/{customer_id}/addresses/{address_id}")
async def delete_address(customer_id: str, address_id: str, user=Depends(current_user)):
    return await logic.delete_address_logic(user, customer_id, address_id)

@app.get("/api/customers")
async def list_customers(user=Depends(admin_user)):
    return await logic.list_customers_logic()

@app.put("/api/customers/edit/{customer_id}")
async def edit_customer(customer_id: str, payload: CustomerEditIn, user=Depends(admin_user)):
    return await logic.edit_customer_logic(customer_id, payload)

# ---------------------------
# Orders
# ---------------------------
@app.post("/api/orders", status_code=201)
async def place_order(payload: OrderIn, user=Depends(current_user)):
    return await logic.place_order_logic(user, payload)

@app.get("/api/orders")
async def list_orders(page: int = 1, limit: int = 24, user=Depends(current_user)):
    return await logic.list_orders_logic(user, page, limit)

@app.get("/api/all-orders")
async def list_all_orders(page: int = 1, limit: int = 24, status: Optional[str] = None, user=Depends(admin_user)):
    return await logic.list_all_orders_logic(page, limit, status)

@app.put("/api/orders/{order_id}/status")
async def update_order_status(order_id: str, payload: StatusIn, user=Depends(admin_user)):
    return await logic.update_order_status_logic(order_id, payload.status)

@app.get("/api/sales-analytics")
async def sales_analytics(filter: str = Query("today"), user=Depends(admin_user)):
    return await logic.sales_analytics_logic(filter)

# ---------------------------
# Utility: reset (for tests/demo)
# ---------------------------
@app.post("/reset")
async def reset_all():
    return await logic.reset_all_logic()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8085, log_level="info")
