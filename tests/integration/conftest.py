import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from storefront.api.carts import cart_router
from storefront.api.checkouts import checkout_router
from storefront.api.errors import register_exception_handlers
from storefront.api.orders import order_router
from storefront.api.products import product_router
from storefront.api.shipments import shipment_router
from storefront.api.users import user_router

ROUTERS = [product_router, user_router, cart_router, checkout_router, order_router, shipment_router]


@pytest.fixture()
def client():
    app = FastAPI()
    for router in ROUTERS:
        app.include_router(router)
    register_exception_handlers(app)
    return TestClient(app)


@pytest.fixture()
def user(client):
    response = client.post("/users", json={"name": "Ada Lovelace", "email": "ada@example.com"})
    user = response.json()["data"]
    client.post(
        f"/users/{user['id']}/addresses",
        json={"street": "1 Analytical Way", "city": "London", "postal_code": "N1 9GU", "country": "GB"},
    )
    client.post(
        f"/users/{user['id']}/payment-methods",
        json={"method_type": "credit_card", "provider": "visa", "last4": "4242"},
    )
    return client.get(f"/users/{user['id']}").json()["data"]


@pytest.fixture()
def product(client):
    response = client.post(
        "/products",
        json={
            "sku": "TSHIRT-001",
            "name": "Plain T-Shirt",
            "brand": "Basics",
            "categories": ["apparel"],
            "variants": [{"color": "black", "size": "M", "price": {"amount": 100.0}}],
        },
    )
    return response.json()["data"]


@pytest.fixture()
def cart(client, user, product):
    cart = client.post("/carts", json={"user_id": user["id"]}).json()["data"]
    response = client.post(
        f"/carts/{cart['id']}/items",
        json={"product_id": product["id"], "variant_id": product["variants"][0]["id"], "quantity": 2},
    )
    return response.json()["data"]


@pytest.fixture()
def checkout(client, user, cart):
    response = client.post(
        "/checkouts",
        json={
            "user_id": user["id"],
            "cart_id": cart["id"],
            "shipping_method": {"method_id": "standard", "label": "Standard", "cost": 0.0},
            "gateway": "stripe",
        },
    )
    return response.json()["data"]


@pytest.fixture()
def order(client, checkout):
    response = client.post(f"/checkouts/{checkout['id']}/complete", json={"transaction_id": "txn-1"})
    return response.json()["data"]["order"]
