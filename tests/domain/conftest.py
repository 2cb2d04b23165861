"""Builders for aggregates under test. Nothing here touches a repository."""

import pytest
from storefront.cart.cart import Cart
from storefront.checkout.checkout import Checkout, PaymentSelection
from storefront.order.order import Order
from storefront.product.product import Product
from storefront.shared.address import AddressSnapshot
from storefront.user.user import User


@pytest.fixture()
def user():
    user = User.register(name="Ada Lovelace", email="ada@example.com", phone="+1-555-000-0001")
    user._events.clear()
    return user


@pytest.fixture()
def product():
    product = Product.create(
        sku="TSHIRT-001",
        name="Plain T-Shirt",
        brand="Basics",
        categories=["apparel"],
        variants=[
            {"color": "black", "size": "M", "price": {"amount": 100.0, "currency": "USD"}},
            {"color": "white", "size": "L", "price": {"amount": 25.0, "currency": "USD", "discount": 5.0}},
        ],
    )
    product._events.clear()
    return product


@pytest.fixture()
def cart(user):
    cart = Cart.create(user_id=str(user.id))
    cart._events.clear()
    return cart


@pytest.fixture()
def filled_cart(cart, product):
    variant = product.variants[0]
    cart.add_item(
        product_id=str(product.id),
        variant_id=str(variant.id),
        quantity=2,
        unit_price=variant.price.effective_amount,
        product_name=product.name,
    )
    cart._events.clear()
    return cart


@pytest.fixture()
def address_snapshot():
    return AddressSnapshot(
        address_id="addr-1",
        label="home",
        street="1 Analytical Way",
        city="London",
        postal_code="N1 9GU",
        country="GB",
    )


@pytest.fixture()
def checkout(user, filled_cart, address_snapshot):
    checkout = Checkout.create(
        user_id=str(user.id),
        cart=filled_cart,
        shipping_address=address_snapshot,
        billing_address=address_snapshot,
        payment=PaymentSelection(method_type="credit_card", amount=filled_cart.total, gateway="stripe"),
    )
    checkout._events.clear()
    return checkout


@pytest.fixture()
def order(checkout):
    checkout.complete(transaction_id="txn-001")
    order = Order.place_from_checkout(checkout)
    order._events.clear()
    return order
