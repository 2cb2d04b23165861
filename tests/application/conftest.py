"""Fixtures that set up state by processing commands through the domain."""

import json

import pytest
from protean import current_domain
from storefront.cart.items import AddToCart
from storefront.cart.management import CreateCart
from storefront.checkout.creation import CreateCheckout
from storefront.product.creation import CreateProduct
from storefront.product.product import Product
from storefront.user.addresses import AddAddress
from storefront.user.payment_methods import AddPaymentMethod
from storefront.user.registration import RegisterUser


@pytest.fixture()
def user_id():
    user_id = current_domain.process(
        RegisterUser(name="Ada Lovelace", email="ada@example.com"),
        asynchronous=False,
    )
    current_domain.process(
        AddAddress(
            user_id=user_id,
            street="1 Analytical Way",
            city="London",
            postal_code="N1 9GU",
            country="GB",
        ),
        asynchronous=False,
    )
    current_domain.process(
        AddPaymentMethod(user_id=user_id, method_type="credit_card", provider="visa", last4="4242"),
        asynchronous=False,
    )
    return user_id


@pytest.fixture()
def product_id():
    return current_domain.process(
        CreateProduct(
            sku="TSHIRT-001",
            name="Plain T-Shirt",
            variants=json.dumps([{"color": "black", "size": "M", "price": {"amount": 100.0}}]),
        ),
        asynchronous=False,
    )


@pytest.fixture()
def variant_id(product_id):
    product = current_domain.repository_for(Product).get(product_id)
    return str(product.variants[0].id)


@pytest.fixture()
def cart_id(user_id):
    return current_domain.process(CreateCart(user_id=user_id), asynchronous=False)


@pytest.fixture()
def filled_cart_id(cart_id, product_id, variant_id):
    current_domain.process(
        AddToCart(cart_id=cart_id, product_id=product_id, variant_id=variant_id, quantity=2),
        asynchronous=False,
    )
    return cart_id


@pytest.fixture()
def checkout_id(user_id, filled_cart_id):
    return current_domain.process(
        CreateCheckout(
            user_id=user_id,
            cart_id=filled_cart_id,
            shipping_method_id="standard",
            shipping_method_label="Standard",
            gateway="stripe",
        ),
        asynchronous=False,
    )
