"""Shared BDD fixtures and step definitions for the storefront.

Steps drive the domain through its commands and read state back from the
repositories, so each scenario exercises a full Unit of Work per step.
"""

import json

import pytest
from protean import current_domain
from protean.exceptions import InvalidOperationError, ValidationError
from pytest_bdd import given, parsers, then, when
from storefront.cart.cart import Cart
from storefront.cart.items import AddToCart
from storefront.cart.management import CreateCart
from storefront.checkout.completion import CompleteCheckout
from storefront.checkout.creation import CreateCheckout
from storefront.order.cancellation import CancelOrder
from storefront.order.order import Order
from storefront.order.status import UpdateOrderStatus
from storefront.product.creation import CreateProduct
from storefront.product.product import Product
from storefront.user.addresses import AddAddress
from storefront.user.registration import RegisterUser


@pytest.fixture()
def ctx():
    """Ids of the aggregates a scenario has created."""
    return {"products": {}}


@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


def _process(command):
    return current_domain.process(command, asynchronous=False)


def _cart(ctx):
    return current_domain.repository_for(Cart).get(ctx["cart_id"])


def _order(ctx):
    return current_domain.repository_for(Order).get(ctx["order_id"])


def _add_units(ctx, sku, quantity):
    product_id, variant_id = ctx["products"][sku]
    _process(AddToCart(cart_id=ctx["cart_id"], product_id=product_id, variant_id=variant_id, quantity=quantity))


def _check_out(ctx):
    ctx["checkout_id"] = _process(
        CreateCheckout(user_id=ctx["user_id"], cart_id=ctx["cart_id"], shipping_method_id="standard")
    )


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
def _register_shopper(ctx):
    ctx["user_id"] = _process(RegisterUser(name="Ada Lovelace", email="ada@example.com"))
    _process(
        AddAddress(
            user_id=ctx["user_id"],
            street="1 Analytical Way",
            city="London",
            postal_code="N1 9GU",
            country="GB",
        )
    )


def _create_product(ctx, sku, price):
    product_id = _process(
        CreateProduct(sku=sku, name=f"Product {sku}", variants=json.dumps([{"price": {"amount": price}}]))
    )
    product = current_domain.repository_for(Product).get(product_id)
    ctx["products"][sku] = (product_id, str(product.variants[0].id))


@given("a registered shopper")
def registered_shopper(ctx):
    _register_shopper(ctx)


@given(parsers.cfparse('a product "{sku}" priced at {price:f}'))
def product_priced_at(ctx, sku, price):
    _create_product(ctx, sku, price)


@given("an empty cart")
def empty_cart(ctx):
    ctx["cart_id"] = _process(CreateCart(user_id=ctx["user_id"]))


@given(parsers.cfparse('{quantity:d} unit of "{sku}" is in the cart'))
@given(parsers.cfparse('{quantity:d} units of "{sku}" are in the cart'))
def units_in_cart(ctx, quantity, sku):
    _add_units(ctx, sku, quantity)


@given("the shopper has checked out")
def shopper_has_checked_out(ctx):
    _check_out(ctx)


@given("a placed order")
def placed_order(ctx):
    _register_shopper(ctx)
    _create_product(ctx, "TSHIRT-001", 100.0)
    ctx["cart_id"] = _process(CreateCart(user_id=ctx["user_id"]))
    _add_units(ctx, "TSHIRT-001", 2)
    _check_out(ctx)
    ctx["order_id"] = _process(CompleteCheckout(checkout_id=ctx["checkout_id"], transaction_id="txn-bdd"))


@given(parsers.cfparse('the order has been updated to "{status}"'))
def order_updated_to(ctx, status):
    if status == "Cancelled":
        _process(CancelOrder(order_id=ctx["order_id"]))
    else:
        _process(UpdateOrderStatus(order_id=ctx["order_id"], status=status))


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('{quantity:d} unit of "{sku}" is added to the cart'))
@when(parsers.cfparse('{quantity:d} units of "{sku}" are added to the cart'))
def units_added_to_cart(ctx, quantity, sku, error):
    try:
        _add_units(ctx, sku, quantity)
    except (ValidationError, InvalidOperationError) as exc:
        error["exc"] = exc


@when("the shopper checks out")
def shopper_checks_out(ctx):
    _check_out(ctx)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the request is rejected as invalid")
def rejected_as_invalid(error):
    assert isinstance(error["exc"], ValidationError)


@then("the request is rejected as an invalid operation")
def rejected_as_invalid_operation(error):
    assert isinstance(error["exc"], InvalidOperationError)


@then(parsers.cfparse("the cart has {count:d} line"))
@then(parsers.cfparse("the cart has {count:d} lines"))
def cart_has_lines(ctx, count):
    assert len(_cart(ctx).items) == count


@then(parsers.cfparse("the cart total is {total:f}"))
def cart_total_is(ctx, total):
    assert _cart(ctx).total == pytest.approx(total)


@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(ctx, status):
    assert _order(ctx).status == status


@then(parsers.cfparse("the order has {count:d} status history entry"))
@then(parsers.cfparse("the order has {count:d} status history entries"))
def order_history_length(ctx, count):
    order = _order(ctx)
    assert len(order.status_history) == count
    assert order.latest_status_change.status == order.status
