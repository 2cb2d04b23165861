"""Application tests for the cart → checkout → order purchase flow."""

import pytest
from protean import current_domain
from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError
from storefront.cart.cart import Cart
from storefront.cart.items import AddToCart, RemoveFromCart, UpdateCartItemQuantity
from storefront.cart.management import CreateCart
from storefront.checkout.checkout import Checkout
from storefront.checkout.completion import CompleteCheckout
from storefront.checkout.creation import CreateCheckout
from storefront.checkout.termination import CancelCheckout, FailCheckout
from storefront.order.order import Order
from storefront.product.lifecycle import DeactivateProduct
from storefront.user.account import DeactivateUser


class TestCartCommands:
    def test_add_to_cart_uses_variant_price(self, filled_cart_id):
        cart = current_domain.repository_for(Cart).get(filled_cart_id)
        assert len(cart.items) == 1
        assert cart.items[0].unit_price == 100.0
        assert cart.items[0].product_name == "Plain T-Shirt"
        assert cart.subtotal == 200.0
        assert cart.total == 200.0

    def test_adding_again_merges(self, filled_cart_id, product_id, variant_id):
        current_domain.process(
            AddToCart(cart_id=filled_cart_id, product_id=product_id, variant_id=variant_id, quantity=1),
            asynchronous=False,
        )
        cart = current_domain.repository_for(Cart).get(filled_cart_id)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 3
        assert cart.total == 300.0

    def test_update_and_remove(self, filled_cart_id, variant_id):
        current_domain.process(
            UpdateCartItemQuantity(cart_id=filled_cart_id, variant_id=variant_id, quantity=4),
            asynchronous=False,
        )
        assert current_domain.repository_for(Cart).get(filled_cart_id).total == 400.0

        current_domain.process(RemoveFromCart(cart_id=filled_cart_id, variant_id=variant_id), asynchronous=False)
        assert current_domain.repository_for(Cart).get(filled_cart_id).items == []

    def test_unknown_variant(self, cart_id, product_id):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(
                AddToCart(cart_id=cart_id, product_id=product_id, variant_id="missing", quantity=1),
                asynchronous=False,
            )

    def test_inactive_product(self, cart_id, product_id, variant_id):
        current_domain.process(DeactivateProduct(product_id=product_id), asynchronous=False)
        with pytest.raises(InvalidOperationError):
            current_domain.process(
                AddToCart(cart_id=cart_id, product_id=product_id, variant_id=variant_id, quantity=1),
                asynchronous=False,
            )

    def test_deactivated_user_cannot_get_a_cart(self, user_id):
        current_domain.process(DeactivateUser(user_id=user_id), asynchronous=False)
        with pytest.raises(InvalidOperationError):
            current_domain.process(CreateCart(user_id=user_id), asynchronous=False)


class TestCreateCheckout:
    def test_snapshot_uses_defaults(self, checkout_id, filled_cart_id, user_id):
        checkout = current_domain.repository_for(Checkout).get(checkout_id)
        assert checkout.status == "pending"
        assert checkout.total == 200.0
        assert checkout.shipping_address.city == "London"
        assert checkout.billing_address.city == "London"
        assert checkout.payment.method_type == "credit_card"
        assert checkout.shipping_method.method_id == "standard"

    def test_cart_untouched_until_completion(self, checkout_id, filled_cart_id):
        cart = current_domain.repository_for(Cart).get(filled_cart_id)
        assert len(cart.items) == 1

    def test_empty_cart_rejected(self, user_id, cart_id):
        with pytest.raises(ValidationError):
            current_domain.process(CreateCheckout(user_id=user_id, cart_id=cart_id), asynchronous=False)

    def test_missing_cart(self, user_id):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(CreateCheckout(user_id=user_id, cart_id="no-such-cart"), asynchronous=False)


class TestCompleteCheckout:
    def test_completion_places_order_and_clears_cart(self, checkout_id, filled_cart_id):
        order_id = current_domain.process(
            CompleteCheckout(checkout_id=checkout_id, transaction_id="txn-123"),
            asynchronous=False,
        )

        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == "Placed"
        assert len(order.status_history) == 1
        assert order.pricing.grand_total == 200.0
        assert order.payment.transaction_id == "txn-123"
        assert str(order.checkout_id) == checkout_id

        checkout = current_domain.repository_for(Checkout).get(checkout_id)
        assert checkout.status == "completed"

        cart = current_domain.repository_for(Cart).get(filled_cart_id)
        assert cart.items == []
        assert cart.total == 0.0

    def test_order_is_found_by_checkout(self, checkout_id):
        order_id = current_domain.process(CompleteCheckout(checkout_id=checkout_id), asynchronous=False)
        order = current_domain.repository_for(Order).find_by_checkout(checkout_id)
        assert str(order.id) == order_id

    def test_completed_checkout_cannot_complete_again(self, checkout_id):
        current_domain.process(CompleteCheckout(checkout_id=checkout_id), asynchronous=False)
        with pytest.raises(InvalidOperationError):
            current_domain.process(CompleteCheckout(checkout_id=checkout_id), asynchronous=False)

    def test_failed_checkout_places_no_order(self, checkout_id):
        current_domain.process(FailCheckout(checkout_id=checkout_id, reason="Card declined"), asynchronous=False)
        with pytest.raises(InvalidOperationError):
            current_domain.process(CompleteCheckout(checkout_id=checkout_id), asynchronous=False)
        assert current_domain.repository_for(Order).find_by_checkout(checkout_id) is None

    def test_cancel_checkout(self, checkout_id):
        current_domain.process(CancelCheckout(checkout_id=checkout_id), asynchronous=False)
        checkout = current_domain.repository_for(Checkout).get(checkout_id)
        assert checkout.status == "cancelled"
        assert checkout.notes == "Checkout cancelled by user"
