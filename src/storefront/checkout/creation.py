"""Checkout creation — command and handler.

Resolves the user's chosen addresses and payment method, then snapshots the
cart. The cart itself is not modified here; it is cleared only when the
checkout completes.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.checkout.checkout import Checkout, PaymentSelection, PaymentStatus, ShippingMethod
from storefront.domain import storefront
from storefront.shared.address import AddressSnapshot
from storefront.user.user import User

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Checkout")
class CreateCheckout:
    user_id = Identifier(required=True)
    cart_id = Identifier(required=True)
    shipping_address_id = Identifier()  # Defaults to the user's default address
    billing_address_id = Identifier()  # Defaults to the shipping address
    shipping_method_id = String(max_length=50)
    shipping_method_label = String(max_length=100)
    shipping_cost = Float(min_value=0.0)
    estimated_days = Integer(min_value=0)
    payment_method_id = Identifier()  # Defaults to the user's default payment method
    gateway = String(max_length=50)
    payment_intent_id = String(max_length=255)
    notes = Text()


def _resolve_address(user, address_id):
    if address_id:
        address = user.find_address(address_id)
        if address is None:
            raise ObjectNotFoundError(f"Address {address_id} not found for user {user.id}")
        return AddressSnapshot.from_address(address)

    default = user.default_address
    return AddressSnapshot.from_address(default) if default else None


def _resolve_payment(user, payment_method_id):
    if payment_method_id:
        method = user.find_payment_method(payment_method_id)
        if method is None:
            raise ObjectNotFoundError(f"Payment method {payment_method_id} not found for user {user.id}")
        return method
    return user.default_payment_method


@storefront.command_handler(part_of=Checkout)
class CreateCheckoutHandler:
    @handle(CreateCheckout)
    def create_checkout(self, command):
        user = current_domain.repository_for(User).get(command.user_id)
        cart = current_domain.repository_for(Cart).get(command.cart_id)

        if str(cart.user_id) != str(user.id) or not cart.is_active or cart.is_expired:
            raise ObjectNotFoundError(f"Active cart {command.cart_id} not found for user {command.user_id}")
        if not cart.items:
            raise ValidationError({"cart_id": ["Cannot check out an empty cart"]})

        shipping_address = _resolve_address(user, command.shipping_address_id)
        billing_address = (
            _resolve_address(user, command.billing_address_id) if command.billing_address_id else shipping_address
        )

        shipping_method = None
        if command.shipping_method_id:
            shipping_method = ShippingMethod(
                method_id=command.shipping_method_id,
                label=command.shipping_method_label,
                cost=command.shipping_cost or 0.0,
                estimated_days=command.estimated_days,
            )

        method = _resolve_payment(user, command.payment_method_id)
        payment = PaymentSelection(
            payment_method_id=str(method.id) if method else None,
            method_type=method.method_type if method else None,
            amount=cart.total,
            currency=cart.currency,
            status=PaymentStatus.PENDING.value,
            gateway=command.gateway,
            intent_id=command.payment_intent_id,
        )

        checkout = Checkout.create(
            user_id=command.user_id,
            cart=cart,
            shipping_address=shipping_address,
            billing_address=billing_address,
            shipping_method=shipping_method,
            payment=payment,
            notes=command.notes,
        )
        current_domain.repository_for(Checkout).add(checkout)

        logger.info(
            "Checkout created",
            checkout_number=checkout.checkout_number,
            user_id=str(user.id),
            cart_id=str(cart.id),
            total=checkout.total,
        )
        return str(checkout.id)
