"""Checkout completion — command and handler.

Completing a checkout marks it completed, places an Order from its snapshot
and clears the source cart. All three aggregates are saved in the handler's
Unit of Work: if any step fails, none of the changes are committed.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.checkout.checkout import Checkout
from storefront.domain import storefront
from storefront.order.order import Order

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Checkout")
class CompleteCheckout:
    checkout_id = Identifier(required=True)
    transaction_id = String(max_length=255)
    payment_intent_id = String(max_length=255)


@storefront.command_handler(part_of=Checkout)
class CompleteCheckoutHandler:
    @handle(CompleteCheckout)
    def complete_checkout(self, command):
        checkout_repo = current_domain.repository_for(Checkout)
        checkout = checkout_repo.get(command.checkout_id)
        checkout.complete(
            transaction_id=command.transaction_id,
            payment_intent_id=command.payment_intent_id,
        )

        order = Order.place_from_checkout(checkout)

        cart_repo = current_domain.repository_for(Cart)
        cart = cart_repo.get(checkout.cart_id)
        cart.clear()

        checkout_repo.add(checkout)
        current_domain.repository_for(Order).add(order)
        cart_repo.add(cart)

        logger.info(
            "Checkout completed",
            checkout_number=checkout.checkout_number,
            order_number=order.order_number,
            transaction_id=command.transaction_id,
            grand_total=order.pricing.grand_total,
        )
        return str(order.id)
