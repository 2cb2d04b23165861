"""Checkout failure and cancellation — commands and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.checkout.checkout import Checkout
from storefront.domain import storefront


@storefront.command(part_of="Checkout")
class FailCheckout:
    checkout_id = Identifier(required=True)
    reason = String(max_length=500)


@storefront.command(part_of="Checkout")
class CancelCheckout:
    checkout_id = Identifier(required=True)
    reason = String(max_length=500)


@storefront.command_handler(part_of=Checkout)
class TerminateCheckoutHandler:
    @handle(FailCheckout)
    def fail_checkout(self, command):
        repo = current_domain.repository_for(Checkout)
        checkout = repo.get(command.checkout_id)
        checkout.fail(reason=command.reason)
        repo.add(checkout)

    @handle(CancelCheckout)
    def cancel_checkout(self, command):
        repo = current_domain.repository_for(Checkout)
        checkout = repo.get(command.checkout_id)
        checkout.cancel(reason=command.reason)
        repo.add(checkout)
