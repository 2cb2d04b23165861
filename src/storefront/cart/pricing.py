"""Cart discounts and estimates — commands and handler."""

from protean import handle
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.domain import storefront


@storefront.command(part_of="Cart")
class ApplyCartDiscount:
    cart_id = Identifier(required=True)
    code = String(required=True, max_length=50)
    amount = Float(required=True, min_value=0.0)


@storefront.command(part_of="Cart")
class SetCartEstimates:
    cart_id = Identifier(required=True)
    tax = Float(min_value=0.0)
    shipping = Float(min_value=0.0)


@storefront.command_handler(part_of=Cart)
class CartPricingHandler:
    @handle(ApplyCartDiscount)
    def apply_discount(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.cart_id)
        cart.apply_discount(code=command.code, amount=command.amount)
        repo.add(cart)

    @handle(SetCartEstimates)
    def set_estimates(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.cart_id)
        cart.set_estimates(tax=command.tax, shipping=command.shipping)
        repo.add(cart)
