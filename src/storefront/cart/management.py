"""Cart management — commands and handler.

Handles cart creation, clearing and deactivation.
"""

from protean import handle
from protean.exceptions import InvalidOperationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.domain import storefront
from storefront.user.user import User


@storefront.command(part_of="Cart")
class CreateCart:
    """Create an empty cart for a registered user."""

    user_id = Identifier(required=True)
    currency = String(max_length=3, default="USD")


@storefront.command(part_of="Cart")
class ClearCart:
    cart_id = Identifier(required=True)


@storefront.command(part_of="Cart")
class DeactivateCart:
    cart_id = Identifier(required=True)


@storefront.command_handler(part_of=Cart)
class ManageCartHandler:
    @handle(CreateCart)
    def create_cart(self, command):
        user = current_domain.repository_for(User).get(command.user_id)
        if not user.is_active:
            raise InvalidOperationError(f"User {command.user_id} is deactivated")

        cart = Cart.create(user_id=command.user_id, currency=command.currency)
        current_domain.repository_for(Cart).add(cart)
        return str(cart.id)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.cart_id)
        cart.clear()
        repo.add(cart)

    @handle(DeactivateCart)
    def deactivate_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.cart_id)
        cart.deactivate()
        repo.add(cart)
