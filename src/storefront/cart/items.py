"""Cart item management — commands and handler.

Prices and names are looked up from the product catalogue at the moment the
item is added; the cart keeps its own copy from then on.
"""

from protean import handle
from protean.exceptions import InvalidOperationError
from protean.fields import Float, Identifier, Integer
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.domain import storefront
from storefront.product.product import Product


@storefront.command(part_of="Cart")
class AddToCart:
    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    variant_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1, max_value=100)
    unit_price = Float(min_value=0.0)  # Defaults to the variant's current price


@storefront.command(part_of="Cart")
class UpdateCartItemQuantity:
    cart_id = Identifier(required=True)
    variant_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1, max_value=100)


@storefront.command(part_of="Cart")
class RemoveFromCart:
    cart_id = Identifier(required=True)
    variant_id = Identifier(required=True)


@storefront.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.cart_id)

        product = current_domain.repository_for(Product).get(command.product_id)
        if not product.is_active:
            raise InvalidOperationError(f"Product {command.product_id} is no longer available")
        variant = product.find_variant(command.variant_id)

        unit_price = command.unit_price if command.unit_price is not None else variant.price.effective_amount
        cart.add_item(
            product_id=command.product_id,
            variant_id=command.variant_id,
            quantity=command.quantity,
            unit_price=unit_price,
            product_name=product.name,
        )
        repo.add(cart)

    @handle(UpdateCartItemQuantity)
    def update_cart_item_quantity(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.cart_id)
        cart.update_item_quantity(variant_id=command.variant_id, quantity=command.quantity)
        repo.add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get(command.cart_id)
        cart.remove_item(variant_id=command.variant_id)
        repo.add(cart)
