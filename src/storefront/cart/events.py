"""Domain events for the Cart aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Cart")
class CartCreated:
    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    created_at = DateTime(required=True)


@storefront.event(part_of="Cart")
class CartItemAdded:
    """A variant was added to the cart, or its quantity increased by a repeat add."""

    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    variant_id = Identifier(required=True)
    quantity = Integer(required=True)
    unit_price = Float(required=True)
    cart_total = Float(required=True)


@storefront.event(part_of="Cart")
class CartItemQuantityUpdated:
    __version__ = 1

    cart_id = Identifier(required=True)
    variant_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)
    cart_total = Float(required=True)


@storefront.event(part_of="Cart")
class CartItemRemoved:
    __version__ = 1

    cart_id = Identifier(required=True)
    variant_id = Identifier(required=True)
    cart_total = Float(required=True)


@storefront.event(part_of="Cart")
class CartEstimatesUpdated:
    """Estimated taxes or shipping on the cart changed."""

    __version__ = 1

    cart_id = Identifier(required=True)
    tax = Float(required=True)
    shipping = Float(required=True)
    cart_total = Float(required=True)


@storefront.event(part_of="Cart")
class CartDiscountApplied:
    __version__ = 1

    cart_id = Identifier(required=True)
    code = String(required=True)
    amount = Float(required=True)
    cart_total = Float(required=True)


@storefront.event(part_of="Cart")
class CartCleared:
    """All items were removed and the totals zeroed."""

    __version__ = 1

    cart_id = Identifier(required=True)


@storefront.event(part_of="Cart")
class CartDeactivated:
    __version__ = 1

    cart_id = Identifier(required=True)
    deactivated_at = DateTime(required=True)
