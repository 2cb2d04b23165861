"""Domain events for the Checkout aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Checkout")
class CheckoutCreated:
    """A cart was snapshotted into a new pending checkout."""

    __version__ = 1

    checkout_id = Identifier(required=True)
    checkout_number = String(required=True)
    user_id = Identifier(required=True)
    cart_id = Identifier(required=True)
    total = Float(required=True)
    expires_at = DateTime(required=True)


@storefront.event(part_of="Checkout")
class CheckoutCompleted:
    __version__ = 1

    checkout_id = Identifier(required=True)
    checkout_number = String(required=True)
    transaction_id = String()
    completed_at = DateTime(required=True)


@storefront.event(part_of="Checkout")
class CheckoutFailed:
    __version__ = 1

    checkout_id = Identifier(required=True)
    reason = String()


@storefront.event(part_of="Checkout")
class CheckoutCancelled:
    __version__ = 1

    checkout_id = Identifier(required=True)
    previous_status = String(required=True)
    reason = String(required=True)
