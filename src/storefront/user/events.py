"""Domain events for the User aggregate."""

from protean.fields import Boolean, DateTime, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="User")
class UserRegistered:
    """A new user account was created."""

    __version__ = 1

    user_id = Identifier(required=True)
    name = String(required=True)
    email = String(required=True)
    registered_at = DateTime(required=True)


@storefront.event(part_of="User")
class UserUpdated:
    __version__ = 1

    user_id = Identifier(required=True)
    name = String(required=True)
    phone = String()


@storefront.event(part_of="User")
class AddressAdded:
    __version__ = 1

    user_id = Identifier(required=True)
    address_id = Identifier(required=True)
    address_type = String(required=True)
    city = String(required=True)
    country = String(required=True)
    is_default = Boolean(required=True)


@storefront.event(part_of="User")
class AddressRemoved:
    __version__ = 1

    user_id = Identifier(required=True)
    address_id = Identifier(required=True)


@storefront.event(part_of="User")
class DefaultAddressChanged:
    __version__ = 1

    user_id = Identifier(required=True)
    address_id = Identifier(required=True)


@storefront.event(part_of="User")
class PaymentMethodAdded:
    __version__ = 1

    user_id = Identifier(required=True)
    payment_method_id = Identifier(required=True)
    method_type = String(required=True)
    is_default = Boolean(required=True)


@storefront.event(part_of="User")
class PaymentMethodRemoved:
    __version__ = 1

    user_id = Identifier(required=True)
    payment_method_id = Identifier(required=True)


@storefront.event(part_of="User")
class DefaultPaymentMethodChanged:
    __version__ = 1

    user_id = Identifier(required=True)
    payment_method_id = Identifier(required=True)


@storefront.event(part_of="User")
class LoyaltyPointsChanged:
    """The user's loyalty point balance changed."""

    __version__ = 1

    user_id = Identifier(required=True)
    loyalty_points = Integer(required=True)


@storefront.event(part_of="User")
class LoyaltyTierChanged:
    """The point balance crossed a tier threshold."""

    __version__ = 1

    user_id = Identifier(required=True)
    previous_tier = String(required=True)
    new_tier = String(required=True)


@storefront.event(part_of="User")
class UserDeactivated:
    __version__ = 1

    user_id = Identifier(required=True)
    deactivated_at = DateTime(required=True)
