"""Address snapshot value object.

Checkouts, orders and shipments keep a copy of the address as it was when the
purchase happened, so later edits to a user's address book do not leak into
historical records.
"""

from protean.fields import Identifier, String

from storefront.domain import storefront


@storefront.value_object
class AddressSnapshot:
    address_id = Identifier()
    label = String(max_length=20)
    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    postal_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)
    phone = String(max_length=30)

    @classmethod
    def from_address(cls, address):
        """Build a snapshot from a user's Address entity."""
        return cls(
            address_id=str(address.id),
            label=address.address_type,
            street=address.street,
            city=address.city,
            state=address.state,
            postal_code=address.postal_code,
            country=address.country,
            phone=address.phone,
        )
