"""User address book — commands and handler."""

from protean import handle
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.user.user import User


@storefront.command(part_of="User")
class AddAddress:
    """Add a new address to a user's address book."""

    user_id = Identifier(required=True)
    address_type = String(max_length=10, default="home")
    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    postal_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)
    phone = String(max_length=30)
    is_default = Boolean(default=False)


@storefront.command(part_of="User")
class RemoveAddress:
    user_id = Identifier(required=True)
    address_id = Identifier(required=True)


@storefront.command(part_of="User")
class SetDefaultAddress:
    """Designate an existing address as the user's default."""

    user_id = Identifier(required=True)
    address_id = Identifier(required=True)


@storefront.command_handler(part_of=User)
class ManageAddressesHandler:
    @handle(AddAddress)
    def add_address(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        address = user.add_address(
            address_type=command.address_type,
            street=command.street,
            city=command.city,
            state=command.state,
            postal_code=command.postal_code,
            country=command.country,
            phone=command.phone,
            is_default=bool(command.is_default),
        )
        repo.add(user)
        return str(address.id)

    @handle(RemoveAddress)
    def remove_address(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.remove_address(command.address_id)
        repo.add(user)

    @handle(SetDefaultAddress)
    def set_default_address(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.set_default_address(command.address_id)
        repo.add(user)
