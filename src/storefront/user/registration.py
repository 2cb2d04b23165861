"""User registration and profile — commands and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.user.user import User


@storefront.command(part_of="User")
class RegisterUser:
    """Create a new user account."""

    name = String(required=True, max_length=255)
    email = String(required=True, max_length=254)
    phone = String(max_length=30)


@storefront.command(part_of="User")
class UpdateUser:
    user_id = Identifier(required=True)
    name = String(max_length=255)
    phone = String(max_length=30)


@storefront.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if repo.find_by_email(command.email) is not None:
            raise ValidationError({"email": [f"Email {command.email} is already registered"]})

        user = User.register(
            name=command.name,
            email=command.email,
            phone=command.phone,
        )
        repo.add(user)
        return str(user.id)

    @handle(UpdateUser)
    def update_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.update_profile(name=command.name, phone=command.phone)
        repo.add(user)
