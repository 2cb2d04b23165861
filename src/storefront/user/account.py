"""Account lifecycle — commands and handler."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.user.user import User


@storefront.command(part_of="User")
class RecordLogin:
    user_id = Identifier(required=True)


@storefront.command(part_of="User")
class DeactivateUser:
    """Soft-delete a user account. The record is kept."""

    user_id = Identifier(required=True)


@storefront.command_handler(part_of=User)
class ManageAccountHandler:
    @handle(RecordLogin)
    def record_login(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.record_login()
        repo.add(user)

    @handle(DeactivateUser)
    def deactivate_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.deactivate()
        repo.add(user)
