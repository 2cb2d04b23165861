"""Stored payment methods — commands and handler."""

from protean import handle
from protean.fields import Boolean, Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.user.user import User


@storefront.command(part_of="User")
class AddPaymentMethod:
    user_id = Identifier(required=True)
    method_type = String(required=True, max_length=20)
    provider = String(max_length=50)
    last4 = String(max_length=4)
    expiry_month = Integer(min_value=1, max_value=12)
    expiry_year = Integer()
    holder_name = String(max_length=255)
    is_default = Boolean(default=False)


@storefront.command(part_of="User")
class RemovePaymentMethod:
    user_id = Identifier(required=True)
    payment_method_id = Identifier(required=True)


@storefront.command(part_of="User")
class SetDefaultPaymentMethod:
    user_id = Identifier(required=True)
    payment_method_id = Identifier(required=True)


@storefront.command_handler(part_of=User)
class ManagePaymentMethodsHandler:
    @handle(AddPaymentMethod)
    def add_payment_method(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        payment_method = user.add_payment_method(
            method_type=command.method_type,
            provider=command.provider,
            last4=command.last4,
            expiry_month=command.expiry_month,
            expiry_year=command.expiry_year,
            holder_name=command.holder_name,
            is_default=bool(command.is_default),
        )
        repo.add(user)
        return str(payment_method.id)

    @handle(RemovePaymentMethod)
    def remove_payment_method(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.remove_payment_method(command.payment_method_id)
        repo.add(user)

    @handle(SetDefaultPaymentMethod)
    def set_default_payment_method(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.set_default_payment_method(command.payment_method_id)
        repo.add(user)
