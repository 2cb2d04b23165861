"""Loyalty points — commands and handler."""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.user.user import User


@storefront.command(part_of="User")
class AddLoyaltyPoints:
    user_id = Identifier(required=True)
    points = Integer(required=True, min_value=1)


@storefront.command(part_of="User")
class RedeemLoyaltyPoints:
    user_id = Identifier(required=True)
    points = Integer(required=True, min_value=1)


@storefront.command_handler(part_of=User)
class ManageLoyaltyHandler:
    @handle(AddLoyaltyPoints)
    def add_loyalty_points(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.add_loyalty_points(command.points)
        repo.add(user)

    @handle(RedeemLoyaltyPoints)
    def redeem_loyalty_points(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.redeem_loyalty_points(command.points)
        repo.add(user)
