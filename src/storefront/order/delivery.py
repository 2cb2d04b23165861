"""Tracking and delivery for orders — commands and handler."""

from protean import handle
from protean.fields import DateTime, Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import SYSTEM_ACTOR, Order


@storefront.command(part_of="Order")
class AddTrackingNumber:
    order_id = Identifier(required=True)
    tracking_number = String(required=True, max_length=100)
    carrier = String(max_length=50)
    estimated_delivery = DateTime()


@storefront.command(part_of="Order")
class MarkOrderDelivered:
    order_id = Identifier(required=True)
    note = String(max_length=500)
    actor = String(max_length=100, default=SYSTEM_ACTOR)


@storefront.command_handler(part_of=Order)
class OrderDeliveryHandler:
    @handle(AddTrackingNumber)
    def add_tracking_number(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.add_tracking_number(
            command.tracking_number,
            carrier=command.carrier,
            estimated_delivery=command.estimated_delivery,
        )
        repo.add(order)

    @handle(MarkOrderDelivered)
    def mark_order_delivered(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.mark_delivered(note=command.note or "Order delivered", actor=command.actor)
        repo.add(order)
