"""Fulfillment and payment bookkeeping on orders."""

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order, PackingState


@storefront.command(part_of="Order")
class UpdateFulfillment:
    order_id = Identifier(required=True)
    warehouse_id = String(max_length=50)
    pick_list = Text()  # JSON array of variant ids
    packing_state = String(choices=PackingState)


@storefront.command(part_of="Order")
class RecordPaymentCapture:
    order_id = Identifier(required=True)
    transaction_id = String(required=True, max_length=255)


@storefront.command_handler(part_of=Order)
class OrderFulfillmentHandler:
    @handle(UpdateFulfillment)
    def update_fulfillment(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.update_fulfillment(
            warehouse_id=command.warehouse_id,
            pick_list=command.pick_list,
            packing_state=command.packing_state,
        )
        repo.add(order)

    @handle(RecordPaymentCapture)
    def record_payment_capture(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.record_payment_capture(command.transaction_id)
        repo.add(order)
