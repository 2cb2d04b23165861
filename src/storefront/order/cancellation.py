"""Order cancellation and refunds — commands and handler."""

import structlog
from protean import handle
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import SYSTEM_ACTOR, Order

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    reason = String(max_length=500)
    actor = String(max_length=100, default=SYSTEM_ACTOR)


@storefront.command(part_of="Order")
class ProcessRefund:
    order_id = Identifier(required=True)
    amount = Float(min_value=0.0)
    reason = String(max_length=500)


@storefront.command_handler(part_of=Order)
class CancellationHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.cancel(reason=command.reason, actor=command.actor)
        repo.add(order)

        logger.info("Order cancelled", order_number=order.order_number, reason=order.cancellation_reason)

    @handle(ProcessRefund)
    def process_refund(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.process_refund(amount=command.amount, reason=command.reason)
        repo.add(order)

        logger.info(
            "Order refunded",
            order_number=order.order_number,
            refund_amount=order.refund_amount,
        )
