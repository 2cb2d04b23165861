"""Shipment delivery — command and handler.

Delivering a shipment also advances its order to Delivered. Both aggregates
are saved in the handler's Unit of Work, so either both change or neither
does.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import SYSTEM_ACTOR, Order, OrderStatus
from storefront.shipment.shipment import Shipment

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Shipment")
class MarkShipmentDelivered:
    shipment_id = Identifier(required=True)
    delivery_location = String(max_length=200)
    notes = Text()


def deliver_shipment(shipment_id, delivery_location=None, notes=None):
    """Mark the shipment delivered and advance its order to Delivered."""
    shipment_repo = current_domain.repository_for(Shipment)
    shipment = shipment_repo.get(shipment_id)
    shipment.mark_delivered(delivery_location=delivery_location, notes=notes)

    order_repo = current_domain.repository_for(Order)
    order = order_repo.get(shipment.order_id)
    # An order shipped in several parcels is delivered by the first one
    if order.status != OrderStatus.DELIVERED.value:
        order.mark_delivered(note="Package delivered", actor=SYSTEM_ACTOR)

    shipment_repo.add(shipment)
    order_repo.add(order)

    logger.info(
        "Shipment delivered",
        shipment_number=shipment.shipment_number,
        tracking_number=shipment.tracking_number,
        order_number=order.order_number,
        order_status=order.status,
    )


@storefront.command_handler(part_of=Shipment)
class ShipmentDeliveryHandler:
    @handle(MarkShipmentDelivered)
    def mark_delivered(self, command):
        deliver_shipment(command.shipment_id, command.delivery_location, command.notes)
