"""Shipment creation — command and handler."""

import structlog
from protean import handle
from protean.fields import DateTime, Float, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order
from storefront.shipment.shipment import Carrier, DeliveryMethod, PackageDetails, PackageType, Shipment

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Shipment")
class CreateShipment:
    order_id = Identifier(required=True)
    carrier = String(choices=Carrier, required=True)
    shipping_method = String(choices=DeliveryMethod)
    cost = Float(min_value=0.0, default=0.0)
    estimated_delivery = DateTime()
    package_weight = Float(min_value=0.0)
    package_length = Float(min_value=0.0)
    package_width = Float(min_value=0.0)
    package_height = Float(min_value=0.0)
    package_type = String(choices=PackageType)
    notes = Text()


@storefront.command_handler(part_of=Shipment)
class CreateShipmentHandler:
    @handle(CreateShipment)
    def create_shipment(self, command):
        order = current_domain.repository_for(Order).get(command.order_id)

        package_details = PackageDetails(
            weight=command.package_weight or 0.0,
            length=command.package_length or 0.0,
            width=command.package_width or 0.0,
            height=command.package_height or 0.0,
            package_type=command.package_type or PackageType.PACKAGE.value,
        )
        shipment = Shipment.create(
            order,
            carrier=command.carrier,
            shipping_method=command.shipping_method,
            cost=command.cost,
            estimated_delivery=command.estimated_delivery,
            package_details=package_details,
            notes=command.notes,
        )
        current_domain.repository_for(Shipment).add(shipment)

        logger.info(
            "Shipment created",
            shipment_number=shipment.shipment_number,
            order_number=order.order_number,
            tracking_number=shipment.tracking_number,
        )
        return str(shipment.id)
