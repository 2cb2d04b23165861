"""Shipment tracking — commands and handler.

Carrier scans arrive as tracking events; each one is appended to the
shipment's log and becomes its current status. A delivered scan also
advances the order.
"""

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.shipment.delivery import deliver_shipment
from storefront.shipment.shipment import Shipment, ShipmentStatus


@storefront.command(part_of="Shipment")
class AddTrackingEvent:
    shipment_id = Identifier(required=True)
    status = String(choices=ShipmentStatus, required=True)
    location = String(max_length=200)
    description = String(max_length=500)
    details = Text()


@storefront.command(part_of="Shipment")
class DeactivateShipment:
    shipment_id = Identifier(required=True)


@storefront.command_handler(part_of=Shipment)
class TrackingHandler:
    @handle(AddTrackingEvent)
    def add_tracking_event(self, command):
        # A delivered scan takes the same path as an explicit delivery
        if command.status == ShipmentStatus.DELIVERED.value:
            deliver_shipment(command.shipment_id, command.location, command.details)
            return

        repo = current_domain.repository_for(Shipment)
        shipment = repo.get(command.shipment_id)
        shipment.add_tracking_event(
            command.status,
            location=command.location,
            description=command.description,
            details=command.details,
        )
        repo.add(shipment)

    @handle(DeactivateShipment)
    def deactivate_shipment(self, command):
        repo = current_domain.repository_for(Shipment)
        shipment = repo.get(command.shipment_id)
        shipment.deactivate()
        repo.add(shipment)
