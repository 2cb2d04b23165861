"""Domain events for the Shipment aggregate."""

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Shipment")
class ShipmentCreated:
    __version__ = 1

    shipment_id = Identifier(required=True)
    shipment_number = String(required=True)
    order_id = Identifier(required=True)
    carrier = String(required=True)
    tracking_number = String(required=True)
    created_at = DateTime(required=True)


@storefront.event(part_of="Shipment")
class TrackingEventAdded:
    """A carrier scan was appended to the shipment's tracking log."""

    __version__ = 1

    shipment_id = Identifier(required=True)
    tracking_number = String(required=True)
    status = String(required=True)
    location = String()
    description = String()
    occurred_at = DateTime(required=True)


@storefront.event(part_of="Shipment")
class ShipmentDelivered:
    __version__ = 1

    shipment_id = Identifier(required=True)
    order_id = Identifier(required=True)
    tracking_number = String(required=True)
    delivered_at = DateTime(required=True)


@storefront.event(part_of="Shipment")
class ShipmentDeactivated:
    __version__ = 1

    shipment_id = Identifier(required=True)
    deactivated_at = DateTime(required=True)
