"""Shipment aggregate — a physical parcel sent out for an order.

An order may ship in several parcels. Each shipment snapshots the order's
number, address and items when it is created and from then on keeps its own
append-only tracking log. ``status`` always mirrors the latest tracking event.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import InvalidOperationError, ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
    ValueObject,
)

from storefront.domain import storefront
from storefront.shared.address import AddressSnapshot
from storefront.shared.dimensions import Dimensions
from storefront.shared.references import generate_reference, generate_tracking_number
from storefront.shipment.events import (
    ShipmentCreated,
    ShipmentDeactivated,
    ShipmentDelivered,
    TrackingEventAdded,
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class ShipmentStatus(Enum):
    PENDING = "pending"
    PICKED_UP = "picked_up"
    IN_TRANSIT = "in_transit"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    EXCEPTION = "exception"
    RETURNED = "returned"


class Carrier(Enum):
    UPS = "UPS"
    FEDEX = "FedEx"
    DHL = "DHL"
    USPS = "USPS"
    AMAZON_LOGISTICS = "Amazon Logistics"
    OTHER = "Other"


class PackageType(Enum):
    ENVELOPE = "envelope"
    PACKAGE = "package"
    BOX = "box"
    PALLET = "pallet"


class DeliveryMethod(Enum):
    GROUND = "ground"
    EXPRESS = "express"
    OVERNIGHT = "overnight"
    INTERNATIONAL = "international"


# Order statuses that can no longer be shipped
_UNSHIPPABLE_ORDER_STATES = {"Cancelled", "Refunded", "Returned", "Return_Requested"}


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Shipment")
class PackageDetails:
    """Physical dimensions and weight of the parcel."""

    weight = Float(default=0.0, min_value=0.0)
    length = Float(default=0.0, min_value=0.0)
    width = Float(default=0.0, min_value=0.0)
    height = Float(default=0.0, min_value=0.0)
    package_type = String(choices=PackageType, default=PackageType.PACKAGE.value)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Shipment")
class ShipmentItem:
    product_id = Identifier(required=True)
    variant_id = Identifier()
    product_name = String(max_length=255)
    quantity = Integer(required=True, min_value=1)
    weight = Float(default=0.0, min_value=0.0)
    dimensions = ValueObject(Dimensions)


@storefront.entity(part_of="Shipment")
class TrackingEvent:
    """A carrier scan or status report."""

    sequence = Integer(required=True, min_value=1)
    status = String(choices=ShipmentStatus, required=True)
    location = String(max_length=200)
    description = String(max_length=500)
    details = Text()
    occurred_at = DateTime(required=True)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Shipment:
    shipment_number = String(required=True, max_length=50, unique=True)
    order_id = Identifier(required=True)
    order_number = String(required=True, max_length=50)
    carrier = String(choices=Carrier, required=True)
    tracking_number = String(required=True, max_length=100, unique=True)
    status = String(choices=ShipmentStatus, default=ShipmentStatus.PENDING.value)
    shipping_address = ValueObject(AddressSnapshot)
    items = HasMany(ShipmentItem)
    package_details = ValueObject(PackageDetails)
    shipping_method = String(choices=DeliveryMethod, default=DeliveryMethod.GROUND.value)
    cost = Float(default=0.0, min_value=0.0)
    estimated_delivery = DateTime()
    actual_delivery = DateTime()
    tracking_events = HasMany(TrackingEvent)
    notes = Text()
    is_active = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def status_must_match_latest_event(self):
        latest = self.latest_event
        if latest is not None and latest.status != self.status:
            raise ValidationError({"status": ["Status must match the latest tracking event"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        order,
        carrier,
        shipping_method=None,
        cost=0.0,
        estimated_delivery=None,
        package_details=None,
        notes=None,
    ):
        """Open a shipment for ``order``, copying its address and items."""
        if order.status in _UNSHIPPABLE_ORDER_STATES:
            raise InvalidOperationError(f"Cannot ship order {order.order_number} in {order.status} state")

        now = datetime.now(UTC)
        shipment = cls(
            shipment_number=generate_reference("SHP"),
            order_id=str(order.id),
            order_number=order.order_number,
            carrier=carrier,
            tracking_number=generate_tracking_number(),
            status=ShipmentStatus.PENDING.value,
            shipping_address=order.shipping_address,
            items=[
                ShipmentItem(
                    product_id=item.product_id,
                    variant_id=item.variant_id,
                    product_name=item.product_name,
                    quantity=item.quantity,
                    weight=0.0,
                    dimensions=Dimensions(),
                )
                for item in order.items
            ],
            package_details=package_details or PackageDetails(),
            shipping_method=shipping_method or DeliveryMethod.GROUND.value,
            cost=cost or 0.0,
            estimated_delivery=estimated_delivery,
            tracking_events=[
                TrackingEvent(
                    sequence=1,
                    status=ShipmentStatus.PENDING.value,
                    description="Shipment created",
                    occurred_at=now,
                )
            ],
            notes=notes,
            created_at=now,
            updated_at=now,
        )
        shipment.raise_(
            ShipmentCreated(
                shipment_id=str(shipment.id),
                shipment_number=shipment.shipment_number,
                order_id=str(order.id),
                carrier=carrier,
                tracking_number=shipment.tracking_number,
                created_at=now,
            )
        )
        return shipment

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------
    @property
    def latest_event(self):
        if not self.tracking_events:
            return None
        return max(self.tracking_events, key=lambda event: event.sequence)

    @property
    def is_delivered(self) -> bool:
        return self.actual_delivery is not None

    def _assert_active(self):
        if not self.is_active:
            raise InvalidOperationError(f"Shipment {self.shipment_number} is no longer active")

    # -------------------------------------------------------------------
    # Tracking
    # -------------------------------------------------------------------
    def add_tracking_event(self, status, location=None, description=None, details=None):
        """Append a tracking event and move the shipment to its status.

        A delivered status is only recorded through `mark_delivered`, which
        also stamps the delivery time.
        """
        self._assert_active()
        try:
            ShipmentStatus(status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown shipment status: {status}"]}) from None
        if status == ShipmentStatus.DELIVERED.value:
            raise ValidationError({"status": ["Delivered status is recorded by marking the shipment delivered"]})

        return self._append_event(status, location, description, details)

    def _append_event(self, status, location, description, details):
        now = datetime.now(UTC)
        event = TrackingEvent(
            sequence=len(self.tracking_events) + 1,
            status=status,
            location=location,
            description=description,
            details=details,
            occurred_at=now,
        )
        with atomic_change(self):
            self.add_tracking_events(event)
            self.status = status
            self.updated_at = now

        self.raise_(
            TrackingEventAdded(
                shipment_id=str(self.id),
                tracking_number=self.tracking_number,
                status=status,
                location=location,
                description=description,
                occurred_at=now,
            )
        )
        return event

    def mark_delivered(self, delivery_location=None, notes=None):
        if self.is_delivered:
            raise InvalidOperationError(f"Shipment {self.shipment_number} has already been delivered")

        self._assert_active()
        self._append_event(ShipmentStatus.DELIVERED.value, delivery_location, "Package delivered", notes)
        now = datetime.now(UTC)
        self.actual_delivery = now
        self.updated_at = now

        self.raise_(
            ShipmentDelivered(
                shipment_id=str(self.id),
                order_id=str(self.order_id),
                tracking_number=self.tracking_number,
                delivered_at=now,
            )
        )

    def deactivate(self):
        self._assert_active()

        now = datetime.now(UTC)
        self.is_active = False
        self.updated_at = now
        self.raise_(ShipmentDeactivated(shipment_id=str(self.id), deactivated_at=now))
