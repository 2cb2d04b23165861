"""Tests for the Shipment aggregate and its tracking log."""

import pytest
from protean.exceptions import InvalidOperationError, ValidationError
from storefront.shipment.events import (
    ShipmentCreated,
    ShipmentDeactivated,
    ShipmentDelivered,
    TrackingEventAdded,
)
from storefront.shipment.shipment import PackageDetails, Shipment, ShipmentStatus


@pytest.fixture()
def shipment(order):
    shipment = Shipment.create(
        order,
        carrier="UPS",
        shipping_method="express",
        cost=12.5,
        package_details=PackageDetails(weight=1.2, length=30, width=20, height=10, package_type="box"),
    )
    shipment._events.clear()
    return shipment


class TestShipmentCreation:
    def test_snapshots_order(self, shipment, order):
        assert shipment.shipment_number.startswith("SHP-")
        assert shipment.tracking_number.startswith("TRK")
        assert str(shipment.order_id) == str(order.id)
        assert shipment.order_number == order.order_number
        assert shipment.shipping_address.city == "London"
        assert len(shipment.items) == 1
        assert shipment.items[0].quantity == 2
        assert shipment.package_details.package_type == "box"

    def test_starts_pending_with_one_event(self, shipment):
        assert shipment.status == ShipmentStatus.PENDING.value
        assert len(shipment.tracking_events) == 1
        assert shipment.latest_event.description == "Shipment created"

    def test_raises_shipment_created(self, order):
        shipment = Shipment.create(order, carrier="DHL")
        event = shipment._events[-1]
        assert isinstance(event, ShipmentCreated)
        assert event.tracking_number == shipment.tracking_number

    def test_defaults(self, order):
        shipment = Shipment.create(order, carrier="FedEx")
        assert shipment.shipping_method == "ground"
        assert shipment.cost == 0.0
        assert shipment.is_active is True

    def test_rejects_unknown_carrier(self, order):
        with pytest.raises(ValidationError):
            Shipment.create(order, carrier="Pigeon Post")

    def test_cancelled_order_cannot_ship(self, order):
        order.cancel()
        with pytest.raises(InvalidOperationError):
            Shipment.create(order, carrier="UPS")


class TestTrackingEvents:
    def test_status_follows_latest_event(self, shipment):
        shipment.add_tracking_event("picked_up", location="Depot")
        shipment.add_tracking_event("in_transit", location="Hub")
        assert shipment.status == "in_transit"
        assert shipment.latest_event.sequence == 3
        assert shipment.latest_event.location == "Hub"
        assert isinstance(shipment._events[-1], TrackingEventAdded)

    def test_exception_events_also_set_status(self, shipment):
        shipment.add_tracking_event("exception", description="Address not found")
        assert shipment.status == "exception"

    def test_unknown_status(self, shipment):
        with pytest.raises(ValidationError):
            shipment.add_tracking_event("lost_in_space")
        assert len(shipment.tracking_events) == 1

    def test_delivered_status_needs_mark_delivered(self, shipment):
        with pytest.raises(ValidationError):
            shipment.add_tracking_event("delivered")
        assert shipment.status == "pending"
        assert not shipment.is_delivered

    def test_inactive_shipment_rejects_events(self, shipment):
        shipment.deactivate()
        assert isinstance(shipment._events[-1], ShipmentDeactivated)
        with pytest.raises(InvalidOperationError):
            shipment.add_tracking_event("in_transit")


class TestShipmentDelivery:
    def test_mark_delivered(self, shipment):
        shipment.mark_delivered(delivery_location="Front door", notes="Left with neighbour")
        assert shipment.is_delivered
        assert shipment.actual_delivery is not None
        assert shipment.latest_event.description == "Package delivered"
        assert shipment.latest_event.location == "Front door"
        assert isinstance(shipment._events[-1], ShipmentDelivered)

    def test_mark_delivered_twice(self, shipment):
        shipment.mark_delivered()
        with pytest.raises(InvalidOperationError):
            shipment.mark_delivered()
        assert len(shipment.tracking_events) == 2
