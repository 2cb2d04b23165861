"""Integration tests for the /orders and /shipments endpoints."""

import pytest


@pytest.fixture()
def shipment(client, order):
    response = client.post(
        "/shipments",
        json={
            "order_id": order["id"],
            "carrier": "UPS",
            "shipping_method": "express",
            "package_details": {"weight": 1.5, "package_type": "box"},
        },
    )
    assert response.status_code == 201
    return response.json()["data"]


class TestOrderEndpoints:
    def test_lookup_by_number(self, client, order):
        response = client.get(f"/orders/number/{order['order_number']}")
        assert response.status_code == 200
        assert response.json()["data"]["id"] == order["id"]

    def test_unknown_number(self, client):
        assert client.get("/orders/number/ORD-0-NOPE").status_code == 404

    def test_status_update_appends_history(self, client, order):
        response = client.patch(f"/orders/{order['id']}/status", json={"status": "Confirmed", "actor": "admin-1"})
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["status"] == "Confirmed"
        assert len(data["status_history"]) == 2

    def test_unknown_status(self, client, order):
        response = client.patch(f"/orders/{order['id']}/status", json={"status": "Teleported"})
        assert response.status_code == 400

    def test_illegal_transition(self, client, order):
        client.patch(f"/orders/{order['id']}/status", json={"status": "Shipped"})
        response = client.patch(f"/orders/{order['id']}/status", json={"status": "Placed"})
        assert response.status_code == 409

    def test_cancel_shipped_order_conflicts(self, client, order):
        client.patch(f"/orders/{order['id']}/status", json={"status": "Shipped"})
        response = client.post(f"/orders/{order['id']}/cancel")
        assert response.status_code == 409
        assert client.get(f"/orders/{order['id']}").json()["data"]["status"] == "Shipped"

    def test_cancel_then_refund(self, client, order):
        response = client.post(f"/orders/{order['id']}/cancel", json={"reason": "Changed mind"})
        assert response.json()["data"]["cancellation_reason"] == "Changed mind"

        response = client.post(f"/orders/{order['id']}/refund", json={"amount": 50.0, "reason": "Partial"})
        data = response.json()["data"]
        assert data["status"] == "Refunded"
        assert data["refund_amount"] == 50.0

    def test_refund_above_total(self, client, order):
        client.post(f"/orders/{order['id']}/cancel")
        response = client.post(f"/orders/{order['id']}/refund", json={"amount": 1000.0})
        assert response.status_code == 400

    def test_tracking_and_fulfillment(self, client, order):
        client.patch(f"/orders/{order['id']}/status", json={"status": "Confirmed"})
        client.put(f"/orders/{order['id']}/fulfillment", json={"warehouse_id": "WH-1", "pick_list": ["v1"]})
        response = client.post(f"/orders/{order['id']}/tracking", json={"tracking_number": "1Z999", "carrier": "UPS"})
        data = response.json()["data"]
        assert data["status"] == "Shipped"
        assert data["shipping"]["tracking_number"] == "1Z999"
        assert data["fulfillment"]["warehouse_id"] == "WH-1"

    def test_payment_capture(self, client, order):
        response = client.post(f"/orders/{order['id']}/payment-capture", json={"transaction_id": "txn-2"})
        assert response.json()["data"]["payment"]["capture_attempts"] == 2

    def test_list_by_status(self, client, order):
        response = client.get("/orders", params={"status": "Placed"})
        assert response.json()["pagination"]["total_items"] == 1
        assert client.get("/orders", params={"status": "Cancelled"}).json()["data"] == []


class TestShipmentEndpoints:
    def test_created_shipment(self, shipment, order):
        assert shipment["status"] == "pending"
        assert shipment["order_number"] == order["order_number"]
        assert len(shipment["tracking_events"]) == 1
        assert shipment["package_details"]["package_type"] == "box"

    def test_lookup_by_tracking_number(self, client, shipment):
        response = client.get(f"/shipments/tracking/{shipment['tracking_number']}")
        assert response.json()["data"]["id"] == shipment["id"]
        assert client.get("/shipments/tracking/TRK-NOPE").status_code == 404

    def test_unknown_carrier(self, client, order):
        response = client.post("/shipments", json={"order_id": order["id"], "carrier": "Pigeon Post"})
        assert response.status_code == 400

    def test_tracking_event_sets_status(self, client, shipment):
        response = client.post(
            f"/shipments/{shipment['id']}/events",
            json={"status": "in_transit", "location": "Hub"},
        )
        data = response.json()["data"]
        assert data["status"] == "in_transit"
        assert len(data["tracking_events"]) == 2

    def test_delivery_marks_order_delivered(self, client, shipment, order):
        response = client.post(f"/shipments/{shipment['id']}/deliver", json={"delivery_location": "Front door"})
        assert response.status_code == 200
        assert response.json()["data"]["status"] == "delivered"

        order_data = client.get(f"/orders/{order['id']}").json()["data"]
        assert order_data["status"] == "Delivered"
        assert len(order_data["status_history"]) == 2

    def test_delivered_event_marks_order_delivered(self, client, shipment, order):
        response = client.post(f"/shipments/{shipment['id']}/events", json={"status": "delivered"})
        assert response.status_code == 200
        assert response.json()["data"]["status"] == "delivered"
        assert client.get(f"/orders/{order['id']}").json()["data"]["status"] == "Delivered"

    def test_second_delivery_conflicts(self, client, shipment):
        client.post(f"/shipments/{shipment['id']}/deliver")
        assert client.post(f"/shipments/{shipment['id']}/deliver").status_code == 409

    def test_cancelled_order_cannot_ship(self, client, order):
        client.post(f"/orders/{order['id']}/cancel")
        response = client.post("/shipments", json={"order_id": order["id"], "carrier": "UPS"})
        assert response.status_code == 409

    def test_list_by_order(self, client, shipment, order):
        response = client.get("/shipments", params={"order_id": order["id"]})
        assert [s["id"] for s in response.json()["data"]] == [shipment["id"]]
