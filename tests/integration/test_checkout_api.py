"""Integration tests for the /checkouts endpoints."""

from datetime import UTC, datetime, timedelta


class TestCheckoutEndpoints:
    def test_create_checkout(self, client, checkout, user):
        assert checkout["status"] == "pending"
        assert checkout["total"] == 200.0
        assert checkout["checkout_number"].startswith("CHK-")
        assert checkout["shipping_address"]["city"] == "London"
        assert checkout["payment"]["method_type"] == "credit_card"

    def test_empty_cart_cannot_check_out(self, client, user):
        cart = client.post("/carts", json={"user_id": user["id"]}).json()["data"]
        response = client.post("/checkouts", json={"user_id": user["id"], "cart_id": cart["id"]})
        assert response.status_code == 400

    def test_complete_checkout(self, client, checkout, cart):
        response = client.post(f"/checkouts/{checkout['id']}/complete", json={"transaction_id": "txn-9"})
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["checkout"]["status"] == "completed"
        assert data["order"]["status"] == "Placed"
        assert len(data["order"]["status_history"]) == 1
        assert data["order"]["pricing"]["grand_total"] == 200.0

        assert client.get(f"/carts/{cart['id']}").json()["data"]["items"] == []

    def test_complete_twice_conflicts(self, client, checkout):
        client.post(f"/checkouts/{checkout['id']}/complete", json={})
        response = client.post(f"/checkouts/{checkout['id']}/complete", json={})
        assert response.status_code == 409
        assert response.json()["success"] is False

    def test_fail_checkout(self, client, checkout):
        response = client.post(f"/checkouts/{checkout['id']}/fail", json={"reason": "Card declined"})
        assert response.json()["data"]["status"] == "failed"

    def test_cancel_without_body(self, client, checkout):
        response = client.post(f"/checkouts/{checkout['id']}/cancel")
        assert response.status_code == 200
        assert response.json()["data"]["notes"] == "Checkout cancelled by user"

    def test_list_by_status(self, client, checkout):
        response = client.get("/checkouts", params={"status": "pending"})
        assert [c["id"] for c in response.json()["data"]] == [checkout["id"]]


class TestCleanupEndpoint:
    def test_cleanup_without_body(self, client, checkout):
        response = client.post("/checkouts/maintenance/cleanup-expired")
        assert response.status_code == 200
        assert response.json()["data"] == {"deleted_count": 0}

    def test_cleanup_removes_expired(self, client, checkout):
        as_of = (datetime.now(UTC) + timedelta(minutes=30)).isoformat()
        response = client.post("/checkouts/maintenance/cleanup-expired", json={"as_of": as_of})
        assert response.json()["data"] == {"deleted_count": 1}
        assert client.get(f"/checkouts/{checkout['id']}").status_code == 404
