"""Purchase journey load test scenario.

One stateful SequentialTaskSet that walks a shopper through the whole
lifecycle: register, add an address and card, fill a cart, check out,
then ship and deliver the order. Steps execute in order and each depends
on the previous one succeeding.
"""

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import (
    address_data,
    cart_item_data,
    checkout_data,
    completion_data,
    payment_method_data,
    product_data,
    shipment_data,
    tracking_event_data,
    user_data,
)
from loadtests.helpers.response import data_of, extract_error_detail
from loadtests.helpers.state import PurchaseState


class PurchaseJourney(SequentialTaskSet):
    """Register -> Address -> Card -> Product -> Cart -> Checkout -> Complete ->
    Ship -> Track -> Deliver.

    Generates UserRegistered, AddressAdded, PaymentMethodAdded, ProductCreated,
    CartCreated, CartItemAdded, CheckoutCreated, CheckoutCompleted,
    OrderPlaced, CartCleared, ShipmentCreated, TrackingEventAdded,
    ShipmentDelivered and OrderDelivered.
    """

    def on_start(self):
        self.state = PurchaseState()

    def _fail(self, resp, step):
        resp.failure(f"{step} failed: {resp.status_code}: {extract_error_detail(resp)}")
        self.interrupt()

    @task
    def register_user(self):
        with self.client.post("/users", json=user_data(), catch_response=True, name="POST /users") as resp:
            if resp.status_code == 201:
                self.state.user_id = data_of(resp)["id"]
            else:
                self._fail(resp, "Register user")

    @task
    def add_address(self):
        with self.client.post(
            f"/users/{self.state.user_id}/addresses",
            json=address_data(is_default=True),
            catch_response=True,
            name="POST /users/{id}/addresses",
        ) as resp:
            if resp.status_code != 201:
                self._fail(resp, "Add address")

    @task
    def add_payment_method(self):
        with self.client.post(
            f"/users/{self.state.user_id}/payment-methods",
            json=payment_method_data(),
            catch_response=True,
            name="POST /users/{id}/payment-methods",
        ) as resp:
            if resp.status_code != 201:
                self._fail(resp, "Add payment method")

    @task
    def create_product(self):
        with self.client.post("/products", json=product_data(), catch_response=True, name="POST /products") as resp:
            if resp.status_code == 201:
                product = data_of(resp)
                self.state.product_id = product["id"]
                self.state.variant_id = product["variants"][0]["id"]
            else:
                self._fail(resp, "Create product")

    @task
    def create_cart(self):
        with self.client.post(
            "/carts",
            json={"user_id": self.state.user_id},
            catch_response=True,
            name="POST /carts",
        ) as resp:
            if resp.status_code == 201:
                self.state.cart_id = data_of(resp)["id"]
            else:
                self._fail(resp, "Create cart")

    @task
    def add_cart_item(self):
        with self.client.post(
            f"/carts/{self.state.cart_id}/items",
            json=cart_item_data(self.state.product_id, self.state.variant_id),
            catch_response=True,
            name="POST /carts/{id}/items",
        ) as resp:
            if resp.status_code != 200:
                self._fail(resp, "Add cart item")

    @task
    def create_checkout(self):
        with self.client.post(
            "/checkouts",
            json=checkout_data(self.state.user_id, self.state.cart_id),
            catch_response=True,
            name="POST /checkouts",
        ) as resp:
            if resp.status_code == 201:
                self.state.checkout_id = data_of(resp)["id"]
            else:
                self._fail(resp, "Create checkout")

    @task
    def complete_checkout(self):
        with self.client.post(
            f"/checkouts/{self.state.checkout_id}/complete",
            json=completion_data(),
            catch_response=True,
            name="POST /checkouts/{id}/complete",
        ) as resp:
            if resp.status_code == 200:
                self.state.order_id = data_of(resp)["order"]["id"]
            else:
                self._fail(resp, "Complete checkout")

    @task
    def confirm_order(self):
        with self.client.patch(
            f"/orders/{self.state.order_id}/status",
            json={"status": "Confirmed", "note": "Payment verified"},
            catch_response=True,
            name="PATCH /orders/{id}/status",
        ) as resp:
            if resp.status_code == 200:
                self.state.order_status = "Confirmed"
            else:
                self._fail(resp, "Confirm order")

    @task
    def create_shipment(self):
        with self.client.post(
            "/shipments",
            json=shipment_data(self.state.order_id),
            catch_response=True,
            name="POST /shipments",
        ) as resp:
            if resp.status_code == 201:
                self.state.shipment_id = data_of(resp)["id"]
            else:
                self._fail(resp, "Create shipment")

    @task
    def track_in_transit(self):
        with self.client.post(
            f"/shipments/{self.state.shipment_id}/events",
            json=tracking_event_data("in_transit"),
            catch_response=True,
            name="POST /shipments/{id}/events",
        ) as resp:
            if resp.status_code != 200:
                self._fail(resp, "Add tracking event")

    @task
    def deliver_shipment(self):
        with self.client.post(
            f"/shipments/{self.state.shipment_id}/deliver",
            json={"delivery_location": "Front porch"},
            catch_response=True,
            name="POST /shipments/{id}/deliver",
        ) as resp:
            if resp.status_code == 200:
                self.state.order_status = "Delivered"
            else:
                self._fail(resp, "Deliver shipment")

    @task
    def done(self):
        self.interrupt()


class PurchaseUser(HttpUser):
    """Shopper running the full purchase journey end to end."""

    tasks = [PurchaseJourney]
    wait_time = between(1, 3)
