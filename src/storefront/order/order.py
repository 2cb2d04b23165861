"""Order aggregate — the durable record of a placed purchase.

Orders are created only from completed checkouts and are never deleted.
Every status change goes through the transition table below and appends one
entry to ``status_history``; entries are never rewritten or removed.

State Machine:
    PLACED → CONFIRMED → PICKED → PACKED → SHIPPED → IN_TRANSIT →
    OUT_FOR_DELIVERY → DELIVERED          (skipping ahead is allowed)
    DELIVERED → RETURN_REQUESTED → RETURNED → REFUNDED
    CANCELLED (from PLACED, CONFIRMED) → REFUNDED
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import InvalidOperationError, ValidationError
from protean.fields import (
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
from storefront.order.events import (
    OrderCancelled,
    OrderDelivered,
    OrderPlaced,
    OrderRefunded,
    OrderStatusChanged,
    OrderTrackingAdded,
    PaymentCaptured,
)
from storefront.shared.address import AddressSnapshot
from storefront.shared.references import generate_reference
from storefront.shared.values import replace_value

SYSTEM_ACTOR = "system"


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PLACED = "Placed"
    CONFIRMED = "Confirmed"
    PICKED = "Picked"
    PACKED = "Packed"
    SHIPPED = "Shipped"
    IN_TRANSIT = "In_Transit"
    OUT_FOR_DELIVERY = "Out_For_Delivery"
    DELIVERED = "Delivered"
    RETURN_REQUESTED = "Return_Requested"
    RETURNED = "Returned"
    REFUNDED = "Refunded"
    CANCELLED = "Cancelled"


class PackingState(Enum):
    NOT_STARTED = "Not_Started"
    IN_PROGRESS = "In_Progress"
    PACKED = "Packed"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PLACED: {
        OrderStatus.CONFIRMED,
        OrderStatus.PICKED,
        OrderStatus.PACKED,
        OrderStatus.SHIPPED,
        OrderStatus.IN_TRANSIT,
        OrderStatus.OUT_FOR_DELIVERY,
        OrderStatus.DELIVERED,
        OrderStatus.CANCELLED,
    },
    OrderStatus.CONFIRMED: {
        OrderStatus.PICKED,
        OrderStatus.PACKED,
        OrderStatus.SHIPPED,
        OrderStatus.IN_TRANSIT,
        OrderStatus.OUT_FOR_DELIVERY,
        OrderStatus.DELIVERED,
        OrderStatus.CANCELLED,
    },
    OrderStatus.PICKED: {
        OrderStatus.PACKED,
        OrderStatus.SHIPPED,
        OrderStatus.IN_TRANSIT,
        OrderStatus.OUT_FOR_DELIVERY,
        OrderStatus.DELIVERED,
    },
    OrderStatus.PACKED: {
        OrderStatus.SHIPPED,
        OrderStatus.IN_TRANSIT,
        OrderStatus.OUT_FOR_DELIVERY,
        OrderStatus.DELIVERED,
    },
    OrderStatus.SHIPPED: {OrderStatus.IN_TRANSIT, OrderStatus.OUT_FOR_DELIVERY, OrderStatus.DELIVERED},
    OrderStatus.IN_TRANSIT: {OrderStatus.OUT_FOR_DELIVERY, OrderStatus.DELIVERED},
    OrderStatus.OUT_FOR_DELIVERY: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: {OrderStatus.RETURN_REQUESTED},
    OrderStatus.RETURN_REQUESTED: {OrderStatus.RETURNED},
    OrderStatus.RETURNED: {OrderStatus.REFUNDED},
    OrderStatus.CANCELLED: {OrderStatus.REFUNDED},
    OrderStatus.REFUNDED: set(),  # Terminal
}

# States from which a tracking number moves the order to SHIPPED
_SHIPPABLE_STATES = {OrderStatus.CONFIRMED, OrderStatus.PICKED, OrderStatus.PACKED}

# States in which an order no longer accepts fulfillment data
_CLOSED_STATES = {OrderStatus.CANCELLED, OrderStatus.REFUNDED, OrderStatus.RETURNED}


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    return target in _VALID_TRANSITIONS.get(current, set())


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Order")
class OrderPricing:
    """Financial summary of an order, locked at checkout."""

    subtotal = Float(default=0.0)
    discount_total = Float(default=0.0)
    tax_total = Float(default=0.0)
    shipping_cost = Float(default=0.0)
    grand_total = Float(default=0.0)
    currency = String(max_length=3, default="USD")


@storefront.value_object(part_of="Order")
class PaymentInfo:
    method = String(max_length=20)
    gateway = String(max_length=50)
    amount = Float(default=0.0)
    status = String(max_length=20)
    transaction_id = String(max_length=255)
    authorized_at = DateTime()
    captured_at = DateTime()
    capture_attempts = Integer(default=0, min_value=0)


@storefront.value_object(part_of="Order")
class ShippingDetails:
    address_id = Identifier()
    method_id = String(max_length=50)
    cost = Float(default=0.0)
    carrier = String(max_length=50)
    tracking_number = String(max_length=100)
    estimated_delivery = DateTime()
    actual_delivery = DateTime()


@storefront.value_object(part_of="Order")
class FulfillmentInfo:
    warehouse_id = String(max_length=50)
    pick_list = Text()  # JSON array of variant ids
    packing_state = String(choices=PackingState, default=PackingState.NOT_STARTED.value)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    variant_id = Identifier(required=True)
    product_name = String(max_length=255)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)
    tax_amount = Float(default=0.0)
    line_total = Float(default=0.0)


@storefront.entity(part_of="Order")
class StatusChange:
    """One entry in the order's append-only status history."""

    sequence = Integer(required=True, min_value=1)
    status = String(choices=OrderStatus, required=True)
    changed_at = DateTime(required=True)
    actor = String(max_length=100, default=SYSTEM_ACTOR)
    note = String(max_length=500)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    order_number = String(required=True, max_length=50, unique=True)
    user_id = Identifier(required=True)
    checkout_id = Identifier()
    status = String(choices=OrderStatus, default=OrderStatus.PLACED.value)
    status_history = HasMany(StatusChange)
    items = HasMany(OrderItem)
    shipping_address = ValueObject(AddressSnapshot)
    billing_address = ValueObject(AddressSnapshot)
    pricing = ValueObject(OrderPricing)
    payment = ValueObject(PaymentInfo)
    shipping = ValueObject(ShippingDetails)
    fulfillment = ValueObject(FulfillmentInfo)
    notes = Text()
    metadata = Text()  # JSON object
    cancellation_reason = String(max_length=500)
    refund_amount = Float(min_value=0.0)
    refund_reason = String(max_length=500)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def history_must_be_sequential(self):
        sequences = sorted(entry.sequence for entry in self.status_history)
        if sequences != list(range(1, len(sequences) + 1)):
            raise ValidationError({"status_history": ["Status history must be an unbroken sequence"]})

    @invariant.post
    def status_must_match_latest_history_entry(self):
        latest = self.latest_status_change
        if latest is not None and latest.status != self.status:
            raise ValidationError({"status": ["Status must match the latest status history entry"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place_from_checkout(cls, checkout):
        """Create a new order from a completed checkout's snapshot."""
        now = datetime.now(UTC)
        note = f"Order created from checkout {checkout.checkout_number}"

        payment = checkout.payment
        shipping_method = checkout.shipping_method

        order = cls(
            order_number=generate_reference("ORD"),
            user_id=checkout.user_id,
            checkout_id=str(checkout.id),
            status=OrderStatus.PLACED.value,
            status_history=[
                StatusChange(
                    sequence=1,
                    status=OrderStatus.PLACED.value,
                    changed_at=now,
                    actor=SYSTEM_ACTOR,
                    note=note,
                )
            ],
            items=[
                OrderItem(
                    product_id=item.product_id,
                    variant_id=item.variant_id,
                    product_name=item.product_name,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    line_total=item.line_total,
                )
                for item in checkout.items
            ],
            shipping_address=checkout.shipping_address,
            billing_address=checkout.billing_address,
            pricing=OrderPricing(
                subtotal=checkout.subtotal,
                discount_total=checkout.discount,
                tax_total=checkout.tax,
                shipping_cost=checkout.shipping_cost,
                grand_total=checkout.total,
                currency=checkout.currency,
            ),
            payment=PaymentInfo(
                method=payment.method_type if payment else None,
                gateway=payment.gateway if payment else None,
                amount=checkout.total,
                status=payment.status if payment else None,
                transaction_id=payment.transaction_id if payment else None,
                authorized_at=checkout.completed_at,
                captured_at=checkout.completed_at,
                capture_attempts=1,
            ),
            shipping=ShippingDetails(
                address_id=checkout.shipping_address.address_id if checkout.shipping_address else None,
                method_id=shipping_method.method_id if shipping_method else None,
                cost=checkout.shipping_cost,
            ),
            fulfillment=FulfillmentInfo(),
            notes=note,
            metadata=json.dumps({"checkout_number": checkout.checkout_number}),
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                order_number=order.order_number,
                user_id=str(checkout.user_id),
                checkout_id=str(checkout.id),
                grand_total=checkout.total,
                currency=checkout.currency,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # State transition helpers
    # -------------------------------------------------------------------
    @property
    def latest_status_change(self):
        if not self.status_history:
            return None
        return max(self.status_history, key=lambda entry: entry.sequence)

    def _assert_can_transition(self, target_status):
        """Validate that the current state allows transition to target."""
        current = OrderStatus(self.status)
        if not can_transition(current, target_status):
            raise InvalidOperationError(f"Cannot transition order from {current.value} to {target_status.value}")

    def _transition(self, target_status, note=None, actor=SYSTEM_ACTOR):
        """Move to ``target_status`` and append exactly one history entry."""
        self._assert_can_transition(target_status)

        previous_status = self.status
        now = datetime.now(UTC)

        with atomic_change(self):
            self.status = target_status.value
            self.add_status_history(
                StatusChange(
                    sequence=len(self.status_history) + 1,
                    status=target_status.value,
                    changed_at=now,
                    actor=actor or SYSTEM_ACTOR,
                    note=note,
                )
            )
            self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous_status,
                new_status=target_status.value,
                actor=actor or SYSTEM_ACTOR,
                note=note,
                changed_at=now,
            )
        )
        return now

    def _replace_shipping(self, **changes):
        self.shipping = replace_value(ShippingDetails, self.shipping, **changes)

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def update_status(self, new_status, note=None, actor=SYSTEM_ACTOR):
        """Move the order to ``new_status`` (a status value such as ``"Shipped"``)."""
        try:
            target = OrderStatus(new_status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown order status: {new_status}"]}) from None

        if target == OrderStatus.DELIVERED:
            self.mark_delivered(note=note or "Order delivered", actor=actor)
            return
        self._transition(target, note=note, actor=actor)

    def cancel(self, reason=None, actor=SYSTEM_ACTOR):
        current = OrderStatus(self.status)
        if current in (OrderStatus.SHIPPED, OrderStatus.DELIVERED):
            raise InvalidOperationError(f"Cannot cancel order {self.order_number}: it has already been {current.value}")

        reason = reason or "Customer request"
        cancelled_at = self._transition(OrderStatus.CANCELLED, note=reason, actor=actor)
        self.cancellation_reason = reason

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                order_number=self.order_number,
                reason=reason,
                cancelled_at=cancelled_at,
            )
        )

    def add_tracking_number(self, tracking_number, carrier=None, estimated_delivery=None):
        """Record tracking details; a confirmed, picked or packed order ships."""
        if not tracking_number:
            raise ValidationError({"tracking_number": ["Tracking number is required"]})
        current = OrderStatus(self.status)
        if current in _CLOSED_STATES:
            raise InvalidOperationError(f"Cannot add tracking to order {self.order_number} in {current.value} state")

        self._replace_shipping(
            tracking_number=tracking_number,
            carrier=carrier or (self.shipping.carrier if self.shipping else None),
            estimated_delivery=estimated_delivery,
        )
        self.updated_at = datetime.now(UTC)

        self.raise_(
            OrderTrackingAdded(
                order_id=str(self.id),
                tracking_number=tracking_number,
                carrier=carrier,
            )
        )

        if current in _SHIPPABLE_STATES:
            self._transition(OrderStatus.SHIPPED, note="Tracking number added")

    def mark_delivered(self, note="Order delivered", actor=SYSTEM_ACTOR):
        self._assert_can_transition(OrderStatus.DELIVERED)

        now = datetime.now(UTC)
        self._replace_shipping(actual_delivery=now)
        self._transition(OrderStatus.DELIVERED, note=note, actor=actor)

        self.raise_(OrderDelivered(order_id=str(self.id), order_number=self.order_number, delivered_at=now))

    def process_refund(self, amount=None, reason=None):
        """Refund the order. Defaults to the full grand total."""
        grand_total = self.pricing.grand_total if self.pricing else 0.0
        amount = grand_total if amount is None else amount
        if amount < 0 or amount > grand_total:
            raise ValidationError({"refund_amount": [f"Refund amount must be between 0 and {grand_total}"]})

        self._assert_can_transition(OrderStatus.REFUNDED)
        note = f"Refund processed: {reason}" if reason else "Refund processed"
        refunded_at = self._transition(OrderStatus.REFUNDED, note=note)
        self.refund_amount = amount
        self.refund_reason = reason

        self.raise_(
            OrderRefunded(
                order_id=str(self.id),
                order_number=self.order_number,
                refund_amount=amount,
                reason=reason,
                refunded_at=refunded_at,
            )
        )

    # -------------------------------------------------------------------
    # Fulfillment and payment details
    # -------------------------------------------------------------------
    def update_fulfillment(self, warehouse_id=None, pick_list=None, packing_state=None):
        if OrderStatus(self.status) in _CLOSED_STATES:
            raise InvalidOperationError(f"Order {self.order_number} is closed")

        changes = {}
        if warehouse_id is not None:
            changes["warehouse_id"] = warehouse_id
        if pick_list is not None:
            changes["pick_list"] = json.dumps(pick_list) if isinstance(pick_list, list) else pick_list
        if packing_state is not None:
            changes["packing_state"] = packing_state
        self.fulfillment = replace_value(FulfillmentInfo, self.fulfillment, **changes)
        self.updated_at = datetime.now(UTC)

    def record_payment_capture(self, transaction_id):
        now = datetime.now(UTC)
        attempts = (self.payment.capture_attempts or 0) if self.payment else 0
        self.payment = replace_value(
            PaymentInfo,
            self.payment,
            transaction_id=transaction_id,
            status="captured",
            captured_at=now,
            capture_attempts=attempts + 1,
        )
        self.updated_at = now

        self.raise_(
            PaymentCaptured(
                order_id=str(self.id),
                transaction_id=transaction_id,
                capture_attempts=self.payment.capture_attempts,
            )
        )
