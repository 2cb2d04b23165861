"""Checkout aggregate — a short-lived snapshot bridging a Cart and an Order.

State machine:
    pending → completed | failed | cancelled

A checkout copies the cart's items and totals when it is created; later cart
changes never reach it. Pending checkouts expire after CHECKOUT_TTL and are
swept by the cleanup command.
"""

from datetime import UTC, datetime, timedelta
from enum import Enum

from protean.exceptions import InvalidOperationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text, ValueObject

from storefront.checkout.events import (
    CheckoutCancelled,
    CheckoutCompleted,
    CheckoutCreated,
    CheckoutFailed,
)
from storefront.domain import storefront
from storefront.shared.address import AddressSnapshot
from storefront.shared.references import generate_reference
from storefront.shared.timestamps import as_utc
from storefront.shared.values import replace_value

CHECKOUT_TTL = timedelta(minutes=15)


class CheckoutStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


class PaymentStatus(Enum):
    PENDING = "pending"
    AUTHORIZED = "authorized"
    COMPLETED = "completed"
    FAILED = "failed"


@storefront.value_object(part_of="Checkout")
class ShippingMethod:
    method_id = String(max_length=50)
    label = String(max_length=100)
    cost = Float(default=0.0, min_value=0.0)
    estimated_days = Integer(min_value=0)


@storefront.value_object(part_of="Checkout")
class PaymentSelection:
    """The payment decision recorded at checkout. Only status is tracked; no gateway calls are made."""

    payment_method_id = Identifier()
    method_type = String(max_length=20)
    amount = Float(default=0.0, min_value=0.0)
    currency = String(max_length=3, default="USD")
    status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    gateway = String(max_length=50)
    intent_id = String(max_length=255)
    transaction_id = String(max_length=255)


@storefront.entity(part_of="Checkout")
class CheckoutItem:
    product_id = Identifier(required=True)
    variant_id = Identifier(required=True)
    product_name = String(max_length=255)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)
    line_total = Float(default=0.0)


@storefront.aggregate
class Checkout:
    checkout_number = String(required=True, max_length=50, unique=True)
    user_id = Identifier(required=True)
    cart_id = Identifier(required=True)
    items = HasMany(CheckoutItem)
    shipping_address = ValueObject(AddressSnapshot)
    billing_address = ValueObject(AddressSnapshot)
    shipping_method = ValueObject(ShippingMethod)
    payment = ValueObject(PaymentSelection)
    subtotal = Float(default=0.0)
    tax = Float(default=0.0)
    shipping_cost = Float(default=0.0)
    discount = Float(default=0.0)
    total = Float(default=0.0)
    currency = String(max_length=3, default="USD")
    status = String(choices=CheckoutStatus, default=CheckoutStatus.PENDING.value)
    notes = Text()
    expires_at = DateTime()
    completed_at = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        user_id,
        cart,
        shipping_address=None,
        billing_address=None,
        shipping_method=None,
        payment=None,
        notes=None,
    ):
        """Snapshot ``cart`` into a new pending checkout."""
        now = datetime.now(UTC)
        checkout = cls(
            checkout_number=generate_reference("CHK"),
            user_id=user_id,
            cart_id=str(cart.id),
            items=[CheckoutItem(**item) for item in cart.items_snapshot()],
            shipping_address=shipping_address,
            billing_address=billing_address,
            shipping_method=shipping_method,
            payment=payment,
            subtotal=cart.subtotal,
            tax=cart.tax,
            shipping_cost=cart.shipping,
            discount=cart.discount,
            total=cart.total,
            currency=cart.currency,
            status=CheckoutStatus.PENDING.value,
            notes=notes,
            expires_at=now + CHECKOUT_TTL,
            created_at=now,
            updated_at=now,
        )
        checkout.raise_(
            CheckoutCreated(
                checkout_id=str(checkout.id),
                checkout_number=checkout.checkout_number,
                user_id=str(user_id),
                cart_id=str(cart.id),
                total=checkout.total,
                expires_at=checkout.expires_at,
            )
        )
        return checkout

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------
    def is_expired(self, as_of: datetime | None = None) -> bool:
        as_of = as_of or datetime.now(UTC)
        return self.expires_at is not None and as_utc(self.expires_at) < as_utc(as_of)

    def _replace_payment(self, **changes):
        self.payment = replace_value(PaymentSelection, self.payment, **changes)

    def _assert_pending(self, action):
        if self.status != CheckoutStatus.PENDING.value:
            raise InvalidOperationError(f"Cannot {action} checkout {self.checkout_number} in {self.status} state")

    # -------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------
    def complete(self, transaction_id=None, payment_intent_id=None):
        self._assert_pending("complete")

        now = datetime.now(UTC)
        self.status = CheckoutStatus.COMPLETED.value
        self._replace_payment(
            status=PaymentStatus.COMPLETED.value,
            transaction_id=transaction_id,
            intent_id=payment_intent_id or (self.payment.intent_id if self.payment else None),
        )
        self.completed_at = now
        self.updated_at = now

        self.raise_(
            CheckoutCompleted(
                checkout_id=str(self.id),
                checkout_number=self.checkout_number,
                transaction_id=transaction_id,
                completed_at=now,
            )
        )

    def fail(self, reason=None):
        self._assert_pending("fail")

        self.status = CheckoutStatus.FAILED.value
        self._replace_payment(status=PaymentStatus.FAILED.value)
        self.notes = reason
        self.updated_at = datetime.now(UTC)

        self.raise_(CheckoutFailed(checkout_id=str(self.id), reason=reason))

    def cancel(self, reason=None):
        """Mark the checkout cancelled. No state check is applied."""
        reason = reason or "Checkout cancelled by user"
        previous_status = self.status

        self.status = CheckoutStatus.CANCELLED.value
        self.notes = reason
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CheckoutCancelled(
                checkout_id=str(self.id),
                previous_status=previous_status,
                reason=reason,
            )
        )
