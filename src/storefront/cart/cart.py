"""Cart aggregate — a user's line items before purchase.

The cart keeps its derived totals in step with its items: after any
mutation ``total == subtotal + tax + shipping - discount`` and
``subtotal == sum(line_total)``. Every mutation recomputes the totals
inside ``atomic_change`` so the invariants are only checked on the final
state.
"""

import json
from datetime import UTC, datetime, timedelta

from protean import atomic_change, invariant
from protean.exceptions import InvalidOperationError, ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String, Text

from storefront.cart.events import (
    CartCleared,
    CartCreated,
    CartDeactivated,
    CartDiscountApplied,
    CartEstimatesUpdated,
    CartItemAdded,
    CartItemQuantityUpdated,
    CartItemRemoved,
)
from storefront.domain import storefront
from storefront.shared.timestamps import as_utc

CART_RETENTION = timedelta(days=30)
MAX_ITEM_QUANTITY = 100

# Float totals are compared to the cent
_TOLERANCE = 0.005


def _money(value) -> float:
    return round(float(value or 0.0), 2)


@storefront.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    variant_id = Identifier(required=True)
    product_name = String(max_length=255)
    quantity = Integer(required=True, min_value=1, max_value=MAX_ITEM_QUANTITY)
    unit_price = Float(required=True, min_value=0.0)
    line_total = Float(default=0.0)
    added_at = DateTime()


@storefront.aggregate
class Cart:
    user_id = Identifier(required=True)
    items = HasMany(CartItem)
    subtotal = Float(default=0.0)
    tax = Float(default=0.0, min_value=0.0)
    shipping = Float(default=0.0, min_value=0.0)
    discount = Float(default=0.0, min_value=0.0)
    discount_code = String(max_length=50)
    applied_coupons = Text()  # JSON array of coupon codes
    currency = String(max_length=3, default="USD")
    total = Float(default=0.0)
    is_active = Boolean(default=True)
    expires_at = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def line_totals_must_match_quantities(self):
        for item in self.items:
            if abs(_money(item.quantity * item.unit_price) - _money(item.line_total)) > _TOLERANCE:
                raise ValidationError({"items": [f"Line total for variant {item.variant_id} is out of date"]})

    @invariant.post
    def subtotal_must_equal_sum_of_lines(self):
        expected = _money(sum(item.line_total or 0.0 for item in self.items))
        if abs(expected - _money(self.subtotal)) > _TOLERANCE:
            raise ValidationError({"subtotal": ["Subtotal must equal the sum of line totals"]})

    @invariant.post
    def total_must_equal_components(self):
        expected = _money(self.subtotal) + _money(self.tax) + _money(self.shipping) - _money(self.discount)
        if abs(_money(expected) - _money(self.total)) > _TOLERANCE:
            raise ValidationError({"total": ["Total must equal subtotal + tax + shipping - discount"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id, currency="USD"):
        now = datetime.now(UTC)
        cart = cls(
            user_id=user_id,
            currency=currency or "USD",
            applied_coupons=json.dumps([]),
            expires_at=now + CART_RETENTION,
            created_at=now,
            updated_at=now,
        )
        cart.raise_(CartCreated(cart_id=str(cart.id), user_id=str(user_id), created_at=now))
        return cart

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------
    @property
    def is_expired(self) -> bool:
        return self.expires_at is not None and as_utc(self.expires_at) <= datetime.now(UTC)

    def _assert_mutable(self):
        if not self.is_active:
            raise InvalidOperationError(f"Cart {self.id} is no longer active")
        if self.is_expired:
            raise InvalidOperationError(f"Cart {self.id} has expired")

    def find_item(self, variant_id):
        return next((i for i in self.items if str(i.variant_id) == str(variant_id)), None)

    def _recalculate(self):
        """Recompute subtotal and total. Call inside ``atomic_change``."""
        self.subtotal = _money(sum(item.line_total or 0.0 for item in self.items))
        # A discount can never take the cart below zero
        if _money(self.discount) > self.subtotal:
            self.discount = self.subtotal
        self.total = _money(self.subtotal + _money(self.tax) + _money(self.shipping) - _money(self.discount))
        self.updated_at = datetime.now(UTC)

    @staticmethod
    def _validate_quantity(quantity, field="quantity"):
        if quantity is None or quantity < 1 or quantity > MAX_ITEM_QUANTITY:
            raise ValidationError({field: [f"Quantity must be between 1 and {MAX_ITEM_QUANTITY}"]})

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product_id, variant_id, quantity, unit_price, product_name=None):
        """Add a variant to the cart, merging quantities if it is already present."""
        self._assert_mutable()
        self._validate_quantity(quantity)
        if unit_price is None or unit_price < 0:
            raise ValidationError({"unit_price": ["Unit price must be a non-negative amount"]})

        existing = self.find_item(variant_id)
        if existing:
            new_quantity = existing.quantity + quantity
            self._validate_quantity(new_quantity)

        unit_price = _money(unit_price)
        now = datetime.now(UTC)

        with atomic_change(self):
            if existing:
                existing.quantity = new_quantity
                existing.line_total = _money(new_quantity * existing.unit_price)
                item = existing
            else:
                item = CartItem(
                    product_id=product_id,
                    variant_id=variant_id,
                    product_name=product_name,
                    quantity=quantity,
                    unit_price=unit_price,
                    line_total=_money(quantity * unit_price),
                    added_at=now,
                )
                self.add_items(item)
            self._recalculate()

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                product_id=str(product_id),
                variant_id=str(variant_id),
                quantity=item.quantity,
                unit_price=item.unit_price,
                cart_total=self.total,
            )
        )
        return item

    def update_item_quantity(self, variant_id, quantity):
        self._assert_mutable()
        self._validate_quantity(quantity)

        item = self.find_item(variant_id)
        if item is None:
            raise ValidationError({"variant_id": [f"Variant {variant_id} is not in the cart"]})

        previous_quantity = item.quantity
        with atomic_change(self):
            item.quantity = quantity
            item.line_total = _money(quantity * item.unit_price)
            self._recalculate()

        self.raise_(
            CartItemQuantityUpdated(
                cart_id=str(self.id),
                variant_id=str(variant_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
                cart_total=self.total,
            )
        )

    def remove_item(self, variant_id):
        """Drop every line for ``variant_id``. Removing an absent variant is a no-op."""
        self._assert_mutable()

        matching = [i for i in self.items if str(i.variant_id) == str(variant_id)]
        if not matching:
            return

        with atomic_change(self):
            for item in matching:
                self.remove_items(item)
            self._recalculate()

        self.raise_(CartItemRemoved(cart_id=str(self.id), variant_id=str(variant_id), cart_total=self.total))

    def set_estimates(self, tax=None, shipping=None):
        """Record estimated taxes and shipping."""
        self._assert_mutable()

        with atomic_change(self):
            if tax is not None:
                self.tax = _money(tax)
            if shipping is not None:
                self.shipping = _money(shipping)
            self._recalculate()

        self.raise_(
            CartEstimatesUpdated(
                cart_id=str(self.id),
                tax=self.tax,
                shipping=self.shipping,
                cart_total=self.total,
            )
        )

    def apply_discount(self, code, amount):
        """Set the cart's discount code and amount.

        Coupon eligibility (minimum spend, expiry) is not modeled: any code
        is accepted as long as the amount fits within the current subtotal.
        """
        self._assert_mutable()

        if not code or not code.strip():
            raise ValidationError({"code": ["Discount code is required"]})
        if amount is None or amount < 0:
            raise ValidationError({"amount": ["Discount amount must be a non-negative amount"]})
        if _money(amount) > _money(self.subtotal):
            raise ValidationError({"amount": ["Discount cannot exceed the cart subtotal"]})

        coupons = json.loads(self.applied_coupons) if self.applied_coupons else []
        if code not in coupons:
            coupons.append(code)

        with atomic_change(self):
            self.discount_code = code
            self.discount = _money(amount)
            self.applied_coupons = json.dumps(coupons)
            self._recalculate()

        self.raise_(
            CartDiscountApplied(
                cart_id=str(self.id),
                code=code,
                amount=self.discount,
                cart_total=self.total,
            )
        )

    def clear(self):
        """Empty the cart and zero every derived total."""
        with atomic_change(self):
            for item in list(self.items):
                self.remove_items(item)
            self.subtotal = 0.0
            self.tax = 0.0
            self.shipping = 0.0
            self.discount = 0.0
            self.discount_code = None
            self.applied_coupons = json.dumps([])
            self.total = 0.0
            self.updated_at = datetime.now(UTC)

        self.raise_(CartCleared(cart_id=str(self.id)))

    def deactivate(self):
        if not self.is_active:
            raise InvalidOperationError(f"Cart {self.id} is already inactive")

        now = datetime.now(UTC)
        self.is_active = False
        self.updated_at = now
        self.raise_(CartDeactivated(cart_id=str(self.id), deactivated_at=now))

    def items_snapshot(self) -> list[dict]:
        """Plain copies of the current items, detached from the aggregate."""
        return [
            {
                "product_id": str(item.product_id),
                "variant_id": str(item.variant_id),
                "product_name": item.product_name,
                "quantity": item.quantity,
                "unit_price": item.unit_price,
                "line_total": item.line_total,
            }
            for item in self.items
        ]
