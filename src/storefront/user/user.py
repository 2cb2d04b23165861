"""User aggregate root with Address and PaymentMethod entities.

A user's addresses and payment methods each carry a default flag; the
aggregate guarantees that at most one of each is marked default. Loyalty
tier is never set directly: it is derived from the point balance every time
points change.
"""

import re
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, DateTime, HasMany, Integer, String

from storefront.domain import storefront

_EMAIL_PATTERN = re.compile(r"^[^@\s;,()<>\"\\]+@[^@\s;,()<>\"\\]+\.[^@\s;,()<>\"\\]+$")


class LoyaltyTier(Enum):
    BRONZE = "Bronze"
    SILVER = "Silver"
    GOLD = "Gold"
    PLATINUM = "Platinum"


# Lowest point balance for each tier, checked from the top down
_TIER_THRESHOLDS = [
    (10000, LoyaltyTier.PLATINUM),
    (5000, LoyaltyTier.GOLD),
    (1000, LoyaltyTier.SILVER),
    (0, LoyaltyTier.BRONZE),
]


def tier_for_points(points: int) -> LoyaltyTier:
    for threshold, tier in _TIER_THRESHOLDS:
        if points >= threshold:
            return tier
    return LoyaltyTier.BRONZE


class AddressType(Enum):
    HOME = "home"
    WORK = "work"
    OTHER = "other"


class PaymentMethodType(Enum):
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    PAYPAL = "paypal"
    BANK_TRANSFER = "bank_transfer"


@storefront.entity(part_of="User")
class Address:
    address_type = String(choices=AddressType, default=AddressType.HOME.value)
    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    postal_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)
    phone = String(max_length=30)
    is_default = Boolean(default=False)


@storefront.entity(part_of="User")
class PaymentMethod:
    """A stored means of payment. Only the last four digits are ever kept."""

    method_type = String(choices=PaymentMethodType, required=True)
    provider = String(max_length=50)
    last4 = String(max_length=4)
    expiry_month = Integer(min_value=1, max_value=12)
    expiry_year = Integer(min_value=2000)
    holder_name = String(max_length=255)
    is_default = Boolean(default=False)


@storefront.aggregate
class User:
    name = String(required=True, max_length=255)
    email = String(required=True, max_length=254, unique=True)
    phone = String(max_length=30)
    addresses = HasMany(Address)
    payment_methods = HasMany(PaymentMethod)
    loyalty_points = Integer(default=0, min_value=0)
    loyalty_tier = String(choices=LoyaltyTier, default=LoyaltyTier.BRONZE.value)
    is_active = Boolean(default=True)
    last_login = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def email_must_be_well_formed(self):
        if self.email and not _EMAIL_PATTERN.match(self.email):
            raise ValidationError({"email": [f"Invalid email address: {self.email}"]})

    @invariant.post
    def at_most_one_default_address(self):
        if len([a for a in self.addresses if a.is_default]) > 1:
            raise ValidationError({"addresses": ["Only one address can be marked as default"]})

    @invariant.post
    def at_most_one_default_payment_method(self):
        if len([p for p in self.payment_methods if p.is_default]) > 1:
            raise ValidationError({"payment_methods": ["Only one payment method can be marked as default"]})

    @invariant.post
    def tier_must_match_points(self):
        if self.loyalty_tier != tier_for_points(self.loyalty_points or 0).value:
            raise ValidationError({"loyalty_tier": ["Loyalty tier does not match the point balance"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def register(cls, name, email, phone=None):
        from storefront.user.events import UserRegistered

        now = datetime.now(UTC)
        user = cls(
            name=name,
            email=email.strip().lower() if email else email,
            phone=phone,
            created_at=now,
            updated_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=user.id,
                name=name,
                email=user.email,
                registered_at=now,
            )
        )
        return user

    def _assert_active(self):
        if not self.is_active:
            raise ValidationError({"is_active": ["User account is deactivated"]})

    def update_profile(self, name=None, phone=None):
        from storefront.user.events import UserUpdated

        self._assert_active()
        if name is not None:
            self.name = name
        if phone is not None:
            self.phone = phone
        self.updated_at = datetime.now(UTC)
        self.raise_(UserUpdated(user_id=self.id, name=self.name, phone=self.phone))

    # -------------------------------------------------------------------
    # Address book
    # -------------------------------------------------------------------
    def find_address(self, address_id):
        return next((a for a in self.addresses if str(a.id) == str(address_id)), None)

    @property
    def default_address(self):
        return next((a for a in self.addresses if a.is_default), None)

    def add_address(
        self,
        street,
        city,
        postal_code,
        country,
        address_type=AddressType.HOME.value,
        state=None,
        phone=None,
        is_default=False,
    ):
        from storefront.user.events import AddressAdded

        self._assert_active()

        # First address is always default
        if not self.addresses:
            is_default = True

        with atomic_change(self):
            if is_default:
                for addr in self.addresses:
                    if addr.is_default:
                        addr.is_default = False

            address = Address(
                address_type=address_type or AddressType.HOME.value,
                street=street,
                city=city,
                state=state,
                postal_code=postal_code,
                country=country,
                phone=phone,
                is_default=is_default,
            )
            self.add_addresses(address)
            self.updated_at = datetime.now(UTC)

        self.raise_(
            AddressAdded(
                user_id=self.id,
                address_id=address.id,
                address_type=address.address_type,
                city=city,
                country=country,
                is_default=is_default,
            )
        )
        return address

    def remove_address(self, address_id):
        from storefront.user.events import AddressRemoved

        address = self.find_address(address_id)
        if address is None:
            raise ObjectNotFoundError(f"Address {address_id} not found for user {self.id}")

        was_default = address.is_default

        with atomic_change(self):
            self.remove_addresses(address)

            # Promote the first remaining address when the default goes away
            if was_default and self.addresses:
                self.addresses[0].is_default = True
            self.updated_at = datetime.now(UTC)

        self.raise_(AddressRemoved(user_id=self.id, address_id=address_id))

    def set_default_address(self, address_id):
        from storefront.user.events import DefaultAddressChanged

        address = self.find_address(address_id)
        if address is None:
            raise ObjectNotFoundError(f"Address {address_id} not found for user {self.id}")

        with atomic_change(self):
            for addr in self.addresses:
                if addr.is_default:
                    addr.is_default = False
            address.is_default = True
            self.updated_at = datetime.now(UTC)

        self.raise_(DefaultAddressChanged(user_id=self.id, address_id=address_id))

    # -------------------------------------------------------------------
    # Payment methods
    # -------------------------------------------------------------------
    def find_payment_method(self, payment_method_id):
        return next((p for p in self.payment_methods if str(p.id) == str(payment_method_id)), None)

    @property
    def default_payment_method(self):
        return next((p for p in self.payment_methods if p.is_default), None)

    def add_payment_method(
        self,
        method_type,
        provider=None,
        last4=None,
        expiry_month=None,
        expiry_year=None,
        holder_name=None,
        is_default=False,
    ):
        from storefront.user.events import PaymentMethodAdded

        self._assert_active()

        if not self.payment_methods:
            is_default = True

        with atomic_change(self):
            if is_default:
                for method in self.payment_methods:
                    if method.is_default:
                        method.is_default = False

            payment_method = PaymentMethod(
                method_type=method_type,
                provider=provider,
                last4=last4,
                expiry_month=expiry_month,
                expiry_year=expiry_year,
                holder_name=holder_name,
                is_default=is_default,
            )
            self.add_payment_methods(payment_method)
            self.updated_at = datetime.now(UTC)

        self.raise_(
            PaymentMethodAdded(
                user_id=self.id,
                payment_method_id=payment_method.id,
                method_type=method_type,
                is_default=is_default,
            )
        )
        return payment_method

    def remove_payment_method(self, payment_method_id):
        from storefront.user.events import PaymentMethodRemoved

        payment_method = self.find_payment_method(payment_method_id)
        if payment_method is None:
            raise ObjectNotFoundError(f"Payment method {payment_method_id} not found for user {self.id}")

        was_default = payment_method.is_default

        with atomic_change(self):
            self.remove_payment_methods(payment_method)
            if was_default and self.payment_methods:
                self.payment_methods[0].is_default = True
            self.updated_at = datetime.now(UTC)

        self.raise_(PaymentMethodRemoved(user_id=self.id, payment_method_id=payment_method_id))

    def set_default_payment_method(self, payment_method_id):
        from storefront.user.events import DefaultPaymentMethodChanged

        payment_method = self.find_payment_method(payment_method_id)
        if payment_method is None:
            raise ObjectNotFoundError(f"Payment method {payment_method_id} not found for user {self.id}")

        with atomic_change(self):
            for method in self.payment_methods:
                if method.is_default:
                    method.is_default = False
            payment_method.is_default = True
            self.updated_at = datetime.now(UTC)

        self.raise_(DefaultPaymentMethodChanged(user_id=self.id, payment_method_id=payment_method_id))

    # -------------------------------------------------------------------
    # Loyalty
    # -------------------------------------------------------------------
    def _change_points(self, new_balance):
        from storefront.user.events import LoyaltyPointsChanged, LoyaltyTierChanged

        previous_tier = self.loyalty_tier
        new_tier = tier_for_points(new_balance).value

        with atomic_change(self):
            self.loyalty_points = new_balance
            self.loyalty_tier = new_tier
            self.updated_at = datetime.now(UTC)

        self.raise_(LoyaltyPointsChanged(user_id=self.id, loyalty_points=new_balance))
        if new_tier != previous_tier:
            self.raise_(
                LoyaltyTierChanged(
                    user_id=self.id,
                    previous_tier=previous_tier,
                    new_tier=new_tier,
                )
            )

    def add_loyalty_points(self, points):
        if points is None or points <= 0:
            raise ValidationError({"points": ["Points must be a positive number"]})
        self._assert_active()
        self._change_points((self.loyalty_points or 0) + points)

    def redeem_loyalty_points(self, points):
        """Subtract points; the balance never drops below zero."""
        if points is None or points <= 0:
            raise ValidationError({"points": ["Points must be a positive number"]})
        self._assert_active()
        self._change_points(max(0, (self.loyalty_points or 0) - points))

    # -------------------------------------------------------------------
    # Account
    # -------------------------------------------------------------------
    def record_login(self):
        self._assert_active()
        self.last_login = datetime.now(UTC)

    def deactivate(self):
        from storefront.user.events import UserDeactivated

        if not self.is_active:
            raise ValidationError({"is_active": ["User account is already deactivated"]})

        now = datetime.now(UTC)
        self.is_active = False
        self.updated_at = now
        self.raise_(UserDeactivated(user_id=self.id, deactivated_at=now))
