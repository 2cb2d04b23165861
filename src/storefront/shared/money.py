"""Money value object for prices carried on product variants."""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Float, String

from storefront.domain import storefront

VALID_CURRENCIES = frozenset({"USD", "EUR", "GBP", "JPY", "CAD", "AUD", "CHF", "INR"})


@storefront.value_object
class Money:
    """A price: amount with currency and an optional flat discount."""

    amount = Float(required=True, min_value=0.0)
    currency = String(max_length=3, default="USD")
    discount = Float(default=0.0, min_value=0.0)

    @invariant.post
    def currency_must_be_supported(self):
        if self.currency not in VALID_CURRENCIES:
            raise ValidationError({"currency": [f"Unsupported currency: {self.currency}"]})

    @invariant.post
    def discount_cannot_exceed_amount(self):
        if (self.discount or 0.0) > self.amount:
            raise ValidationError({"discount": ["Discount cannot exceed the price amount"]})

    @property
    def effective_amount(self) -> float:
        return round(self.amount - (self.discount or 0.0), 2)
