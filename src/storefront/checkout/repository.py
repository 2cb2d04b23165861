"""Repository for the Checkout aggregate."""

from datetime import UTC, datetime

from storefront.checkout.checkout import Checkout, CheckoutStatus
from storefront.domain import storefront


@storefront.repository(part_of=Checkout)
class CheckoutRepository:
    def find_by_number(self, checkout_number: str) -> Checkout | None:
        return self._dao.query.filter(checkout_number=checkout_number).all().first

    def find_expired(self, as_of: datetime | None = None) -> list[Checkout]:
        """Pending checkouts whose expiry time has passed."""
        as_of = as_of or datetime.now(UTC)
        pending = self._dao.query.filter(status=CheckoutStatus.PENDING.value).limit(None).all().items
        return [checkout for checkout in pending if checkout.is_expired(as_of)]

    def remove_expired(self, as_of: datetime | None = None) -> list[Checkout]:
        """Delete every expired pending checkout and return the removed ones."""
        expired = self.find_expired(as_of)
        for checkout in expired:
            self._dao.delete(checkout)
        return expired
