"""Repository for the Cart aggregate."""

from storefront.cart.cart import Cart
from storefront.domain import storefront


@storefront.repository(part_of=Cart)
class CartRepository:
    def find_active_for_user(self, user_id: str) -> Cart | None:
        """The user's most recent active, unexpired cart."""
        carts = self._dao.query.filter(user_id=user_id, is_active=True).order_by("-created_at").limit(None).all().items
        return next((cart for cart in carts if not cart.is_expired), None)
