"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance keeps its own state; nothing is shared across users.
State tracks entity IDs returned by creation endpoints so follow-up
operations can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class CatalogueState:
    product_ids: list[str] = field(default_factory=list)


@dataclass
class PurchaseState:
    """Tracks one shopper's journey from registration to delivery."""

    user_id: str | None = None
    product_id: str | None = None
    variant_id: str | None = None
    cart_id: str | None = None
    checkout_id: str | None = None
    order_id: str | None = None
    shipment_id: str | None = None
    order_status: str = "Placed"
