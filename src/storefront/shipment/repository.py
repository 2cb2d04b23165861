"""Repository for the Shipment aggregate."""

from storefront.domain import storefront
from storefront.shipment.shipment import Shipment


@storefront.repository(part_of=Shipment)
class ShipmentRepository:
    def find_by_tracking_number(self, tracking_number: str) -> Shipment | None:
        return self._dao.query.filter(tracking_number=tracking_number).all().first

    def find_for_order(self, order_id: str) -> list[Shipment]:
        return self._dao.query.filter(order_id=order_id).order_by("created_at").limit(None).all().items
