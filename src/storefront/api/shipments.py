"""FastAPI routes for shipments."""

from fastapi import APIRouter
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.api.responses import ok, paged
from storefront.api.schemas import (
    ApiResponse,
    CreateShipmentRequest,
    DeliverShipmentRequest,
    TrackingEventRequest,
)
from storefront.shared.pagination import DEFAULT_PAGE_SIZE, paginate
from storefront.shipment.creation import CreateShipment
from storefront.shipment.delivery import MarkShipmentDelivered
from storefront.shipment.shipment import Shipment
from storefront.shipment.tracking import AddTrackingEvent, DeactivateShipment

shipment_router = APIRouter(prefix="/shipments", tags=["shipments"])


def _load(shipment_id: str) -> Shipment:
    return current_domain.repository_for(Shipment).get(shipment_id)


@shipment_router.post("", status_code=201, response_model=ApiResponse)
async def create_shipment(body: CreateShipmentRequest) -> ApiResponse:
    package = body.package_details
    command = CreateShipment(
        order_id=body.order_id,
        carrier=body.carrier,
        shipping_method=body.shipping_method,
        cost=body.cost,
        estimated_delivery=body.estimated_delivery,
        package_weight=package.weight if package else None,
        package_length=package.length if package else None,
        package_width=package.width if package else None,
        package_height=package.height if package else None,
        package_type=package.package_type if package else None,
        notes=body.notes,
    )
    shipment_id = current_domain.process(command, asynchronous=False)
    return ok(_load(shipment_id), "Shipment created successfully")


@shipment_router.get("", response_model=ApiResponse)
async def list_shipments(
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    sort: str = "created_at",
    order: str = "desc",
    order_id: str | None = None,
    status: str | None = None,
    carrier: str | None = None,
) -> ApiResponse:
    result = paginate(
        Shipment,
        filters={"order_id": order_id, "status": status, "carrier": carrier},
        page=page,
        limit=limit,
        sort=sort,
        order=order,
    )
    return paged(result)


@shipment_router.get("/tracking/{tracking_number}", response_model=ApiResponse)
async def get_shipment_by_tracking_number(tracking_number: str) -> ApiResponse:
    shipment = current_domain.repository_for(Shipment).find_by_tracking_number(tracking_number)
    if shipment is None:
        raise ObjectNotFoundError(f"Shipment with tracking number {tracking_number} not found")
    return ok(shipment)


@shipment_router.get("/{shipment_id}", response_model=ApiResponse)
async def get_shipment(shipment_id: str) -> ApiResponse:
    return ok(_load(shipment_id))


@shipment_router.delete("/{shipment_id}", response_model=ApiResponse)
async def deactivate_shipment(shipment_id: str) -> ApiResponse:
    current_domain.process(DeactivateShipment(shipment_id=shipment_id), asynchronous=False)
    return ok(_load(shipment_id), "Shipment deactivated successfully")


@shipment_router.post("/{shipment_id}/events", response_model=ApiResponse)
async def add_tracking_event(shipment_id: str, body: TrackingEventRequest) -> ApiResponse:
    command = AddTrackingEvent(
        shipment_id=shipment_id,
        status=body.status,
        location=body.location,
        description=body.description,
        details=body.details,
    )
    current_domain.process(command, asynchronous=False)
    return ok(_load(shipment_id), "Tracking event added")


@shipment_router.post("/{shipment_id}/deliver", response_model=ApiResponse)
async def mark_shipment_delivered(shipment_id: str, body: DeliverShipmentRequest | None = None) -> ApiResponse:
    command = MarkShipmentDelivered(
        shipment_id=shipment_id,
        delivery_location=body.delivery_location if body else None,
        notes=body.notes if body else None,
    )
    current_domain.process(command, asynchronous=False)
    return ok(_load(shipment_id), "Shipment marked as delivered")
