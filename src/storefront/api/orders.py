"""FastAPI routes for orders.

Orders are created only by completing a checkout, so there is no POST on
the collection.
"""

import json

from fastapi import APIRouter
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.api.responses import ok, paged
from storefront.api.schemas import (
    AddTrackingRequest,
    ApiResponse,
    CancelOrderRequest,
    MarkDeliveredRequest,
    PaymentCaptureRequest,
    RefundRequest,
    UpdateFulfillmentRequest,
    UpdateOrderStatusRequest,
)
from storefront.order.cancellation import CancelOrder, ProcessRefund
from storefront.order.delivery import AddTrackingNumber, MarkOrderDelivered
from storefront.order.fulfillment import RecordPaymentCapture, UpdateFulfillment
from storefront.order.order import Order
from storefront.order.status import UpdateOrderStatus
from storefront.shared.pagination import DEFAULT_PAGE_SIZE, paginate

order_router = APIRouter(prefix="/orders", tags=["orders"])


def _load(order_id: str) -> Order:
    return current_domain.repository_for(Order).get(order_id)


@order_router.get("", response_model=ApiResponse)
async def list_orders(
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    sort: str = "created_at",
    order: str = "desc",
    user_id: str | None = None,
    status: str | None = None,
) -> ApiResponse:
    result = paginate(
        Order,
        filters={"user_id": user_id, "status": status},
        page=page,
        limit=limit,
        sort=sort,
        order=order,
    )
    return paged(result)


@order_router.get("/number/{order_number}", response_model=ApiResponse)
async def get_order_by_number(order_number: str) -> ApiResponse:
    order = current_domain.repository_for(Order).find_by_number(order_number)
    if order is None:
        raise ObjectNotFoundError(f"Order {order_number} not found")
    return ok(order)


@order_router.get("/{order_id}", response_model=ApiResponse)
async def get_order(order_id: str) -> ApiResponse:
    return ok(_load(order_id))


@order_router.patch("/{order_id}/status", response_model=ApiResponse)
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest) -> ApiResponse:
    command = UpdateOrderStatus(order_id=order_id, status=body.status, note=body.note, actor=body.actor)
    current_domain.process(command, asynchronous=False)
    return ok(_load(order_id), "Order status updated")


@order_router.post("/{order_id}/cancel", response_model=ApiResponse)
async def cancel_order(order_id: str, body: CancelOrderRequest | None = None) -> ApiResponse:
    command = CancelOrder(
        order_id=order_id,
        reason=body.reason if body else None,
        actor=body.actor if body else "system",
    )
    current_domain.process(command, asynchronous=False)
    return ok(_load(order_id), "Order cancelled")


@order_router.post("/{order_id}/tracking", response_model=ApiResponse)
async def add_tracking_number(order_id: str, body: AddTrackingRequest) -> ApiResponse:
    command = AddTrackingNumber(
        order_id=order_id,
        tracking_number=body.tracking_number,
        carrier=body.carrier,
        estimated_delivery=body.estimated_delivery,
    )
    current_domain.process(command, asynchronous=False)
    return ok(_load(order_id), "Tracking number added")


@order_router.post("/{order_id}/deliver", response_model=ApiResponse)
async def mark_order_delivered(order_id: str, body: MarkDeliveredRequest | None = None) -> ApiResponse:
    command = MarkOrderDelivered(
        order_id=order_id,
        note=body.note if body else None,
        actor=body.actor if body else "system",
    )
    current_domain.process(command, asynchronous=False)
    return ok(_load(order_id), "Order marked as delivered")


@order_router.post("/{order_id}/refund", response_model=ApiResponse)
async def process_refund(order_id: str, body: RefundRequest) -> ApiResponse:
    command = ProcessRefund(order_id=order_id, amount=body.amount, reason=body.reason)
    current_domain.process(command, asynchronous=False)
    return ok(_load(order_id), "Refund processed")


@order_router.put("/{order_id}/fulfillment", response_model=ApiResponse)
async def update_fulfillment(order_id: str, body: UpdateFulfillmentRequest) -> ApiResponse:
    command = UpdateFulfillment(
        order_id=order_id,
        warehouse_id=body.warehouse_id,
        pick_list=json.dumps(body.pick_list) if body.pick_list is not None else None,
        packing_state=body.packing_state,
    )
    current_domain.process(command, asynchronous=False)
    return ok(_load(order_id), "Fulfillment updated")


@order_router.post("/{order_id}/payment-capture", response_model=ApiResponse)
async def record_payment_capture(order_id: str, body: PaymentCaptureRequest) -> ApiResponse:
    command = RecordPaymentCapture(order_id=order_id, transaction_id=body.transaction_id)
    current_domain.process(command, asynchronous=False)
    return ok(_load(order_id), "Payment capture recorded")
