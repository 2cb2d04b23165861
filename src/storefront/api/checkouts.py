"""FastAPI routes for checkouts."""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from storefront.api.responses import ok, paged, serialize
from storefront.api.schemas import (
    ApiResponse,
    CleanupRequest,
    CompleteCheckoutRequest,
    CreateCheckoutRequest,
    ReasonRequest,
)
from storefront.checkout.checkout import Checkout
from storefront.checkout.cleanup import CleanupExpiredCheckouts
from storefront.checkout.completion import CompleteCheckout
from storefront.checkout.creation import CreateCheckout
from storefront.checkout.termination import CancelCheckout, FailCheckout
from storefront.order.order import Order
from storefront.shared.pagination import DEFAULT_PAGE_SIZE, paginate

checkout_router = APIRouter(prefix="/checkouts", tags=["checkouts"])


def _load(checkout_id: str) -> Checkout:
    return current_domain.repository_for(Checkout).get(checkout_id)


@checkout_router.post("", status_code=201, response_model=ApiResponse)
async def create_checkout(body: CreateCheckoutRequest) -> ApiResponse:
    shipping_method = body.shipping_method
    command = CreateCheckout(
        user_id=body.user_id,
        cart_id=body.cart_id,
        shipping_address_id=body.shipping_address_id,
        billing_address_id=body.billing_address_id,
        shipping_method_id=shipping_method.method_id if shipping_method else None,
        shipping_method_label=shipping_method.label if shipping_method else None,
        shipping_cost=shipping_method.cost if shipping_method else None,
        estimated_days=shipping_method.estimated_days if shipping_method else None,
        payment_method_id=body.payment_method_id,
        gateway=body.gateway,
        payment_intent_id=body.payment_intent_id,
        notes=body.notes,
    )
    checkout_id = current_domain.process(command, asynchronous=False)
    return ok(_load(checkout_id), "Checkout created successfully")


@checkout_router.get("", response_model=ApiResponse)
async def list_checkouts(
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    sort: str = "created_at",
    order: str = "desc",
    user_id: str | None = None,
    status: str | None = None,
) -> ApiResponse:
    result = paginate(
        Checkout,
        filters={"user_id": user_id, "status": status},
        page=page,
        limit=limit,
        sort=sort,
        order=order,
    )
    return paged(result)


@checkout_router.post("/maintenance/cleanup-expired", response_model=ApiResponse)
async def cleanup_expired_checkouts(body: CleanupRequest | None = None) -> ApiResponse:
    """Delete pending checkouts past their expiry. Intended for an external scheduler."""
    command = CleanupExpiredCheckouts(as_of=body.as_of if body else None)
    deleted_count = current_domain.process(command, asynchronous=False)
    return ok({"deleted_count": deleted_count}, f"Deleted {deleted_count} expired checkouts")


@checkout_router.get("/{checkout_id}", response_model=ApiResponse)
async def get_checkout(checkout_id: str) -> ApiResponse:
    return ok(_load(checkout_id))


@checkout_router.post("/{checkout_id}/complete", response_model=ApiResponse)
async def complete_checkout(checkout_id: str, body: CompleteCheckoutRequest) -> ApiResponse:
    command = CompleteCheckout(
        checkout_id=checkout_id,
        transaction_id=body.transaction_id,
        payment_intent_id=body.payment_intent_id,
    )
    order_id = current_domain.process(command, asynchronous=False)
    order = current_domain.repository_for(Order).get(order_id)
    return ok(
        {"checkout": serialize(_load(checkout_id)), "order": serialize(order)},
        "Checkout completed successfully",
    )


@checkout_router.post("/{checkout_id}/fail", response_model=ApiResponse)
async def fail_checkout(checkout_id: str, body: ReasonRequest) -> ApiResponse:
    current_domain.process(FailCheckout(checkout_id=checkout_id, reason=body.reason), asynchronous=False)
    return ok(_load(checkout_id), "Checkout marked as failed")


@checkout_router.post("/{checkout_id}/cancel", response_model=ApiResponse)
async def cancel_checkout(checkout_id: str, body: ReasonRequest | None = None) -> ApiResponse:
    command = CancelCheckout(checkout_id=checkout_id, reason=body.reason if body else None)
    current_domain.process(command, asynchronous=False)
    return ok(_load(checkout_id), "Checkout cancelled")
