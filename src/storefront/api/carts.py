"""FastAPI routes for shopping carts."""

from fastapi import APIRouter
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.api.responses import ok, paged
from storefront.api.schemas import (
    AddToCartRequest,
    ApiResponse,
    ApplyDiscountRequest,
    CartEstimatesRequest,
    CreateCartRequest,
    UpdateCartItemRequest,
)
from storefront.cart.cart import Cart
from storefront.cart.items import AddToCart, RemoveFromCart, UpdateCartItemQuantity
from storefront.cart.management import ClearCart, CreateCart, DeactivateCart
from storefront.cart.pricing import ApplyCartDiscount, SetCartEstimates
from storefront.shared.pagination import DEFAULT_PAGE_SIZE, paginate

cart_router = APIRouter(prefix="/carts", tags=["carts"])


def _load(cart_id: str) -> Cart:
    return current_domain.repository_for(Cart).get(cart_id)


@cart_router.post("", status_code=201, response_model=ApiResponse)
async def create_cart(body: CreateCartRequest) -> ApiResponse:
    cart_id = current_domain.process(CreateCart(user_id=body.user_id, currency=body.currency), asynchronous=False)
    return ok(_load(cart_id), "Cart created successfully")


@cart_router.get("", response_model=ApiResponse)
async def list_carts(
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    sort: str = "created_at",
    order: str = "desc",
    user_id: str | None = None,
    is_active: bool | None = None,
) -> ApiResponse:
    result = paginate(
        Cart,
        filters={"user_id": user_id, "is_active": is_active},
        page=page,
        limit=limit,
        sort=sort,
        order=order,
    )
    return paged(result)


@cart_router.get("/user/{user_id}", response_model=ApiResponse)
async def get_active_cart_for_user(user_id: str) -> ApiResponse:
    cart = current_domain.repository_for(Cart).find_active_for_user(user_id)
    if cart is None:
        raise ObjectNotFoundError(f"No active cart found for user {user_id}")
    return ok(cart)


@cart_router.get("/{cart_id}", response_model=ApiResponse)
async def get_cart(cart_id: str) -> ApiResponse:
    return ok(_load(cart_id))


@cart_router.delete("/{cart_id}", response_model=ApiResponse)
async def deactivate_cart(cart_id: str) -> ApiResponse:
    current_domain.process(DeactivateCart(cart_id=cart_id), asynchronous=False)
    return ok(_load(cart_id), "Cart deactivated successfully")


@cart_router.post("/{cart_id}/items", response_model=ApiResponse)
async def add_cart_item(cart_id: str, body: AddToCartRequest) -> ApiResponse:
    command = AddToCart(
        cart_id=cart_id,
        product_id=body.product_id,
        variant_id=body.variant_id,
        quantity=body.quantity,
        unit_price=body.unit_price,
    )
    current_domain.process(command, asynchronous=False)
    return ok(_load(cart_id), "Item added to cart")


@cart_router.put("/{cart_id}/items/{variant_id}", response_model=ApiResponse)
async def update_cart_item(cart_id: str, variant_id: str, body: UpdateCartItemRequest) -> ApiResponse:
    command = UpdateCartItemQuantity(cart_id=cart_id, variant_id=variant_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return ok(_load(cart_id), "Cart item updated")


@cart_router.delete("/{cart_id}/items/{variant_id}", response_model=ApiResponse)
async def remove_cart_item(cart_id: str, variant_id: str) -> ApiResponse:
    current_domain.process(RemoveFromCart(cart_id=cart_id, variant_id=variant_id), asynchronous=False)
    return ok(_load(cart_id), "Item removed from cart")


@cart_router.delete("/{cart_id}/items", response_model=ApiResponse)
async def clear_cart(cart_id: str) -> ApiResponse:
    current_domain.process(ClearCart(cart_id=cart_id), asynchronous=False)
    return ok(_load(cart_id), "Cart cleared")


@cart_router.post("/{cart_id}/discount", response_model=ApiResponse)
async def apply_discount(cart_id: str, body: ApplyDiscountRequest) -> ApiResponse:
    command = ApplyCartDiscount(cart_id=cart_id, code=body.code, amount=body.amount)
    current_domain.process(command, asynchronous=False)
    return ok(_load(cart_id), "Discount applied")


@cart_router.put("/{cart_id}/estimates", response_model=ApiResponse)
async def set_estimates(cart_id: str, body: CartEstimatesRequest) -> ApiResponse:
    command = SetCartEstimates(cart_id=cart_id, tax=body.tax, shipping=body.shipping)
    current_domain.process(command, asynchronous=False)
    return ok(_load(cart_id), "Cart estimates updated")
