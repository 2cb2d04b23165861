"""FastAPI routes for users, their address books, payment methods and loyalty."""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from storefront.api.responses import ok, paged
from storefront.api.schemas import (
    AddAddressRequest,
    AddPaymentMethodRequest,
    ApiResponse,
    LoyaltyPointsRequest,
    RegisterUserRequest,
    UpdateUserRequest,
)
from storefront.order.order import Order
from storefront.shared.pagination import DEFAULT_PAGE_SIZE, paginate
from storefront.user.account import DeactivateUser, RecordLogin
from storefront.user.addresses import AddAddress, RemoveAddress, SetDefaultAddress
from storefront.user.loyalty import AddLoyaltyPoints, RedeemLoyaltyPoints
from storefront.user.payment_methods import (
    AddPaymentMethod,
    RemovePaymentMethod,
    SetDefaultPaymentMethod,
)
from storefront.user.registration import RegisterUser, UpdateUser
from storefront.user.user import User

user_router = APIRouter(prefix="/users", tags=["users"])


def _load(user_id: str) -> User:
    return current_domain.repository_for(User).get(user_id)


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------
@user_router.post("", status_code=201, response_model=ApiResponse)
async def register_user(body: RegisterUserRequest) -> ApiResponse:
    command = RegisterUser(name=body.name, email=body.email, phone=body.phone)
    user_id = current_domain.process(command, asynchronous=False)
    return ok(_load(user_id), "User created successfully")


@user_router.get("", response_model=ApiResponse)
async def list_users(
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    sort: str = "created_at",
    order: str = "desc",
    loyalty_tier: str | None = None,
    is_active: bool | None = None,
) -> ApiResponse:
    result = paginate(
        User,
        filters={"loyalty_tier": loyalty_tier, "is_active": is_active},
        page=page,
        limit=limit,
        sort=sort,
        order=order,
    )
    return paged(result)


@user_router.get("/{user_id}", response_model=ApiResponse)
async def get_user(user_id: str) -> ApiResponse:
    return ok(_load(user_id))


@user_router.put("/{user_id}", response_model=ApiResponse)
async def update_user(user_id: str, body: UpdateUserRequest) -> ApiResponse:
    current_domain.process(UpdateUser(user_id=user_id, name=body.name, phone=body.phone), asynchronous=False)
    return ok(_load(user_id), "User updated successfully")


@user_router.delete("/{user_id}", response_model=ApiResponse)
async def deactivate_user(user_id: str) -> ApiResponse:
    current_domain.process(DeactivateUser(user_id=user_id), asynchronous=False)
    return ok(_load(user_id), "User deactivated successfully")


@user_router.post("/{user_id}/login", response_model=ApiResponse)
async def record_login(user_id: str) -> ApiResponse:
    current_domain.process(RecordLogin(user_id=user_id), asynchronous=False)
    return ok(_load(user_id))


@user_router.get("/{user_id}/orders", response_model=ApiResponse)
async def list_user_orders(
    user_id: str,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    sort: str = "created_at",
    order: str = "desc",
    status: str | None = None,
) -> ApiResponse:
    _load(user_id)
    result = paginate(
        Order,
        filters={"user_id": user_id, "status": status},
        page=page,
        limit=limit,
        sort=sort,
        order=order,
    )
    return paged(result)


# ---------------------------------------------------------------------------
# Address book
# ---------------------------------------------------------------------------
@user_router.post("/{user_id}/addresses", status_code=201, response_model=ApiResponse)
async def add_address(user_id: str, body: AddAddressRequest) -> ApiResponse:
    command = AddAddress(user_id=user_id, **body.model_dump())
    current_domain.process(command, asynchronous=False)
    return ok(_load(user_id), "Address added successfully")


@user_router.delete("/{user_id}/addresses/{address_id}", response_model=ApiResponse)
async def remove_address(user_id: str, address_id: str) -> ApiResponse:
    current_domain.process(RemoveAddress(user_id=user_id, address_id=address_id), asynchronous=False)
    return ok(_load(user_id), "Address removed successfully")


@user_router.put("/{user_id}/addresses/{address_id}/default", response_model=ApiResponse)
async def set_default_address(user_id: str, address_id: str) -> ApiResponse:
    current_domain.process(SetDefaultAddress(user_id=user_id, address_id=address_id), asynchronous=False)
    return ok(_load(user_id), "Default address updated")


# ---------------------------------------------------------------------------
# Payment methods
# ---------------------------------------------------------------------------
@user_router.post("/{user_id}/payment-methods", status_code=201, response_model=ApiResponse)
async def add_payment_method(user_id: str, body: AddPaymentMethodRequest) -> ApiResponse:
    command = AddPaymentMethod(user_id=user_id, **body.model_dump())
    current_domain.process(command, asynchronous=False)
    return ok(_load(user_id), "Payment method added successfully")


@user_router.delete("/{user_id}/payment-methods/{payment_method_id}", response_model=ApiResponse)
async def remove_payment_method(user_id: str, payment_method_id: str) -> ApiResponse:
    command = RemovePaymentMethod(user_id=user_id, payment_method_id=payment_method_id)
    current_domain.process(command, asynchronous=False)
    return ok(_load(user_id), "Payment method removed successfully")


@user_router.put("/{user_id}/payment-methods/{payment_method_id}/default", response_model=ApiResponse)
async def set_default_payment_method(user_id: str, payment_method_id: str) -> ApiResponse:
    command = SetDefaultPaymentMethod(user_id=user_id, payment_method_id=payment_method_id)
    current_domain.process(command, asynchronous=False)
    return ok(_load(user_id), "Default payment method updated")


# ---------------------------------------------------------------------------
# Loyalty
# ---------------------------------------------------------------------------
@user_router.post("/{user_id}/loyalty/add", response_model=ApiResponse)
async def add_loyalty_points(user_id: str, body: LoyaltyPointsRequest) -> ApiResponse:
    current_domain.process(AddLoyaltyPoints(user_id=user_id, points=body.points), asynchronous=False)
    return ok(_load(user_id), "Loyalty points added")


@user_router.post("/{user_id}/loyalty/redeem", response_model=ApiResponse)
async def redeem_loyalty_points(user_id: str, body: LoyaltyPointsRequest) -> ApiResponse:
    current_domain.process(RedeemLoyaltyPoints(user_id=user_id, points=body.points), asynchronous=False)
    return ok(_load(user_id), "Loyalty points redeemed")
