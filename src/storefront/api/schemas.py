"""Pydantic request/response schemas for the Storefront API.

These are the HTTP contracts of the API, kept apart from the
internal Protean commands.
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Envelope
# ---------------------------------------------------------------------------
class PaginationSchema(BaseModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int


class ApiResponse(BaseModel):
    success: bool = True
    message: str | None = None
    data: Any = None
    pagination: PaginationSchema | None = None


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
class PriceSchema(BaseModel):
    amount: float = Field(ge=0)
    currency: str = Field(default="USD", min_length=3, max_length=3)
    discount: float = Field(default=0.0, ge=0)


class InventorySchema(BaseModel):
    available: int = Field(default=0, ge=0)
    allocated: int = Field(default=0, ge=0)
    safety_stock: int = Field(default=0, ge=0)
    warehouse_location: str | None = None
    backorderable: bool = False


class DimensionsSchema(BaseModel):
    length: float = Field(default=0.0, ge=0)
    width: float = Field(default=0.0, ge=0)
    height: float = Field(default=0.0, ge=0)
    unit: Literal["cm", "in"] = "cm"


class VariantSchema(BaseModel):
    color: str | None = None
    size: str | None = None
    barcode: str | None = None
    price: PriceSchema
    inventory: InventorySchema | None = None
    weight: float = Field(default=0.0, ge=0)
    dimensions: DimensionsSchema | None = None


class CreateProductRequest(BaseModel):
    sku: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=255)
    brand: str | None = None
    description: str | None = None
    categories: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    image_urls: list[str] = Field(default_factory=list)
    variants: list[VariantSchema] = Field(min_length=1)
    shipping_weight: float | None = Field(default=None, ge=0)
    free_shipping: bool = False
    ships_from: str | None = None
    handling_days: int | None = Field(default=None, ge=0)
    warranty: str | None = None
    return_policy: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "sku": "TSHIRT-001",
                    "name": "Classic Tee",
                    "brand": "Acme",
                    "categories": ["apparel"],
                    "variants": [{"color": "Black", "size": "M", "price": {"amount": 19.99}}],
                }
            ]
        }
    }


class UpdateProductRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    brand: str | None = None
    description: str | None = None
    categories: list[str] | None = None
    tags: list[str] | None = None
    image_urls: list[str] | None = None
    warranty: str | None = None
    return_policy: str | None = None


class UpdateVariantPriceRequest(BaseModel):
    amount: float = Field(ge=0)
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    discount: float | None = Field(default=None, ge=0)


class AdjustInventoryRequest(BaseModel):
    available: int | None = Field(default=None, ge=0)
    allocated: int | None = Field(default=None, ge=0)
    safety_stock: int | None = Field(default=None, ge=0)
    warehouse_location: str | None = None
    backorderable: bool | None = None


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------
class RegisterUserRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=3, max_length=254)
    phone: str | None = None


class UpdateUserRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    phone: str | None = None


class AddAddressRequest(BaseModel):
    address_type: Literal["home", "work", "other"] = "home"
    street: str
    city: str
    state: str | None = None
    postal_code: str
    country: str
    phone: str | None = None
    is_default: bool = False


class AddPaymentMethodRequest(BaseModel):
    method_type: Literal["credit_card", "debit_card", "paypal", "bank_transfer"]
    provider: str | None = None
    last4: str | None = Field(default=None, pattern=r"^\d{4}$")
    expiry_month: int | None = Field(default=None, ge=1, le=12)
    expiry_year: int | None = None
    holder_name: str | None = None
    is_default: bool = False


class LoyaltyPointsRequest(BaseModel):
    points: int = Field(ge=1)


# ---------------------------------------------------------------------------
# Carts
# ---------------------------------------------------------------------------
class CreateCartRequest(BaseModel):
    user_id: str
    currency: str = Field(default="USD", min_length=3, max_length=3)


class AddToCartRequest(BaseModel):
    product_id: str
    variant_id: str
    quantity: int = Field(default=1, ge=1, le=100)
    unit_price: float | None = Field(default=None, ge=0)


class UpdateCartItemRequest(BaseModel):
    quantity: int = Field(ge=1, le=100)


class ApplyDiscountRequest(BaseModel):
    code: str = Field(min_length=1, max_length=50)
    amount: float = Field(ge=0)


class CartEstimatesRequest(BaseModel):
    tax: float | None = Field(default=None, ge=0)
    shipping: float | None = Field(default=None, ge=0)


# ---------------------------------------------------------------------------
# Checkouts
# ---------------------------------------------------------------------------
class ShippingMethodSchema(BaseModel):
    method_id: str
    label: str | None = None
    cost: float = Field(default=0.0, ge=0)
    estimated_days: int | None = Field(default=None, ge=0)


class CreateCheckoutRequest(BaseModel):
    user_id: str
    cart_id: str
    shipping_address_id: str | None = None
    billing_address_id: str | None = None
    shipping_method: ShippingMethodSchema | None = None
    payment_method_id: str | None = None
    gateway: str | None = None
    payment_intent_id: str | None = None
    notes: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "user_id": "user-001",
                    "cart_id": "cart-001",
                    "shipping_method": {"method_id": "standard", "label": "Standard", "cost": 5.0},
                }
            ]
        }
    }


class CompleteCheckoutRequest(BaseModel):
    transaction_id: str | None = None
    payment_intent_id: str | None = None


class ReasonRequest(BaseModel):
    reason: str | None = None


class CleanupRequest(BaseModel):
    as_of: datetime | None = None


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class UpdateOrderStatusRequest(BaseModel):
    status: str
    note: str | None = None
    actor: str = "system"


class CancelOrderRequest(BaseModel):
    reason: str | None = None
    actor: str = "system"


class AddTrackingRequest(BaseModel):
    tracking_number: str = Field(min_length=1)
    carrier: str | None = None
    estimated_delivery: datetime | None = None


class MarkDeliveredRequest(BaseModel):
    note: str | None = None
    actor: str = "system"


class RefundRequest(BaseModel):
    amount: float | None = Field(default=None, ge=0)
    reason: str | None = None


class UpdateFulfillmentRequest(BaseModel):
    warehouse_id: str | None = None
    pick_list: list[str] | None = None
    packing_state: Literal["Not_Started", "In_Progress", "Packed"] | None = None


class PaymentCaptureRequest(BaseModel):
    transaction_id: str


# ---------------------------------------------------------------------------
# Shipments
# ---------------------------------------------------------------------------
class PackageDetailsSchema(BaseModel):
    weight: float = Field(default=0.0, ge=0)
    length: float = Field(default=0.0, ge=0)
    width: float = Field(default=0.0, ge=0)
    height: float = Field(default=0.0, ge=0)
    package_type: Literal["envelope", "package", "box", "pallet"] = "package"


class CreateShipmentRequest(BaseModel):
    order_id: str
    carrier: Literal["UPS", "FedEx", "DHL", "USPS", "Amazon Logistics", "Other"]
    shipping_method: Literal["ground", "express", "overnight", "international"] = "ground"
    cost: float = Field(default=0.0, ge=0)
    estimated_delivery: datetime | None = None
    package_details: PackageDetailsSchema | None = None
    notes: str | None = None


class TrackingEventRequest(BaseModel):
    status: Literal[
        "pending",
        "picked_up",
        "in_transit",
        "out_for_delivery",
        "delivered",
        "exception",
        "returned",
    ]
    location: str | None = None
    description: str | None = None
    details: str | None = None


class DeliverShipmentRequest(BaseModel):
    delivery_location: str | None = None
    notes: str | None = None
