"""FastAPI routes for products and their variants."""

import json

from fastapi import APIRouter
from protean.utils.globals import current_domain

from storefront.api.responses import ok, paged
from storefront.api.schemas import (
    AdjustInventoryRequest,
    ApiResponse,
    CreateProductRequest,
    UpdateProductRequest,
    UpdateVariantPriceRequest,
    VariantSchema,
)
from storefront.product.creation import CreateProduct
from storefront.product.lifecycle import DeactivateProduct, UpdateProduct
from storefront.product.product import Product
from storefront.product.variants import AddVariant, AdjustInventory, UpdateVariantPrice
from storefront.shared.pagination import DEFAULT_PAGE_SIZE, paginate

product_router = APIRouter(prefix="/products", tags=["products"])


def _json_or_none(values):
    return json.dumps(values) if values is not None else None


def _load(product_id: str) -> Product:
    return current_domain.repository_for(Product).get(product_id)


@product_router.post("", status_code=201, response_model=ApiResponse)
async def create_product(body: CreateProductRequest) -> ApiResponse:
    command = CreateProduct(
        sku=body.sku,
        name=body.name,
        brand=body.brand,
        description=body.description,
        categories=json.dumps(body.categories),
        tags=json.dumps(body.tags),
        image_urls=json.dumps(body.image_urls),
        variants=json.dumps([variant.model_dump() for variant in body.variants]),
        shipping_weight=body.shipping_weight,
        free_shipping=body.free_shipping,
        ships_from=body.ships_from,
        handling_days=body.handling_days,
        warranty=body.warranty,
        return_policy=body.return_policy,
    )
    product_id = current_domain.process(command, asynchronous=False)
    return ok(_load(product_id), "Product created successfully")


@product_router.get("", response_model=ApiResponse)
async def list_products(
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    sort: str = "created_at",
    order: str = "desc",
    brand: str | None = None,
    is_active: bool | None = None,
) -> ApiResponse:
    result = paginate(
        Product,
        filters={"brand": brand, "is_active": is_active},
        page=page,
        limit=limit,
        sort=sort,
        order=order,
    )
    return paged(result)


@product_router.get("/{product_id}", response_model=ApiResponse)
async def get_product(product_id: str) -> ApiResponse:
    return ok(_load(product_id))


@product_router.put("/{product_id}", response_model=ApiResponse)
async def update_product(product_id: str, body: UpdateProductRequest) -> ApiResponse:
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        brand=body.brand,
        description=body.description,
        categories=_json_or_none(body.categories),
        tags=_json_or_none(body.tags),
        image_urls=_json_or_none(body.image_urls),
        warranty=body.warranty,
        return_policy=body.return_policy,
    )
    current_domain.process(command, asynchronous=False)
    return ok(_load(product_id), "Product updated successfully")


@product_router.delete("/{product_id}", response_model=ApiResponse)
async def deactivate_product(product_id: str) -> ApiResponse:
    current_domain.process(DeactivateProduct(product_id=product_id), asynchronous=False)
    return ok(_load(product_id), "Product deactivated successfully")


@product_router.post("/{product_id}/variants", status_code=201, response_model=ApiResponse)
async def add_variant(product_id: str, body: VariantSchema) -> ApiResponse:
    command = AddVariant(product_id=product_id, variant=json.dumps(body.model_dump()))
    current_domain.process(command, asynchronous=False)
    return ok(_load(product_id), "Variant added successfully")


@product_router.put("/{product_id}/variants/{variant_id}/price", response_model=ApiResponse)
async def update_variant_price(product_id: str, variant_id: str, body: UpdateVariantPriceRequest) -> ApiResponse:
    command = UpdateVariantPrice(
        product_id=product_id,
        variant_id=variant_id,
        amount=body.amount,
        currency=body.currency,
        discount=body.discount,
    )
    current_domain.process(command, asynchronous=False)
    return ok(_load(product_id), "Variant price updated successfully")


@product_router.put("/{product_id}/variants/{variant_id}/inventory", response_model=ApiResponse)
async def adjust_inventory(product_id: str, variant_id: str, body: AdjustInventoryRequest) -> ApiResponse:
    command = AdjustInventory(
        product_id=product_id,
        variant_id=variant_id,
        available=body.available,
        allocated=body.allocated,
        safety_stock=body.safety_stock,
        warehouse_location=body.warehouse_location,
        backorderable=body.backorderable,
    )
    current_domain.process(command, asynchronous=False)
    return ok(_load(product_id), "Inventory adjusted successfully")
