"""Product aggregate root with Variant entity and its value objects."""

import json
from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Integer, String, Text, ValueObject

from storefront.domain import storefront
from storefront.shared.dimensions import Dimensions
from storefront.shared.money import Money


@storefront.value_object(part_of="Product")
class Inventory:
    """Stock position of a single variant."""

    available: Integer(default=0, min_value=0)
    allocated: Integer(default=0, min_value=0)
    safety_stock: Integer(default=0, min_value=0)
    warehouse_location: String(max_length=100)
    backorderable: Boolean(default=False)


@storefront.value_object(part_of="Product")
class ShippingInfo:
    weight: Float(min_value=0.0)
    free_shipping: Boolean(default=False)
    ships_from: String(max_length=100)
    handling_days: Integer(default=1, min_value=0)


@storefront.entity(part_of="Product")
class Variant:
    """A purchasable configuration of a product, with its own price and stock."""

    color: String(max_length=50)
    size: String(max_length=50)
    barcode: String(max_length=50)
    price: ValueObject(Money, required=True)
    inventory: ValueObject(Inventory)
    weight: Float(default=0.0, min_value=0.0)
    dimensions: ValueObject(Dimensions)


def _as_json(values):
    if values is None:
        return json.dumps([])
    return values if isinstance(values, str) else json.dumps(list(values))


def build_variant(data: dict) -> Variant:
    """Construct a Variant from a plain dict (API payload or command JSON)."""
    price = data.get("price") or {}
    inventory = data.get("inventory")
    dimensions = data.get("dimensions")
    return Variant(
        color=data.get("color"),
        size=data.get("size"),
        barcode=data.get("barcode"),
        price=Money(
            amount=price.get("amount"),
            currency=price.get("currency") or "USD",
            discount=price.get("discount") or 0.0,
        ),
        inventory=Inventory(**inventory) if inventory else Inventory(),
        weight=data.get("weight") or 0.0,
        dimensions=Dimensions(**dimensions) if dimensions else None,
    )


@storefront.aggregate
class Product:
    """Product aggregate root."""

    sku: String(required=True, max_length=50, unique=True)
    name: String(required=True, max_length=255)
    brand: String(max_length=100)
    description: Text()
    categories: Text()  # JSON array
    tags: Text()  # JSON array
    image_urls: Text()  # JSON array
    variants: HasMany(Variant)
    shipping_info: ValueObject(ShippingInfo)
    warranty: String(max_length=500)
    return_policy: String(max_length=500)
    is_active: Boolean(default=True)
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def create(
        cls,
        sku,
        name,
        variants,
        brand=None,
        description=None,
        categories=None,
        tags=None,
        image_urls=None,
        shipping_info=None,
        warranty=None,
        return_policy=None,
    ):
        from storefront.product.events import ProductCreated

        if not variants:
            raise ValidationError({"variants": ["A product needs at least one variant"]})

        now = datetime.now(UTC)
        product = cls(
            sku=sku,
            name=name,
            brand=brand,
            description=description,
            categories=_as_json(categories),
            tags=_as_json(tags),
            image_urls=_as_json(image_urls),
            variants=[build_variant(v) for v in variants],
            shipping_info=shipping_info,
            warranty=warranty,
            return_policy=return_policy,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                sku=sku,
                name=name,
                variant_count=len(product.variants),
                created_at=now,
            )
        )
        return product

    def update_details(
        self,
        name=None,
        brand=None,
        description=None,
        categories=None,
        tags=None,
        image_urls=None,
        warranty=None,
        return_policy=None,
    ):
        from storefront.product.events import ProductUpdated

        if name is not None:
            self.name = name
        if brand is not None:
            self.brand = brand
        if description is not None:
            self.description = description
        if categories is not None:
            self.categories = _as_json(categories)
        if tags is not None:
            self.tags = _as_json(tags)
        if image_urls is not None:
            self.image_urls = _as_json(image_urls)
        if warranty is not None:
            self.warranty = warranty
        if return_policy is not None:
            self.return_policy = return_policy

        self.updated_at = datetime.now(UTC)
        self.raise_(ProductUpdated(product_id=self.id, name=self.name, brand=self.brand))

    def find_variant(self, variant_id) -> Variant:
        """Return the variant with ``variant_id`` or raise ObjectNotFoundError."""
        variant = next((v for v in self.variants if str(v.id) == str(variant_id)), None)
        if variant is None:
            raise ObjectNotFoundError(f"Variant {variant_id} not found on product {self.id}")
        return variant

    def add_variant(self, data: dict) -> Variant:
        from storefront.product.events import VariantAdded

        variant = build_variant(data)
        self.add_variants(variant)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            VariantAdded(
                product_id=self.id,
                variant_id=variant.id,
                price_amount=variant.price.amount,
                price_currency=variant.price.currency,
            )
        )
        return variant

    def update_variant_price(self, variant_id, amount, currency=None, discount=None):
        from storefront.product.events import VariantPriceChanged

        variant = self.find_variant(variant_id)
        previous = variant.price.amount
        variant.price = Money(
            amount=amount,
            currency=currency or variant.price.currency,
            discount=discount if discount is not None else (variant.price.discount or 0.0),
        )
        self.updated_at = datetime.now(UTC)

        self.raise_(
            VariantPriceChanged(
                product_id=self.id,
                variant_id=variant.id,
                previous_price=previous,
                new_price=variant.price.amount,
                currency=variant.price.currency,
            )
        )

    def adjust_inventory(
        self,
        variant_id,
        available=None,
        allocated=None,
        safety_stock=None,
        warehouse_location=None,
        backorderable=None,
    ):
        from storefront.product.events import InventoryAdjusted

        variant = self.find_variant(variant_id)
        current = variant.inventory or Inventory()
        variant.inventory = Inventory(
            available=available if available is not None else current.available,
            allocated=allocated if allocated is not None else current.allocated,
            safety_stock=safety_stock if safety_stock is not None else current.safety_stock,
            warehouse_location=warehouse_location if warehouse_location is not None else current.warehouse_location,
            backorderable=backorderable if backorderable is not None else current.backorderable,
        )
        self.updated_at = datetime.now(UTC)

        self.raise_(
            InventoryAdjusted(
                product_id=self.id,
                variant_id=variant.id,
                available=variant.inventory.available,
                allocated=variant.inventory.allocated,
                safety_stock=variant.inventory.safety_stock,
            )
        )

    def deactivate(self):
        from storefront.product.events import ProductDeactivated

        if not self.is_active:
            raise ValidationError({"is_active": ["Product is already inactive"]})

        self.is_active = False
        now = datetime.now(UTC)
        self.updated_at = now
        self.raise_(ProductDeactivated(product_id=self.id, deactivated_at=now))
