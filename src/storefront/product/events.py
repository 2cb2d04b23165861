"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductCreated:
    """A new product was added to the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    sku: String(required=True)
    name: String(required=True)
    variant_count: Integer(required=True)
    created_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductUpdated:
    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    brand: String()


@storefront.event(part_of="Product")
class VariantAdded:
    """A new purchasable variant was added to a product."""

    __version__ = 1

    product_id: Identifier(required=True)
    variant_id: Identifier(required=True)
    price_amount: Float(required=True)
    price_currency: String(required=True)


@storefront.event(part_of="Product")
class VariantPriceChanged:
    __version__ = 1

    product_id: Identifier(required=True)
    variant_id: Identifier(required=True)
    previous_price: Float(required=True)
    new_price: Float(required=True)
    currency: String(required=True)


@storefront.event(part_of="Product")
class InventoryAdjusted:
    """Stock counts for a variant were corrected."""

    __version__ = 1

    product_id: Identifier(required=True)
    variant_id: Identifier(required=True)
    available: Integer(required=True)
    allocated: Integer(required=True)
    safety_stock: Integer(required=True)


@storefront.event(part_of="Product")
class ProductDeactivated:
    """A product was withdrawn from sale (soft delete)."""

    __version__ = 1

    product_id: Identifier(required=True)
    deactivated_at: DateTime(required=True)
