"""Variant management — commands and handler."""

import json

from protean import handle
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.product.product import Product


@storefront.command(part_of="Product")
class AddVariant:
    product_id: Identifier(required=True)
    variant: Text(required=True)  # JSON dict: color, size, barcode, price, inventory, weight, dimensions


@storefront.command(part_of="Product")
class UpdateVariantPrice:
    product_id: Identifier(required=True)
    variant_id: Identifier(required=True)
    amount: Float(required=True, min_value=0.0)
    currency: String(max_length=3)
    discount: Float(min_value=0.0)


@storefront.command(part_of="Product")
class AdjustInventory:
    product_id: Identifier(required=True)
    variant_id: Identifier(required=True)
    available: Integer(min_value=0)
    allocated: Integer(min_value=0)
    safety_stock: Integer(min_value=0)
    warehouse_location: String(max_length=100)
    backorderable: Boolean()


@storefront.command_handler(part_of=Product)
class ManageVariantsHandler:
    @handle(AddVariant)
    def add_variant(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        variant = product.add_variant(json.loads(command.variant))
        repo.add(product)
        return str(variant.id)

    @handle(UpdateVariantPrice)
    def update_variant_price(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update_variant_price(
            variant_id=command.variant_id,
            amount=command.amount,
            currency=command.currency,
            discount=command.discount,
        )
        repo.add(product)

    @handle(AdjustInventory)
    def adjust_inventory(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.adjust_inventory(
            variant_id=command.variant_id,
            available=command.available,
            allocated=command.allocated,
            safety_stock=command.safety_stock,
            warehouse_location=command.warehouse_location,
            backorderable=command.backorderable,
        )
        repo.add(product)
