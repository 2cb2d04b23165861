"""Product creation — command and handler."""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Float, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.product.product import Product, ShippingInfo


@storefront.command(part_of="Product")
class CreateProduct:
    sku: String(required=True, max_length=50)
    name: String(required=True, max_length=255)
    brand: String(max_length=100)
    description: String()
    categories: Text()  # JSON array of strings
    tags: Text()  # JSON array of strings
    image_urls: Text()  # JSON array of strings
    variants: Text(required=True)  # JSON array of variant dicts
    shipping_weight: Float()
    free_shipping: Boolean(default=False)
    ships_from: String(max_length=100)
    handling_days: Integer()
    warranty: String(max_length=500)
    return_policy: String(max_length=500)


@storefront.command_handler(part_of=Product)
class CreateProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        repo = current_domain.repository_for(Product)
        if repo.find_by_sku(command.sku) is not None:
            raise ValidationError({"sku": [f"A product with SKU {command.sku} already exists"]})

        shipping_info = None
        if command.shipping_weight is not None or command.ships_from or command.free_shipping:
            shipping_info = ShippingInfo(
                weight=command.shipping_weight,
                free_shipping=bool(command.free_shipping),
                ships_from=command.ships_from,
                handling_days=command.handling_days if command.handling_days is not None else 1,
            )

        product = Product.create(
            sku=command.sku,
            name=command.name,
            brand=command.brand,
            description=command.description,
            categories=json.loads(command.categories) if command.categories else None,
            tags=json.loads(command.tags) if command.tags else None,
            image_urls=json.loads(command.image_urls) if command.image_urls else None,
            variants=json.loads(command.variants),
            shipping_info=shipping_info,
            warranty=command.warranty,
            return_policy=command.return_policy,
        )
        repo.add(product)
        return str(product.id)
