"""Product details and lifecycle — commands and handler."""

import json

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.product.product import Product


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    name: String(max_length=255)
    brand: String(max_length=100)
    description: String()
    categories: Text()
    tags: Text()
    image_urls: Text()
    warranty: String(max_length=500)
    return_policy: String(max_length=500)


@storefront.command(part_of="Product")
class DeactivateProduct:
    product_id: Identifier(required=True)


def _maybe_json(value):
    return json.loads(value) if value else None


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update_details(
            name=command.name,
            brand=command.brand,
            description=command.description,
            categories=_maybe_json(command.categories),
            tags=_maybe_json(command.tags),
            image_urls=_maybe_json(command.image_urls),
            warranty=command.warranty,
            return_policy=command.return_policy,
        )
        repo.add(product)

    @handle(DeactivateProduct)
    def deactivate_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.deactivate()
        repo.add(product)
