"""Helpers that turn aggregates into response payloads."""

import json

from storefront.api.schemas import ApiResponse
from storefront.shared.pagination import Page

# Text fields that hold JSON documents, keyed by aggregate name
_JSON_FIELDS = {
    "Product": ("categories", "tags", "image_urls"),
    "Cart": ("applied_coupons",),
    "Order": ("metadata",),
}


def serialize(aggregate) -> dict:
    data = aggregate.to_dict()
    for field in _JSON_FIELDS.get(aggregate.__class__.__name__, ()):
        if isinstance(data.get(field), str):
            data[field] = json.loads(data[field])
    return data


def ok(data=None, message: str | None = None) -> ApiResponse:
    if data is not None and not isinstance(data, (dict, list)):
        data = serialize(data)
    return ApiResponse(message=message, data=data)


def paged(page: Page) -> ApiResponse:
    return ApiResponse(
        data=[serialize(item) for item in page.items],
        pagination=page.to_pagination(),
    )
