"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the domain's validation rules
and match the exact field names expected by the API's Pydantic request
schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker()

CARRIERS = ["UPS", "FedEx", "DHL", "USPS", "Amazon Logistics"]

# ---------- Users ----------


def valid_email() -> str:
    """Unique emails: one @, a dotted domain, no spaces."""
    local = fake.user_name()[:20]
    domain = fake.free_email_domain()
    return f"{local}.{uuid.uuid4().hex[:4]}@{domain}"


def valid_phone() -> str:
    area = random.randint(200, 999)
    prefix = random.randint(200, 999)
    line = random.randint(1000, 9999)
    return f"+1-{area}-{prefix}-{line}"


def user_data() -> dict:
    """RegisterUserRequest payload."""
    return {
        "name": fake.name()[:255],
        "email": valid_email(),
        "phone": valid_phone(),
    }


def address_data(is_default: bool = False) -> dict:
    """AddAddressRequest payload."""
    return {
        "address_type": random.choice(["home", "work", "other"]),
        "street": fake.street_address()[:255],
        "city": fake.city()[:100],
        "state": fake.state_abbr(),
        "postal_code": fake.zipcode()[:20],
        "country": "US",
        "phone": valid_phone(),
        "is_default": is_default,
    }


def payment_method_data() -> dict:
    """AddPaymentMethodRequest payload for a card."""
    return {
        "method_type": random.choice(["credit_card", "debit_card"]),
        "provider": random.choice(["Visa", "Mastercard", "Amex"]),
        "last4": f"{random.randint(0, 9999):04d}",
        "expiry_month": random.randint(1, 12),
        "expiry_year": random.randint(2027, 2032),
        "holder_name": fake.name()[:255],
    }


# ---------- Products ----------


def valid_sku(prefix: str = "LT") -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8].upper()}"


def variant_data() -> dict:
    """VariantSchema payload with a price and some stock."""
    return {
        "color": fake.color_name(),
        "size": random.choice(["XS", "S", "M", "L", "XL"]),
        "price": {
            "amount": round(random.uniform(5.0, 250.0), 2),
            "currency": "USD",
        },
        "inventory": {"available": random.randint(10, 500)},
        "weight": round(random.uniform(0.1, 5.0), 2),
    }


def product_data(num_variants: int = 2) -> dict:
    """CreateProductRequest payload."""
    word = fake.word().capitalize()
    return {
        "sku": valid_sku("PROD"),
        "name": f"{word} {fake.word().capitalize()}"[:255],
        "brand": fake.company()[:100],
        "description": fake.sentence(nb_words=12),
        "categories": [fake.word() for _ in range(2)],
        "tags": [fake.word() for _ in range(3)],
        "variants": [variant_data() for _ in range(num_variants)],
    }


# ---------- Carts & checkouts ----------


def cart_item_data(product_id: str, variant_id: str) -> dict:
    return {
        "product_id": product_id,
        "variant_id": variant_id,
        "quantity": random.randint(1, 3),
    }


def checkout_data(user_id: str, cart_id: str) -> dict:
    """CreateCheckoutRequest payload using the user's defaults."""
    return {
        "user_id": user_id,
        "cart_id": cart_id,
        "shipping_method": {
            "method_id": random.choice(["standard", "express"]),
            "label": "Standard shipping",
            "cost": round(random.uniform(0.0, 15.0), 2),
            "estimated_days": random.randint(1, 7),
        },
        "gateway": "stripe",
    }


def completion_data() -> dict:
    return {
        "transaction_id": f"txn_{uuid.uuid4().hex[:12]}",
        "payment_intent_id": f"pi_{uuid.uuid4().hex[:12]}",
    }


# ---------- Shipments ----------


def shipment_data(order_id: str) -> dict:
    """CreateShipmentRequest payload."""
    return {
        "order_id": order_id,
        "carrier": random.choice(CARRIERS),
        "shipping_method": random.choice(["ground", "express"]),
        "cost": round(random.uniform(4.0, 20.0), 2),
        "package_details": {
            "weight": round(random.uniform(0.5, 10.0), 2),
            "length": round(random.uniform(10.0, 60.0), 1),
            "width": round(random.uniform(10.0, 40.0), 1),
            "height": round(random.uniform(5.0, 30.0), 1),
            "package_type": "box",
        },
    }


def tracking_event_data(status: str) -> dict:
    return {
        "status": status,
        "location": f"{fake.city()}, {fake.state_abbr()}",
        "description": f"Package {status.replace('_', ' ')}",
    }
