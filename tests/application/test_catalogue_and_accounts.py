"""Application tests for product and user commands."""

import json

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from storefront.product.creation import CreateProduct
from storefront.product.lifecycle import DeactivateProduct, UpdateProduct
from storefront.product.product import Product
from storefront.product.variants import AddVariant, AdjustInventory, UpdateVariantPrice
from storefront.user.account import DeactivateUser, RecordLogin
from storefront.user.addresses import AddAddress, RemoveAddress, SetDefaultAddress
from storefront.user.loyalty import AddLoyaltyPoints, RedeemLoyaltyPoints
from storefront.user.registration import RegisterUser, UpdateUser
from storefront.user.user import User


def _product(product_id):
    return current_domain.repository_for(Product).get(product_id)


def _user(user_id):
    return current_domain.repository_for(User).get(user_id)


class TestProductCommands:
    def test_duplicate_sku_rejected(self, product_id):
        with pytest.raises(ValidationError) as exc:
            current_domain.process(
                CreateProduct(
                    sku="TSHIRT-001",
                    name="Copy",
                    variants=json.dumps([{"price": {"amount": 1.0}}]),
                ),
                asynchronous=False,
            )
        assert "sku" in exc.value.messages

    def test_shipping_info_is_recorded(self):
        product_id = current_domain.process(
            CreateProduct(
                sku="BOOK-1",
                name="Book",
                variants=json.dumps([{"price": {"amount": 20.0}}]),
                shipping_weight=0.4,
                ships_from="Warehouse A",
            ),
            asynchronous=False,
        )
        product = _product(product_id)
        assert product.shipping_info.weight == 0.4
        assert product.shipping_info.handling_days == 1

    def test_update_and_deactivate(self, product_id):
        current_domain.process(UpdateProduct(product_id=product_id, name="Heavy T-Shirt"), asynchronous=False)
        current_domain.process(DeactivateProduct(product_id=product_id), asynchronous=False)
        product = _product(product_id)
        assert product.name == "Heavy T-Shirt"
        assert product.is_active is False

    def test_variant_commands(self, product_id):
        variant_id = current_domain.process(
            AddVariant(product_id=product_id, variant=json.dumps({"color": "red", "price": {"amount": 50.0}})),
            asynchronous=False,
        )
        current_domain.process(
            UpdateVariantPrice(product_id=product_id, variant_id=variant_id, amount=45.0),
            asynchronous=False,
        )
        current_domain.process(
            AdjustInventory(product_id=product_id, variant_id=variant_id, available=12),
            asynchronous=False,
        )
        variant = _product(product_id).find_variant(variant_id)
        assert variant.price.amount == 45.0
        assert variant.inventory.available == 12

    def test_missing_product(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(DeactivateProduct(product_id="missing"), asynchronous=False)


class TestUserCommands:
    def test_duplicate_email_rejected(self, user_id):
        with pytest.raises(ValidationError) as exc:
            current_domain.process(RegisterUser(name="Other", email="ada@example.com"), asynchronous=False)
        assert "email" in exc.value.messages

    def test_update_user(self, user_id):
        current_domain.process(UpdateUser(user_id=user_id, phone="+44-20-0000-0000"), asynchronous=False)
        assert _user(user_id).phone == "+44-20-0000-0000"

    def test_address_commands(self, user_id):
        address_id = current_domain.process(
            AddAddress(user_id=user_id, street="2 Side St", city="Leeds", postal_code="LS1", country="GB"),
            asynchronous=False,
        )
        current_domain.process(SetDefaultAddress(user_id=user_id, address_id=address_id), asynchronous=False)
        assert str(_user(user_id).default_address.id) == address_id

        current_domain.process(RemoveAddress(user_id=user_id, address_id=address_id), asynchronous=False)
        user = _user(user_id)
        assert len(user.addresses) == 1
        assert user.default_address is not None

    def test_loyalty_commands(self, user_id):
        current_domain.process(AddLoyaltyPoints(user_id=user_id, points=6000), asynchronous=False)
        assert _user(user_id).loyalty_tier == "Gold"

        current_domain.process(RedeemLoyaltyPoints(user_id=user_id, points=5500), asynchronous=False)
        user = _user(user_id)
        assert user.loyalty_points == 500
        assert user.loyalty_tier == "Bronze"

    def test_login_and_deactivate(self, user_id):
        current_domain.process(RecordLogin(user_id=user_id), asynchronous=False)
        assert _user(user_id).last_login is not None

        current_domain.process(DeactivateUser(user_id=user_id), asynchronous=False)
        assert _user(user_id).is_active is False
