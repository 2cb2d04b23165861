"""Integration tests for the /products endpoints."""

from protean import current_domain
from storefront.product.product import Product


class TestCreateProduct:
    def test_create_product(self, client):
        response = client.post(
            "/products",
            json={
                "sku": "MUG-001",
                "name": "Mug",
                "tags": ["kitchen", "ceramic"],
                "variants": [{"color": "white", "price": {"amount": 8.5, "discount": 0.5}}],
            },
        )
        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Product created successfully"
        assert body["data"]["sku"] == "MUG-001"
        assert body["data"]["tags"] == ["kitchen", "ceramic"]
        assert body["data"]["variants"][0]["price"]["amount"] == 8.5

        assert current_domain.repository_for(Product).get(body["data"]["id"]).name == "Mug"

    def test_variants_are_required(self, client):
        response = client.post("/products", json={"sku": "NOVAR-1", "name": "Nothing", "variants": []})
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert any(error["field"] == "variants" for error in body["errors"])

    def test_duplicate_sku(self, client, product):
        response = client.post(
            "/products",
            json={"sku": "TSHIRT-001", "name": "Copy", "variants": [{"price": {"amount": 1.0}}]},
        )
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "sku"


class TestReadProducts:
    def test_get_product(self, client, product):
        response = client.get(f"/products/{product['id']}")
        assert response.status_code == 200
        assert response.json()["data"]["categories"] == ["apparel"]

    def test_missing_product(self, client):
        response = client.get("/products/does-not-exist")
        assert response.status_code == 404
        assert response.json()["success"] is False

    def test_list_filters_by_brand(self, client, product):
        client.post(
            "/products",
            json={"sku": "MUG-001", "name": "Mug", "brand": "Kitchen", "variants": [{"price": {"amount": 8.0}}]},
        )
        response = client.get("/products", params={"brand": "Basics"})
        body = response.json()
        assert response.status_code == 200
        assert [p["sku"] for p in body["data"]] == ["TSHIRT-001"]
        assert body["pagination"]["total_items"] == 1


class TestModifyProducts:
    def test_update_product(self, client, product):
        response = client.put(f"/products/{product['id']}", json={"name": "Heavy T-Shirt", "tags": ["cotton"]})
        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Heavy T-Shirt"
        assert response.json()["data"]["tags"] == ["cotton"]

    def test_add_variant(self, client, product):
        response = client.post(
            f"/products/{product['id']}/variants",
            json={"color": "red", "size": "S", "price": {"amount": 90.0}},
        )
        assert response.status_code == 201
        assert len(response.json()["data"]["variants"]) == 2

    def test_variant_price_and_inventory(self, client, product):
        variant_id = product["variants"][0]["id"]
        client.put(f"/products/{product['id']}/variants/{variant_id}/price", json={"amount": 80.0})
        response = client.put(
            f"/products/{product['id']}/variants/{variant_id}/inventory",
            json={"available": 25, "warehouse_location": "A-1"},
        )
        assert response.status_code == 200
        variant = response.json()["data"]["variants"][0]
        assert variant["price"]["amount"] == 80.0
        assert variant["inventory"]["available"] == 25

    def test_deactivate_product(self, client, product):
        response = client.delete(f"/products/{product['id']}")
        assert response.status_code == 200
        assert response.json()["data"]["is_active"] is False
