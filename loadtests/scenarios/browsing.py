"""Catalogue browsing load test scenario.

Read-heavy traffic: list products, page through results and open product
and order lookups. Seeds a handful of products on start so reads have
something to return.
"""

import random

from locust import HttpUser, between, task

from loadtests.data_generators import product_data
from loadtests.helpers.response import data_of
from loadtests.helpers.state import CatalogueState


class BrowsingUser(HttpUser):
    """Anonymous visitor paging through the catalogue."""

    wait_time = between(0.5, 2)

    def on_start(self):
        self.state = CatalogueState()
        for _ in range(3):
            resp = self.client.post("/products", json=product_data(num_variants=1), name="POST /products (seed)")
            if resp.status_code == 201:
                self.state.product_ids.append(data_of(resp)["id"])

    @task(5)
    def list_products(self):
        page = random.randint(1, 3)
        self.client.get(f"/products?page={page}&limit=20", name="GET /products")

    @task(3)
    def get_product(self):
        if self.state.product_ids:
            product_id = random.choice(self.state.product_ids)
            self.client.get(f"/products/{product_id}", name="GET /products/{id}")

    @task(1)
    def list_recent_orders(self):
        self.client.get("/orders?limit=10&sort=created_at&order=desc", name="GET /orders")

    @task(1)
    def health(self):
        self.client.get("/health", name="GET /health")
