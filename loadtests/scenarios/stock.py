"""Stock update load test scenarios.

``StockClerkUser`` walks the catalog and sets stock levels, mixing in reads
and the occasional invalid request. ``HotProductUser`` hammers a single
product so concurrent updates contend on the same per-product lock.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import StockState

HOT_PRODUCT_ID = "p1"


class StockClerkJourney(SequentialTaskSet):
    """List products -> update stock -> read back -> send an invalid update."""

    def on_start(self):
        self.state = StockState()

    @task
    def list_products(self):
        with self.client.get("/products", catch_response=True, name="GET /products") as resp:
            if resp.status_code == 200:
                self.state.product_ids = [p["id"] for p in resp.json()]
                if not self.state.product_ids:
                    resp.failure("Catalog is empty")
                    self.interrupt()
            else:
                resp.failure(f"List products failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def update_stock(self):
        product_id = random.choice(self.state.product_ids)
        quantity = random.randint(0, 500)
        with self.client.put(
            f"/products/{product_id}/stock",
            json={"quantity": quantity},
            catch_response=True,
            name="PUT /products/{id}/stock",
        ) as resp:
            if resp.status_code == 200 and resp.json()["success"]:
                self.state.last_quantity[product_id] = quantity
                self.state.updates += 1
            else:
                resp.failure(f"Stock update failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def read_product(self):
        if not self.state.last_quantity:
            return
        product_id = random.choice(list(self.state.last_quantity))
        with self.client.get(
            f"/products/{product_id}",
            catch_response=True,
            name="GET /products/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Get product failed: {resp.status_code}: {extract_error_detail(resp)}")
            elif resp.json()["quantity"] < 0:
                resp.failure(f"Negative stock observed for {product_id}")

    @task
    def invalid_update(self):
        product_id = random.choice(self.state.product_ids)
        with self.client.put(
            f"/products/{product_id}/stock",
            json={"quantity": -random.randint(1, 50)},
            catch_response=True,
            name="PUT /products/{id}/stock [invalid]",
        ) as resp:
            if resp.status_code == 400:
                self.state.rejected += 1
                resp.success()
            else:
                resp.failure(f"Expected 400 for negative quantity, got {resp.status_code}")


class StockClerkUser(HttpUser):
    tasks = [StockClerkJourney]
    wait_time = between(0.5, 2)


class HotProductUser(HttpUser):
    """Concurrent writers on one product; every response must be a requested value."""

    wait_time = between(0.05, 0.2)

    @task(5)
    def set_hot_stock(self):
        quantity = random.randint(0, 1000)
        with self.client.put(
            f"/products/{HOT_PRODUCT_ID}/stock",
            json={"quantity": quantity},
            catch_response=True,
            name="PUT /products/{hot}/stock",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Hot update failed: {resp.status_code}: {extract_error_detail(resp)}")
            elif resp.json()["product"]["quantity"] != quantity:
                resp.failure("Response product does not reflect the requested quantity")

    @task(1)
    def read_hot_stock(self):
        with self.client.get(f"/products/{HOT_PRODUCT_ID}", catch_response=True, name="GET /products/{hot}") as resp:
            if resp.status_code != 200:
                resp.failure(f"Hot read failed: {resp.status_code}: {extract_error_detail(resp)}")
