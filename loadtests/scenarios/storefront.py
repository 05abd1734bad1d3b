"""Storefront load test scenarios.

Two stateful journeys against a single running storefront:

- ShopperJourney: browse products -> open one -> add to cart -> check out.
- ProviderConsole: list orders -> filter -> open one -> change its status.

The server holds one cart for the whole session, so concurrent shoppers
share it. A 409 from checkout means another shopper's submission is still
in flight and is counted as expected contention, not a failure.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import ORDER_STATUSES, checkout_data, order_query, product_query
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ProviderState, ShopperState


class ShopperJourney(SequentialTaskSet):
    """Browse -> View product -> Add to cart -> Review cart -> Checkout.

    Models a customer buying one or two supplements.
    Generates OrderPlaced when checkout succeeds.
    """

    def on_start(self):
        self.state = ShopperState()

    @task
    def browse_products(self):
        with self.client.get(
            "/products",
            params=product_query(),
            catch_response=True,
            name="GET /products",
        ) as resp:
            if resp.status_code == 200:
                self.state.product_ids = [p["id"] for p in resp.json()["products"]]
            else:
                resp.failure(f"Browse failed: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def view_product(self):
        if not self.state.product_ids:
            # Filters matched nothing, fall back to the best sellers
            resp = self.client.get("/products/best-sellers", name="GET /products/best-sellers")
            self.state.product_ids = [p["id"] for p in resp.json()] if resp.status_code == 200 else []
        if not self.state.product_ids:
            self.interrupt()
        product_id = random.choice(self.state.product_ids)
        with self.client.get(
            f"/products/{product_id}",
            catch_response=True,
            name="GET /products/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"View product failed: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def add_to_cart(self):
        for product_id in random.sample(self.state.product_ids, k=min(2, len(self.state.product_ids))):
            with self.client.post(
                "/cart/items",
                json={"product_id": product_id, "quantity": random.randint(1, 3)},
                catch_response=True,
                name="POST /cart/items",
            ) as resp:
                if resp.status_code != 200:
                    resp.failure(f"Add to cart failed: {extract_error_detail(resp)}")

    @task
    def review_cart(self):
        self.client.get("/cart", name="GET /cart")

    @task
    def checkout(self):
        with self.client.post(
            "/checkout",
            json=checkout_data(),
            catch_response=True,
            name="POST /checkout",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_ids.append(resp.json()["order_id"])
            elif resp.status_code == 409:
                resp.success()
            elif resp.status_code == 400 and "empty" in resp.text.lower():
                # Another shopper checked out the shared cart first
                resp.success()
            else:
                resp.failure(f"Checkout failed: {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class ProviderConsole(SequentialTaskSet):
    """Dashboard -> List orders -> Page through -> Open order -> Update status.

    Models a provider working the order queue.
    Generates OrderStatusChanged for most status updates.
    """

    def on_start(self):
        self.state = ProviderState()

    @task
    def dashboard(self):
        self.client.get("/orders/stats", name="GET /orders/stats")

    @task
    def list_orders(self):
        with self.client.get(
            "/orders",
            params=order_query(),
            catch_response=True,
            name="GET /orders",
        ) as resp:
            if resp.status_code == 200:
                body = resp.json()
                self.state.order_ids = [o["order_id"] for o in body["orders"]]
                self.state.total_pages = body["total_pages"]
            else:
                resp.failure(f"List orders failed: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def next_page(self):
        if self.state.total_pages > 1:
            self.client.get(
                "/orders",
                params={"page": random.randint(2, self.state.total_pages)},
                name="GET /orders?page",
            )

    @task
    def open_order(self):
        if not self.state.order_ids:
            self.interrupt()
        order_id = random.choice(self.state.order_ids)
        with self.client.get(
            f"/orders/{order_id}",
            catch_response=True,
            name="GET /orders/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Open order failed: {extract_error_detail(resp)}")

    @task
    def update_status(self):
        order_id = random.choice(self.state.order_ids)
        with self.client.put(
            f"/orders/{order_id}/status",
            json={"status": random.choice(ORDER_STATUSES)},
            catch_response=True,
            name="PUT /orders/{id}/status",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Update status failed: {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class StorefrontUser(HttpUser):
    """Mixed storefront traffic, mostly shoppers with a few providers."""

    wait_time = between(1, 3)
    tasks = {ShopperJourney: 4, ProviderConsole: 1}
