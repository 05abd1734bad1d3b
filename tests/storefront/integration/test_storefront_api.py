"""Integration tests for the Storefront API endpoints via TestClient."""

import pytest
from fastapi.testclient import TestClient
from storefront.api import create_app
from storefront.config import Settings
from storefront.session import Storefront


@pytest.fixture()
def session():
    return Storefront.create(Settings(checkout_delay=0))


@pytest.fixture()
def client(session):
    return TestClient(create_app(session))


def _add_item(client, product_id="1", quantity=1):
    response = client.post("/cart/items", json={"product_id": product_id, "quantity": quantity})
    assert response.status_code == 200
    return response.json()


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["products"] == 12


class TestProductEndpoints:
    def test_list_products_sorted_by_name(self, client):
        response = client.get("/products")
        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 12
        assert body["products"][0]["name"] == "Ashwagandha KSM-66"
        assert body["categories"][0] == "All"
        assert body["max_price"] == 54.99

    def test_filter_products(self, client):
        response = client.get("/products", params={"category": "Minerals", "sort_by": "price-low"})
        assert [p["id"] for p in response.json()["products"]] == ["6", "10", "4"]

    def test_search_products(self, client):
        response = client.get("/products", params={"search": "protein"})
        assert {p["id"] for p in response.json()["products"]} == {"5", "8"}

    def test_invalid_filter_is_a_bad_request(self, client):
        response = client.get("/products", params={"category": "Snacks"})
        assert response.status_code == 400

    def test_best_sellers(self, client):
        response = client.get("/products/best-sellers")
        assert [p["id"] for p in response.json()] == ["1", "2", "5", "7"]

    def test_product_detail(self, client):
        response = client.get("/products/5")
        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Whey Protein Isolate"
        assert body["serving_size"] == "1 scoop (30 g)"

    def test_unknown_product(self, client):
        assert client.get("/products/999").status_code == 404


class TestCartEndpoints:
    def test_empty_cart(self, client):
        body = client.get("/cart").json()
        assert body["items"] == []
        assert body["total_items"] == 0
        assert body["shipping_cost"] == 0.0

    def test_add_item(self, client):
        body = _add_item(client, "1", 2)
        assert body["total_items"] == 2
        assert body["subtotal"] == 39.98
        assert body["shipping_cost"] == 9.99
        assert body["total"] == 49.97

    def test_add_same_item_merges(self, client):
        _add_item(client, "1", 2)
        body = _add_item(client, "1", 3)
        assert len(body["items"]) == 1
        assert body["items"][0]["quantity"] == 5

    def test_add_unknown_product(self, client):
        response = client.post("/cart/items", json={"product_id": "999"})
        assert response.status_code == 404

    def test_add_zero_quantity(self, client):
        response = client.post("/cart/items", json={"product_id": "1", "quantity": 0})
        assert response.status_code == 400

    def test_update_quantity(self, client):
        _add_item(client, "1")
        response = client.put("/cart/items/1", json={"quantity": 4})
        assert response.json()["total_items"] == 4

    def test_update_to_zero_removes(self, client):
        _add_item(client, "1")
        response = client.put("/cart/items/1", json={"quantity": 0})
        assert response.json()["items"] == []

    def test_remove_item(self, client):
        _add_item(client, "1")
        _add_item(client, "2")
        body = client.delete("/cart/items/1").json()
        assert [i["product_id"] for i in body["items"]] == ["2"]

    def test_clear_cart(self, client):
        _add_item(client, "1")
        body = client.delete("/cart").json()
        assert body["total_items"] == 0


class TestCheckoutEndpoint:
    def test_checkout_places_order(self, client, session, checkout_form):
        _add_item(client, "5", 2)

        response = client.post("/checkout", json=checkout_form)

        assert response.status_code == 201
        order_id = response.json()["order_id"]
        assert order_id.startswith("ORD-")
        order = session.orders.get_order_by_id(order_id)
        assert order.total_amount == 109.98
        assert client.get("/cart").json()["total_items"] == 0

    def test_checkout_with_empty_cart(self, client, session, checkout_form):
        response = client.post("/checkout", json=checkout_form)
        assert response.status_code == 400
        assert len(session.orders) == 12

    def test_checkout_with_invalid_form(self, client, session, checkout_form):
        _add_item(client, "1")
        checkout_form["phone"] = "call me"
        response = client.post("/checkout", json=checkout_form)
        assert response.status_code == 400
        assert "phone" in str(response.json())
        assert client.get("/cart").json()["total_items"] == 1


class TestOrderEndpoints:
    def test_list_orders(self, client):
        body = client.get("/orders").json()
        assert body["total_count"] == 12
        assert body["total_pages"] == 2
        assert len(body["orders"]) == 10
        assert body["orders"][0]["order_id"] == "ORD-1012"

    def test_filter_orders(self, client):
        body = client.get("/orders", params={"status": "delivered", "sort_by": "amount-desc"}).json()
        assert [o["order_id"] for o in body["orders"]] == ["ORD-1006", "ORD-1009", "ORD-1002", "ORD-1005"]

    def test_filter_orders_by_date(self, client):
        body = client.get("/orders", params={"start_date": "2025-06-01", "end_date": "2025-06-10"}).json()
        assert body["total_count"] == 3

    def test_second_page(self, client):
        body = client.get("/orders", params={"page": 2}).json()
        assert [o["order_id"] for o in body["orders"]] == ["ORD-1002", "ORD-1001"]

    def test_page_zero_is_a_bad_request(self, client):
        assert client.get("/orders", params={"page": 0}).status_code == 400

    def test_order_detail(self, client):
        body = client.get("/orders/ORD-1005").json()
        assert body["customer_name"] == "Robert Johnson"
        assert body["subtotal"] == 65.97
        assert body["shipping_cost"] == 9.99
        assert len(body["items"]) == 2

    def test_unknown_order(self, client):
        assert client.get("/orders/ORD-0000").status_code == 404

    def test_update_status(self, client):
        response = client.put("/orders/ORD-1012/status", json={"status": "shipped"})
        assert response.status_code == 200
        assert response.json()["status"] == "shipped"
        assert response.json()["shipping_date"] is not None

    def test_update_status_of_unknown_order(self, client):
        response = client.put("/orders/ORD-0000/status", json={"status": "shipped"})
        assert response.status_code == 404

    def test_update_to_invalid_status(self, client):
        response = client.put("/orders/ORD-1012/status", json={"status": "lost"})
        assert response.status_code == 400

    def test_stats(self, client):
        body = client.get("/orders/stats").json()
        assert body["total_orders"] == 12
        assert body["total_revenue"] == 832.67
        assert body["pending_orders"] == 3
        assert len(body["recent_orders"]) == 5

    def test_placed_order_shows_up_first(self, client, checkout_form):
        _add_item(client, "1")
        order_id = client.post("/checkout", json=checkout_form).json()["order_id"]
        body = client.get("/orders/stats").json()
        assert body["total_orders"] == 13
        assert body["recent_orders"][0]["order_id"] == order_id
