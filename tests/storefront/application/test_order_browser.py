"""Tests for the provider order console state and dashboard numbers."""

from datetime import UTC, datetime, timedelta

import pytest
from storefront.order.query import OrderBrowser, OrderFilter
from storefront.order.stats import dashboard_stats
from storefront.order.store import OrderStore


@pytest.fixture()
def store(make_order):
    start = datetime(2025, 3, 1, tzinfo=UTC)
    orders = [
        make_order(
            f"ORD-{n:03d}",
            placed_at=start + timedelta(days=n),
            status="pending" if n % 5 == 0 else "delivered",
        )
        for n in range(25)
    ]
    return OrderStore(reversed(orders))


class TestOrderBrowser:
    def test_starts_on_first_page(self, store):
        browser = OrderBrowser(store)
        page = browser.results()
        assert page.page == 1
        assert page.total_pages == 3
        assert str(page.items[0].order_id) == "ORD-024"

    def test_go_to_page(self, store):
        browser = OrderBrowser(store)
        page = browser.go_to_page(3)
        assert browser.page == 3
        assert len(page.items) == 5

    def test_go_to_page_is_clamped(self, store):
        browser = OrderBrowser(store)
        assert browser.go_to_page(9).page == 3
        assert browser.go_to_page(-1).page == 1

    def test_filter_change_resets_to_first_page(self, store):
        browser = OrderBrowser(store)
        browser.go_to_page(3)

        page = browser.apply_filter(status="pending")

        assert browser.page == 1
        assert page.page == 1
        assert page.total_count == 5
        assert page.total_pages == 1

    def test_search_change_resets_to_first_page(self, store):
        browser = OrderBrowser(store)
        browser.go_to_page(2)
        browser.apply_filter(search="ORD-01")
        assert browser.page == 1

    def test_partial_changes_keep_other_criteria(self, store):
        browser = OrderBrowser(store)
        browser.apply_filter(status="pending")
        browser.apply_filter(sort_by="date-asc")
        assert browser.order_filter.status == "pending"
        assert str(browser.results().items[0].order_id) == "ORD-000"

    def test_replace_whole_filter(self, store):
        browser = OrderBrowser(store)
        browser.apply_filter(OrderFilter(status="delivered"))
        assert browser.results().total_count == 20

    def test_reset_filter(self, store):
        browser = OrderBrowser(store)
        browser.apply_filter(status="pending")
        browser.reset_filter()
        assert browser.results().total_count == 25

    def test_results_follow_the_live_store(self, store, make_order):
        browser = OrderBrowser(store)
        store.add_order(make_order("ORD-LIVE", placed_at=datetime(2026, 1, 1, tzinfo=UTC)))
        assert str(browser.results().items[0].order_id) == "ORD-LIVE"

    def test_empty_store(self):
        browser = OrderBrowser(OrderStore())
        assert browser.go_to_page(5).page == 1
        assert browser.results().items == ()


class TestDashboardStats:
    def test_seeded_orders(self, seeded_orders):
        stats = dashboard_stats(seeded_orders.orders)
        assert stats.total_orders == 12
        assert stats.total_revenue == 832.67
        assert stats.pending_orders == 3
        assert [str(o.order_id) for o in stats.recent_orders] == [
            "ORD-1012",
            "ORD-1011",
            "ORD-1010",
            "ORD-1009",
            "ORD-1008",
        ]

    def test_no_orders(self):
        stats = dashboard_stats([])
        assert stats.total_orders == 0
        assert stats.total_revenue == 0.0
        assert stats.pending_orders == 0
        assert stats.recent_orders == ()
