"""Order query — the provider's filtered, sorted and paged view of orders.

``query_orders`` is pure. ``OrderBrowser`` keeps the console's current
filter and page, and puts the page back to 1 whenever the filter changes.
"""

import math
from dataclasses import dataclass
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Date, String

from storefront.domain import storefront
from storefront.order.order import OrderStatus

ALL_STATUSES = "all"
DEFAULT_PAGE_SIZE = 10


class OrderSort(Enum):
    DATE_DESC = "date-desc"
    DATE_ASC = "date-asc"
    AMOUNT_DESC = "amount-desc"
    AMOUNT_ASC = "amount-asc"


@storefront.value_object
class OrderFilter:
    """Filter and sort settings for the order list; criteria are AND-combined.

    ``start_date`` and ``end_date`` are calendar days and both ends are
    inclusive.
    """

    search = String(max_length=255, default="")
    status = String(max_length=20, default=ALL_STATUSES)
    start_date = Date()
    end_date = Date()
    sort_by = String(choices=OrderSort, default=OrderSort.DATE_DESC.value)

    @invariant.post
    def status_must_be_known(self):
        valid = {ALL_STATUSES} | {s.value for s in OrderStatus}
        if self.status and self.status not in valid:
            raise ValidationError({"status": [f"Unknown order status `{self.status}`"]})

    @invariant.post
    def date_range_must_be_ordered(self):
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValidationError({"end_date": ["End date cannot be before the start date"]})


@dataclass(frozen=True)
class OrderPage:
    items: tuple
    page: int
    page_size: int
    total_count: int
    total_pages: int

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1


def matches_search(order, term):
    """Whether ``term`` (already lower-cased) occurs in the id, customer or item names."""
    customer = order.customer
    fields = [str(order.order_id), customer.first_name, customer.last_name, customer.email]
    if any(term in (value or "").lower() for value in fields):
        return True
    return any(term in item.product_name.lower() for item in order.items)


def filter_orders(orders, order_filter):
    # The term is matched as typed, surrounding spaces included
    term = (order_filter.search or "").lower()
    status = order_filter.status or ALL_STATUSES

    selected = []
    for order in orders:
        if term and not matches_search(order, term):
            continue
        if status != ALL_STATUSES and order.status != status:
            continue
        order_day = order.order_date.date()
        if order_filter.start_date and order_day < order_filter.start_date:
            continue
        if order_filter.end_date and order_day > order_filter.end_date:
            continue
        selected.append(order)

    return selected


def sort_orders(orders, sort_by=OrderSort.DATE_DESC.value):
    sort = OrderSort(sort_by or OrderSort.DATE_DESC.value)

    if sort == OrderSort.DATE_ASC:
        return sorted(orders, key=lambda o: o.order_date)
    if sort == OrderSort.AMOUNT_DESC:
        return sorted(orders, key=lambda o: o.total_amount, reverse=True)
    if sort == OrderSort.AMOUNT_ASC:
        return sorted(orders, key=lambda o: o.total_amount)
    return sorted(orders, key=lambda o: o.order_date, reverse=True)


def paginate(orders, page=1, page_size=DEFAULT_PAGE_SIZE):
    if page_size < 1:
        raise ValidationError({"page_size": ["Page size must be at least 1"]})
    if page < 1:
        raise ValidationError({"page": ["Page numbers start at 1"]})

    total_count = len(orders)
    start = (page - 1) * page_size
    return OrderPage(
        items=tuple(orders[start : start + page_size]),
        page=page,
        page_size=page_size,
        total_count=total_count,
        total_pages=math.ceil(total_count / page_size),
    )


def query_orders(orders, order_filter=None, page=1, page_size=DEFAULT_PAGE_SIZE):
    """Return one page of the orders matching ``order_filter``.

    Sorts are stable, so orders that tie keep the order they were given in.
    """
    order_filter = order_filter or OrderFilter()
    selected = sort_orders(filter_orders(orders, order_filter), order_filter.sort_by)
    return paginate(selected, page, page_size)


class OrderBrowser:
    """State of the provider's order list: the active filter and page."""

    def __init__(self, store, page_size=DEFAULT_PAGE_SIZE):
        self.store = store
        self.page_size = page_size
        self.order_filter = OrderFilter()
        self.page = 1

    def apply_filter(self, order_filter=None, **changes):
        """Replace the filter, or change some of its fields, and go back to page 1."""
        if order_filter is None:
            current = self.order_filter
            values = {
                "search": current.search,
                "status": current.status,
                "start_date": current.start_date,
                "end_date": current.end_date,
                "sort_by": current.sort_by,
            }
            values.update(changes)
            order_filter = OrderFilter(**values)

        self.order_filter = order_filter
        self.page = 1
        return self.results()

    def reset_filter(self):
        return self.apply_filter(OrderFilter())

    def go_to_page(self, page):
        """Move to ``page``, clamped to the pages that currently exist."""
        total_pages = self.results(page=1).total_pages
        self.page = min(max(page, 1), max(total_pages, 1))
        return self.results()

    def results(self, page=None):
        return query_orders(
            self.store.orders,
            self.order_filter,
            page=page or self.page,
            page_size=self.page_size,
        )
