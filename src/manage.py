"""Storefront management CLI.

Browse the bundled catalogue and the seeded orders from the terminal, using
the same query engines as the API.

Usage:
    python src/manage.py products --category Vitamins --sort price-low
    python src/manage.py orders --status pending --page 2
    python src/manage.py stats
"""

import argparse
import sys
from datetime import date

from protean.exceptions import ObjectNotFoundError, ValidationError


def _session():
    """Initialize the domain and build a session from environment settings."""
    from storefront.domain import storefront
    from storefront.session import Storefront

    storefront.init()
    context = storefront.domain_context()
    context.push()
    return Storefront.create()


def list_products(args):
    from storefront.catalogue.query import ProductFilter, query_products
    from storefront.shared.money import format_price

    session = _session()
    product_filter = ProductFilter(
        search=args.search,
        category=args.category,
        min_price=args.min_price,
        max_price=args.max_price,
        best_sellers_only=args.best_sellers,
        sort_by=args.sort,
    )
    products = query_products(session.catalogue.products, product_filter)
    for product in products:
        marker = "*" if product.best_seller else " "
        print(f"{marker} {product.product_id:>4}  {format_price(product.price):>9}  {product.category:<12} {product.name}")
    print(f"{len(products)} of {len(session.catalogue)} products")


def list_orders(args):
    from storefront.order.query import OrderFilter, query_orders
    from storefront.shared.money import format_price

    session = _session()
    order_filter = OrderFilter(
        search=args.search,
        status=args.status,
        start_date=args.start_date,
        end_date=args.end_date,
        sort_by=args.sort,
    )
    result = query_orders(
        session.orders.orders,
        order_filter,
        page=args.page,
        page_size=session.settings.orders_page_size,
    )
    for order in result.items:
        print(
            f"{order.order_id:<24} {order.order_date:%Y-%m-%d}  {order.status:<10} "
            f"{format_price(order.total_amount):>10}  {order.customer.full_name}"
        )
    print(f"Page {result.page} of {result.total_pages} ({result.total_count} orders)")


def show_stats(args):
    from storefront.order.stats import dashboard_stats
    from storefront.shared.money import format_price

    session = _session()
    stats = dashboard_stats(session.orders.orders)
    print(f"Total orders:   {stats.total_orders}")
    print(f"Total revenue:  {format_price(stats.total_revenue)}")
    print(f"Pending orders: {stats.pending_orders}")
    print("Recent orders:")
    for order in stats.recent_orders:
        print(f"  {order.order_id:<24} {order.status:<10} {format_price(order.total_amount):>10}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    products_parser = subparsers.add_parser("products", help="List catalogue products")
    products_parser.add_argument("--search", default="")
    products_parser.add_argument("--category", default="All")
    products_parser.add_argument("--min-price", type=float, default=0.0)
    products_parser.add_argument("--max-price", type=float, default=None)
    products_parser.add_argument("--best-sellers", action="store_true", help="Only best sellers")
    products_parser.add_argument(
        "--sort",
        choices=["name", "price-low", "price-high", "best-sellers"],
        default="name",
    )
    products_parser.set_defaults(handler=list_products)

    orders_parser = subparsers.add_parser("orders", help="List orders, one page at a time")
    orders_parser.add_argument("--search", default="")
    orders_parser.add_argument(
        "--status",
        choices=["all", "pending", "processing", "shipped", "delivered", "cancelled"],
        default="all",
    )
    orders_parser.add_argument("--start-date", type=date.fromisoformat, default=None, help="YYYY-MM-DD, inclusive")
    orders_parser.add_argument("--end-date", type=date.fromisoformat, default=None, help="YYYY-MM-DD, inclusive")
    orders_parser.add_argument(
        "--sort",
        choices=["date-desc", "date-asc", "amount-desc", "amount-asc"],
        default="date-desc",
    )
    orders_parser.add_argument("--page", type=int, default=1)
    orders_parser.set_defaults(handler=list_orders)

    stats_parser = subparsers.add_parser("stats", help="Show dashboard statistics")
    stats_parser.set_defaults(handler=show_stats)

    args = parser.parse_args(argv)

    try:
        args.handler(args)
    except (ValidationError, ObjectNotFoundError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
