"""Catalogue query — filter and sort products for the product listing.

``query_products`` is a pure function: it never mutates the products it is
given and always returns a new list.
"""

from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, Float, String

from storefront.catalogue.product import ALL_CATEGORIES, ProductCategory
from storefront.domain import storefront


class ProductSort(Enum):
    NAME = "name"
    PRICE_LOW = "price-low"
    PRICE_HIGH = "price-high"
    BEST_SELLERS = "best-sellers"


@storefront.value_object
class ProductFilter:
    """Filter and sort settings for the product listing.

    All criteria are combined with AND. ``max_price`` left unset means no
    upper bound.
    """

    search: String(max_length=255, default="")
    category: String(max_length=50, default=ALL_CATEGORIES)
    min_price: Float(min_value=0.0, default=0.0)
    max_price: Float(min_value=0.0)
    best_sellers_only: Boolean(default=False)
    sort_by: String(choices=ProductSort, default=ProductSort.NAME.value)

    @invariant.post
    def category_must_be_known(self):
        valid = {ALL_CATEGORIES} | {c.value for c in ProductCategory}
        if self.category and self.category not in valid:
            raise ValidationError({"category": [f"Unknown category `{self.category}`"]})

    @invariant.post
    def price_range_must_be_ordered(self):
        if self.max_price is not None and self.min_price is not None and self.min_price > self.max_price:
            raise ValidationError({"max_price": ["Maximum price cannot be below the minimum price"]})


def name_sort_key(name):
    """Case-insensitive name ordering; on a tie the lower-case spelling comes first."""
    return (name.casefold(), name.swapcase())


def matches_search(product, term):
    """Whether ``term`` (already lower-cased) occurs in the name, description or a tag."""
    if term in product.name.lower():
        return True
    if term in (product.description or "").lower():
        return True
    return any(term in tag.lower() for tag in product.tags or [])


def filter_products(products, product_filter):
    # The term is matched as typed, surrounding spaces included
    term = (product_filter.search or "").lower()
    category = product_filter.category or ALL_CATEGORIES
    min_price = product_filter.min_price or 0.0
    max_price = product_filter.max_price

    selected = []
    for product in products:
        if term and not matches_search(product, term):
            continue
        if category != ALL_CATEGORIES and product.category != category:
            continue
        if product.price < min_price:
            continue
        if max_price is not None and product.price > max_price:
            continue
        if product_filter.best_sellers_only and not product.best_seller:
            continue
        selected.append(product)

    return selected


def sort_products(products, sort_by=ProductSort.NAME.value):
    sort = ProductSort(sort_by or ProductSort.NAME.value)

    if sort == ProductSort.PRICE_LOW:
        return sorted(products, key=lambda p: p.price)
    if sort == ProductSort.PRICE_HIGH:
        return sorted(products, key=lambda p: p.price, reverse=True)
    if sort == ProductSort.BEST_SELLERS:
        return sorted(products, key=lambda p: (not p.best_seller, name_sort_key(p.name)))
    return sorted(products, key=lambda p: name_sort_key(p.name))


def query_products(products, product_filter=None):
    """Return the products matching ``product_filter``, sorted as it asks.

    With no filter every product is returned, sorted by name.
    """
    product_filter = product_filter or ProductFilter()
    return sort_products(filter_products(products, product_filter), product_filter.sort_by)
