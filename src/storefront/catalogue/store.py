"""Catalogue store — the read-only product list for a session."""

import json
from pathlib import Path

from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.catalogue.product import ALL_CATEGORIES, Product, ProductCategory
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CatalogueStore:
    """Holds the catalogue loaded at startup and answers lookups by id.

    The product sequence keeps the order of the source data. Products are
    shared read-only with the cart and the query engine.
    """

    def __init__(self, products):
        by_id = {}
        for product in products:
            if product.product_id in by_id:
                raise ValidationError({"product_id": [f"Duplicate product id `{product.product_id}`"]})
            by_id[product.product_id] = product

        self._products = tuple(by_id.values())
        self._by_id = by_id

    @classmethod
    def from_records(cls, records):
        return cls(Product.from_record(record) for record in records)

    @classmethod
    def load(cls, path: Path) -> "CatalogueStore":
        """Load the catalogue from a JSON file holding a list of product records."""
        with open(path, encoding="utf-8") as fh:
            records = json.load(fh)

        store = cls.from_records(records)
        logger.info("catalogue_loaded", path=str(path), product_count=len(store))
        return store

    @property
    def products(self) -> tuple:
        return self._products

    def get(self, product_id) -> Product:
        """Return the product with the given id, or raise ``ObjectNotFoundError``."""
        try:
            return self._by_id[str(product_id)]
        except KeyError:
            raise ObjectNotFoundError({"product_id": [f"Product `{product_id}` does not exist"]}) from None

    def best_sellers(self, limit: int = 4) -> list:
        """Best-selling products in catalogue order, as featured on the home page."""
        return [p for p in self._products if p.best_seller][:limit]

    @property
    def max_price(self) -> float:
        """Highest price in the catalogue; the upper end of a reset price filter."""
        return max((p.price for p in self._products), default=0.0)

    @property
    def categories(self) -> list:
        """Category choices for filtering, led by the "All" sentinel."""
        return [ALL_CATEGORIES] + [category.value for category in ProductCategory]

    def __len__(self):
        return len(self._products)

    def __iter__(self):
        return iter(self._products)

    def __contains__(self, product_id):
        return str(product_id) in self._by_id
