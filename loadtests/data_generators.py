"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the checkout form rules (email,
North American phone and ZIP formats) and match the field names expected by
the API's Pydantic request schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker("en_US")

ORDER_STATUSES = ["pending", "processing", "shipped", "delivered", "cancelled"]
PRODUCT_SORTS = ["name", "price-low", "price-high", "best-sellers"]
ORDER_SORTS = ["date-desc", "date-asc", "amount-desc", "amount-asc"]
CATEGORIES = ["All", "Vitamins", "Minerals", "Protein", "Supplements"]
SEARCH_TERMS = ["vitamin", "protein", "immune", "sleep", "omega", "zinc"]


def valid_email() -> str:
    """Generate emails matching local@domain.tld with no whitespace."""
    local = fake.user_name()[:20]
    return f"{local}.{uuid.uuid4().hex[:4]}@{fake.free_email_domain()}"


def valid_phone() -> str:
    """Generate phones in the (555) 123-4567 shape."""
    area = random.randint(200, 999)
    prefix = random.randint(200, 999)
    line = random.randint(1000, 9999)
    return f"({area}) {prefix}-{line}"


def valid_zip() -> str:
    if random.random() < 0.2:
        return f"{random.randint(10000, 99999)}-{random.randint(1000, 9999)}"
    return f"{random.randint(10000, 99999)}"


def checkout_data() -> dict:
    return {
        "first_name": fake.first_name(),
        "last_name": fake.last_name(),
        "email": valid_email(),
        "phone": valid_phone(),
        "street": fake.street_address(),
        "city": fake.city(),
        "state": fake.state_abbr(),
        "zip_code": valid_zip(),
        "country": "USA",
    }


def product_query() -> dict:
    params = {"sort_by": random.choice(PRODUCT_SORTS)}
    if random.random() < 0.5:
        params["category"] = random.choice(CATEGORIES)
    if random.random() < 0.3:
        params["search"] = random.choice(SEARCH_TERMS)
    if random.random() < 0.2:
        params["best_sellers_only"] = "true"
    return params


def order_query() -> dict:
    params = {"sort_by": random.choice(ORDER_SORTS)}
    if random.random() < 0.4:
        params["status"] = random.choice(ORDER_STATUSES)
    return params
