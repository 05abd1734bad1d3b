"""Product aggregate — a catalogue entry loaded once from bundled data."""

from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, Float, Identifier, Integer, List, String, Text

from storefront.domain import storefront


class ProductCategory(Enum):
    """Enumeration of catalogue categories."""

    VITAMINS = "Vitamins"
    MINERALS = "Minerals"
    PROTEIN = "Protein"
    SUPPLEMENTS = "Supplements"


# Sentinel accepted by catalogue filters to mean "every category"
ALL_CATEGORIES = "All"


@storefront.aggregate
class Product:
    """Product aggregate root."""

    product_id: Identifier(identifier=True, required=True)
    name: String(required=True, max_length=255)
    category: String(required=True, choices=ProductCategory)
    price: Float(required=True, min_value=0.0)
    description: Text()
    long_description: Text()
    image: String(max_length=500)
    images: List(content_type=String, default=list)
    best_seller: Boolean(default=False)
    in_stock: Boolean(default=True)
    rating: Float(default=0.0, min_value=0.0, max_value=5.0)
    review_count: Integer(default=0, min_value=0)
    certifications: List(content_type=String, default=list)
    ingredients: List(content_type=String, default=list)
    benefits: List(content_type=String, default=list)
    serving_size: String(max_length=100)
    servings_per_container: Integer(min_value=0)
    tags: List(content_type=String, default=list)

    @invariant.post
    def name_must_not_be_blank(self):
        if not self.name or not self.name.strip():
            raise ValidationError({"name": ["Product name cannot be blank"]})

    @classmethod
    def from_record(cls, record):
        """Build a Product from a bundled catalogue record (camelCase keys)."""
        return cls(
            product_id=record["id"],
            name=record["name"],
            category=record["category"],
            price=record["price"],
            description=record.get("description", ""),
            long_description=record.get("longDescription", ""),
            image=record.get("image"),
            images=list(record.get("images", [])),
            best_seller=record.get("bestSeller", False),
            in_stock=record.get("inStock", True),
            rating=record.get("rating", 0.0),
            review_count=record.get("reviewCount", 0),
            certifications=list(record.get("certifications", [])),
            ingredients=list(record.get("ingredients", [])),
            benefits=list(record.get("benefits", [])),
            serving_size=record.get("servingSize"),
            servings_per_container=record.get("servingsPerContainer"),
            tags=list(record.get("tags", [])),
        )
