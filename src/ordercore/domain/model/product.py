"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change, stock is reserved by orders and replenished by restocks.
Orders only ever read a product's name and price (as snapshots); stock is
changed through ``adjust_stock`` and nothing else.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum

from ordercore.domain.exceptions import InsufficientStockError, ValidationError
from ordercore.domain.model.value_objects import Money


class ProductCategory(Enum):
    ELECTRONICS = "Electronics"
    CLOTHING = "Clothing"
    BOOKS = "Books"
    HOME_GARDEN = "HomeGarden"


# Attributes each category must carry.  Anything else in ``attributes``
# is free-form and ignored by the core.
REQUIRED_ATTRIBUTES: dict[ProductCategory, tuple[str, ...]] = {
    ProductCategory.ELECTRONICS: ("brand",),
    ProductCategory.CLOTHING: ("size", "color"),
    ProductCategory.BOOKS: ("isbn", "author"),
    ProductCategory.HOME_GARDEN: ("type", "dimensions"),
}


@dataclass
class Product:
    """A product in the catalog.

    This is an aggregate root; the catalog owns every instance and hands
    out copies.  ``stock_quantity`` never drops below zero.
    """

    id: str
    name: str
    price: Money
    stock_quantity: int
    category: ProductCategory = ProductCategory.ELECTRONICS
    description: str = ""
    attributes: dict[str, str] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def validate(self) -> None:
        """Check field-level rules before the product enters the catalog."""
        if not self.id or not self.id.strip():
            raise ValidationError("Product ID is required")
        if not self.name or not self.name.strip():
            raise ValidationError("Product name is required")
        if not isinstance(self.stock_quantity, int) or self.stock_quantity < 0:
            raise ValidationError("Stock quantity cannot be negative")
        for key in REQUIRED_ATTRIBUTES[self.category]:
            if not str(self.attributes.get(key, "")).strip():
                raise ValidationError(
                    f"{self.category.value} products must have a {key}"
                )

    def adjust_stock(self, delta: int) -> None:
        """Add ``delta`` (may be negative) to the stock level."""
        if self.stock_quantity + delta < 0:
            raise InsufficientStockError(
                product_id=self.id,
                available=self.stock_quantity,
                requested=-delta,
            )
        self.stock_quantity += delta

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because line items
        capture a price snapshot when they are attached.
        """
        self.price = new_price

    def copy(self) -> Product:
        return replace(self, attributes=dict(self.attributes))

    def details(self) -> str:
        lines = [
            f"{self.category.value} - {self.name} ({self.id})",
            f"Price: {self.price}",
            f"Stock: {self.stock_quantity} units",
        ]
        for key, value in sorted(self.attributes.items()):
            lines.append(f"{key.capitalize()}: {value}")
        if self.description:
            lines.append(f"Description: {self.description}")
        return "\n".join(lines)
