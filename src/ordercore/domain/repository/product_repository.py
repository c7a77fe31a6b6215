"""Abstract product catalog.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory)
live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ordercore.domain.model.product import Product, ProductCategory


class ProductCatalog(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a copy of the product, or None if not found."""

    @abstractmethod
    def add(self, product: Product) -> None:
        """Add a new product.  Raises ConflictError if the ID is taken."""

    @abstractmethod
    def adjust_stock(self, product_id: str, delta: int) -> None:
        """Atomically add ``delta`` to a product's stock.

        Raises NotFoundError for an unknown product and
        InsufficientStockError if the result would be negative; in both
        cases the stock is left untouched.
        """

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    def list_by_category(self, category: ProductCategory) -> list[Product]:
        return [p for p in self.list_all() if p.category == category]

    def list_low_stock(self, threshold: int) -> list[Product]:
        return [p for p in self.list_all() if p.stock_quantity <= threshold]
