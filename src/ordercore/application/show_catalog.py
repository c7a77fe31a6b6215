"""Application service: Show Catalog use case (query)."""

from __future__ import annotations

from ordercore.application.dto import ProductDTO
from ordercore.domain.exceptions import ValidationError
from ordercore.domain.model.product import ProductCategory
from ordercore.domain.repository.product_repository import ProductCatalog


class ShowCatalogHandler:

    def __init__(self, catalog: ProductCatalog) -> None:
        self._catalog = catalog

    def handle(self, category: ProductCategory | None = None) -> list[ProductDTO]:
        if category is None:
            products = self._catalog.list_all()
        else:
            products = self._catalog.list_by_category(category)
        return [ProductDTO.from_product(p) for p in sorted(products, key=lambda p: p.id)]

    def low_stock(self, threshold: int) -> list[ProductDTO]:
        """Products with ``threshold`` units or fewer left."""
        if threshold < 0:
            raise ValidationError("Low-stock threshold cannot be negative")
        products = self._catalog.list_low_stock(threshold)
        return [
            ProductDTO.from_product(p)
            for p in sorted(products, key=lambda p: (p.stock_quantity, p.id))
        ]
