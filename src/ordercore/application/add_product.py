"""Application service: Add Product use case."""

from __future__ import annotations

from ordercore.application.dto import ProductDTO
from ordercore.domain.exceptions import ValidationError
from ordercore.domain.model.product import Product, ProductCategory
from ordercore.domain.model.value_objects import Money
from ordercore.domain.repository.product_repository import ProductCatalog
from ordercore.logging import get_logger

log = get_logger(__name__)


class AddProductHandler:

    def __init__(self, catalog: ProductCatalog, currency: str = "USD") -> None:
        self._catalog = catalog
        self._currency = currency

    def handle(
        self,
        product_id: str,
        name: str,
        price: str,
        stock_quantity: int,
        category: ProductCategory | str,
        description: str = "",
        attributes: dict[str, str] | None = None,
    ) -> ProductDTO:
        """Add a new product to the catalog."""
        product = Product(
            id=(product_id or "").strip(),
            name=(name or "").strip(),
            price=Money.of(price, self._currency),
            stock_quantity=stock_quantity,
            category=self._coerce_category(category),
            description=description,
            attributes=dict(attributes or {}),
        )
        product.validate()
        self._catalog.add(product)

        log.info("product_added", product_id=product.id, name=product.name)
        return ProductDTO.from_product(product)

    @staticmethod
    def _coerce_category(category: ProductCategory | str) -> ProductCategory:
        if isinstance(category, ProductCategory):
            return category
        for candidate in ProductCategory:
            if candidate.value.lower() == str(category).lower():
                return candidate
        raise ValidationError(f"Unknown product category '{category}'")
