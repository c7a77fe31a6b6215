"""Application service: Restock Product use case."""

from __future__ import annotations

from ordercore.domain.exceptions import NotFoundError
from ordercore.domain.model.value_objects import Quantity
from ordercore.domain.repository.product_repository import ProductCatalog
from ordercore.logging import get_logger

log = get_logger(__name__)


class RestockProductHandler:

    def __init__(self, catalog: ProductCatalog) -> None:
        self._catalog = catalog

    def handle(self, product_id: str, quantity: int) -> int:
        """Add ``quantity`` units to a product's stock; return the new level."""
        qty = Quantity(quantity)
        if self._catalog.get_by_id(product_id) is None:
            raise NotFoundError("Product", product_id)

        self._catalog.adjust_stock(product_id, qty.value)

        product = self._catalog.get_by_id(product_id)
        log.info(
            "product_restocked",
            product_id=product_id,
            added=qty.value,
            stock=product.stock_quantity,
        )
        return product.stock_quantity
