"""Domain service: Stock Reservation.

Reserving stock means decrementing a product's on-hand quantity when the
product is attached to an order.  Releasing is the compensating step used
when a later write in the same operation fails.

The check happens before the catalog is touched, so a shortage never
leaves a partial decrement behind.  Callers are responsible for holding
the product's lock across ``reserve`` and any matching ``release``.
"""

from __future__ import annotations

from ordercore.domain.exceptions import InsufficientStockError, NotFoundError
from ordercore.domain.model.product import Product
from ordercore.domain.model.value_objects import Quantity
from ordercore.domain.repository.product_repository import ProductCatalog


class StockReservationService:

    def __init__(self, catalog: ProductCatalog) -> None:
        self._catalog = catalog

    def reserve(self, product_id: str, quantity: Quantity) -> Product:
        """Check availability and take ``quantity`` units out of stock.

        Returns the product as it was read before the decrement, so the
        caller can snapshot its name and price.
        """
        product = self._catalog.get_by_id(product_id)
        if product is None:
            raise NotFoundError("Product", product_id)

        if product.stock_quantity < quantity.value:
            raise InsufficientStockError(
                product_id=product.id,
                available=product.stock_quantity,
                requested=quantity.value,
            )

        self._catalog.adjust_stock(product.id, -quantity.value)
        return product

    def release(self, product_id: str, quantity: Quantity) -> None:
        """Put previously reserved units back into stock."""
        self._catalog.adjust_stock(product_id, quantity.value)
