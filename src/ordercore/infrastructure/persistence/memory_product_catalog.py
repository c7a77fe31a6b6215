"""In-process implementation of ProductCatalog."""

from __future__ import annotations

import threading

from ordercore.domain.exceptions import ConflictError, NotFoundError
from ordercore.domain.model.product import Product
from ordercore.domain.repository.product_repository import ProductCatalog


class InMemoryProductCatalog(ProductCatalog):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._lock = threading.Lock()
        self._store: dict[str, Product] = {}
        for p in products or []:
            self._store[p.id] = p.copy()

    def get_by_id(self, product_id: str) -> Product | None:
        with self._lock:
            product = self._store.get(product_id)
            return product.copy() if product is not None else None

    def add(self, product: Product) -> None:
        with self._lock:
            if product.id in self._store:
                raise ConflictError("Product", product.id)
            self._store[product.id] = product.copy()

    def adjust_stock(self, product_id: str, delta: int) -> None:
        with self._lock:
            product = self._store.get(product_id)
            if product is None:
                raise NotFoundError("Product", product_id)
            product.adjust_stock(delta)

    def list_all(self) -> list[Product]:
        with self._lock:
            return [p.copy() for p in self._store.values()]
