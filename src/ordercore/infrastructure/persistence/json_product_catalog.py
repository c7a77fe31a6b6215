"""JSON-file-backed implementation of ProductCatalog."""

from __future__ import annotations

import json
import threading
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from ordercore.domain.exceptions import ConflictError, NotFoundError
from ordercore.domain.model.product import Product, ProductCategory
from ordercore.domain.model.value_objects import Money
from ordercore.domain.repository.product_repository import ProductCatalog


class JsonProductCatalog(ProductCatalog):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = threading.Lock()
        self._ensure_file()

    # --- ProductCatalog interface ---------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        with self._lock:
            return self._load().get(product_id)

    def add(self, product: Product) -> None:
        with self._lock:
            products = self._load()
            if product.id in products:
                raise ConflictError("Product", product.id)
            products[product.id] = product
            self._persist(products)

    def adjust_stock(self, product_id: str, delta: int) -> None:
        with self._lock:
            products = self._load()
            product = products.get(product_id)
            if product is None:
                raise NotFoundError("Product", product_id)
            product.adjust_stock(delta)
            self._persist(products)

    def list_all(self) -> list[Product]:
        with self._lock:
            return list(self._load().values())

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Product]:
        raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        return {
            item["id"]: Product(
                id=item["id"],
                name=item["name"],
                price=Money(Decimal(item["price"]), item.get("currency", "USD")),
                stock_quantity=item["stock_quantity"],
                category=ProductCategory(item["category"]),
                description=item.get("description", ""),
                attributes=item.get("attributes", {}),
                created_at=datetime.fromisoformat(item["created_at"]),
            )
            for item in raw
        }

    def _persist(self, products: dict[str, Product]) -> None:
        raw = [
            {
                "id": p.id,
                "name": p.name,
                "price": str(p.price.amount),
                "currency": p.price.currency,
                "stock_quantity": p.stock_quantity,
                "category": p.category.value,
                "description": p.description,
                "attributes": p.attributes,
                "created_at": p.created_at.isoformat(),
            }
            for p in products.values()
        ]
        self._file_path.write_text(
            json.dumps(raw, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
