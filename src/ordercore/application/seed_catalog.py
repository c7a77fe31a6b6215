"""Demo catalog for a fresh installation."""

from __future__ import annotations

from ordercore.application.add_product import AddProductHandler
from ordercore.domain.model.product import ProductCategory
from ordercore.domain.repository.product_repository import ProductCatalog

DEMO_PRODUCTS: list[dict] = [
    {
        "product_id": "ELEC001",
        "name": "Gaming Laptop",
        "price": "1299.99",
        "stock_quantity": 10,
        "category": ProductCategory.ELECTRONICS,
        "description": "High-performance gaming laptop with RTX graphics",
        "attributes": {"brand": "TechBrand", "model": "GX-2024", "warranty_months": "24"},
    },
    {
        "product_id": "CLOTH001",
        "name": "Premium T-Shirt",
        "price": "29.99",
        "stock_quantity": 50,
        "category": ProductCategory.CLOTHING,
        "description": "Comfortable cotton t-shirt",
        "attributes": {"size": "L", "color": "Blue", "material": "100% Cotton"},
    },
    {
        "product_id": "BOOK001",
        "name": "Design Patterns Book",
        "price": "49.99",
        "stock_quantity": 25,
        "category": ProductCategory.BOOKS,
        "description": "Comprehensive guide to software design patterns",
        "attributes": {
            "isbn": "978-0201633610",
            "author": "Gang of Four",
            "publisher": "Addison-Wesley",
            "pages": "395",
        },
    },
    {
        "product_id": "HOME001",
        "name": "Indoor Plant Pot",
        "price": "19.99",
        "stock_quantity": 30,
        "category": ProductCategory.HOME_GARDEN,
        "description": "Decorative ceramic plant pot",
        "attributes": {"type": "Decorative", "dimensions": "8x8x10 inches", "indoor": "yes"},
    },
]


def seed_catalog(catalog: ProductCatalog, currency: str = "USD") -> list[str]:
    """Add any demo product not already present; return the IDs added."""
    handler = AddProductHandler(catalog, currency)
    added: list[str] = []
    for fields in DEMO_PRODUCTS:
        if catalog.get_by_id(fields["product_id"]) is not None:
            continue
        handler.handle(**fields)
        added.append(fields["product_id"])
    return added
