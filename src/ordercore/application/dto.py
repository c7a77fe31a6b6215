"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs are frozen snapshots: callers can keep them as long as they like
without ever holding a live reference into the stores.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ordercore.domain.model.order import Order, OrderStatus
from ordercore.domain.model.product import Product, ProductCategory
from ordercore.domain.model.value_objects import Money


@dataclass(frozen=True)
class OrderLineItemDTO:
    """A single line item as seen from outside the coordinator."""

    product_id: str
    product_name: str
    quantity: int
    unit_price: Money
    line_total: Money


@dataclass(frozen=True)
class OrderDTO:
    """A complete order as seen from outside the coordinator."""

    id: str
    customer_id: str
    customer_name: str
    status: OrderStatus
    items: tuple[OrderLineItemDTO, ...]
    total: Money
    created_at: datetime
    payment_method: str | None

    @property
    def created_at_display(self) -> str:
        return self.created_at.strftime("%Y-%m-%d %H:%M UTC")

    @staticmethod
    def from_order(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,
            customer_id=order.customer_id,
            customer_name=order.customer_name,
            status=order.status,
            items=tuple(
                OrderLineItemDTO(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity.value,
                    unit_price=item.unit_price,
                    line_total=item.line_total,
                )
                for item in order.items
            ),
            total=order.total,
            created_at=order.created_at,
            payment_method=order.payment_method,
        )


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    price: Money
    stock_quantity: int
    category: ProductCategory
    details: str

    @staticmethod
    def from_product(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            name=product.name,
            price=product.price,
            stock_quantity=product.stock_quantity,
            category=product.category,
            details=product.details(),
        )
