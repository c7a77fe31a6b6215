"""Order aggregate — the core of the domain.

The Order is an aggregate root that owns its line items.
All business invariants are enforced here; the coordinator decides *when*
to call these methods and holds the locks while it does.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from ordercore.domain.exceptions import (
    InvalidStateError,
    InvalidTransitionError,
    ValidationError,
)
from ordercore.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


@dataclass
class OrderLineItem:
    """Captures the name and price of a product at attach time.

    Mutable only via ``increase()``; ``unit_price`` and ``product_name``
    never change after the line is created (price lock preserved).
    """

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money  # locked at attach time

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value

    def increase(self, qty: Quantity) -> None:
        self.quantity = self.quantity + qty


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.create()`` factory for new orders.  The ``__init__``
    is intentionally simple so repositories can reconstitute persisted
    orders without re-validating.
    """

    id: str
    customer_id: str
    customer_name: str
    items: list[OrderLineItem] = field(default_factory=list)
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    payment_method: str | None = None
    currency: str = "USD"

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        order_id: str,
        customer_id: str,
        customer_name: str,
        currency: str = "USD",
    ) -> Order:
        """Create an empty pending order."""
        if not customer_id or not customer_id.strip():
            raise ValidationError("Customer ID is required")
        if not customer_name or not customer_name.strip():
            raise ValidationError("Customer name is required")
        return Order(
            id=order_id,
            customer_id=customer_id.strip(),
            customer_name=customer_name.strip(),
            currency=currency,
        )

    # --- Item attachment ------------------------------------------------------

    def add_item(
        self,
        product_id: str,
        product_name: str,
        unit_price: Money,
        quantity: Quantity,
        max_line_items: int | None = None,
    ) -> OrderLineItem:
        """Attach ``quantity`` units of a product.

        A product already on the order gets its quantity increased; its
        original price snapshot is kept.
        """
        self.check_can_add(product_id, max_line_items)
        if unit_price.currency != self.currency:
            raise ValidationError(
                f"Cannot add a {unit_price.currency} price to a {self.currency} order"
            )

        existing = self.find_item(product_id)
        if existing is not None:
            existing.increase(quantity)
            return existing

        line = OrderLineItem(
            product_id=product_id,
            product_name=product_name,
            quantity=quantity,
            unit_price=unit_price,
        )
        self.items.append(line)
        return line

    def check_can_add(self, product_id: str, max_line_items: int | None = None) -> None:
        """Raise if attaching ``product_id`` now would be rejected."""
        if self.status != OrderStatus.PENDING:
            raise InvalidStateError(
                f"Cannot add items to order {self.id} — status is {self.status.value}"
            )
        if (
            max_line_items is not None
            and self.find_item(product_id) is None
            and len(self.items) >= max_line_items
        ):
            raise ValidationError(f"Maximum {max_line_items} line items per order")

    # --- State transitions ----------------------------------------------------

    def ensure_payable(self) -> None:
        if self.status != OrderStatus.PENDING:
            raise InvalidStateError(
                f"Order {self.id} cannot be paid — status is {self.status.value}"
            )
        if not self.items:
            raise InvalidStateError(f"Order {self.id} has no items to pay for")

    def mark_paid(self, method_name: str) -> None:
        """Transition PENDING -> PROCESSING after a successful charge."""
        self.ensure_payable()
        self.status = OrderStatus.PROCESSING
        self.payment_method = method_name

    def transition_to(self, new_status: OrderStatus) -> None:
        if new_status not in ALLOWED_TRANSITIONS[self.status]:
            raise InvalidTransitionError(self.status.value, new_status.value)
        self.status = new_status

    # --- Computed properties --------------------------------------------------

    @property
    def total(self) -> Money:
        result = Money.zero(self.currency)
        for item in self.items:
            result = result + item.line_total
        return result

    # --- Helpers --------------------------------------------------------------

    def find_item(self, product_id: str) -> OrderLineItem | None:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    def copy(self) -> Order:
        return copy.deepcopy(self)
