"""Application service: the order lifecycle.

The coordinator is the only writer of orders.  It keeps four things
consistent with each other: an order's line items, its total, product
stock levels, and the payment outcome.

Locking
-------
* Every mutating call on an order runs under that order's lock for the
  whole read-modify-write sequence.
* Stock check-and-decrement for a product runs under that product's lock,
  nested inside the order lock (always order first, then product).
* There is no global lock; distinct orders and products never contend.
* The order lock stays held during the payment charge so a second commit
  cannot see the order as PENDING while a charge is in flight.  Each charge
  runs on a thread of its own and is bounded by a timeout; nothing is shared
  between the charges of different orders.

Failure handling
----------------
Errors are re-raised unchanged after being logged.  The one recovery
action is putting stock back when the order write fails after the
decrement already happened.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from uuid import uuid4

from ordercore.application.dto import OrderDTO
from ordercore.application.locks import KeyedLocks
from ordercore.config import Settings
from ordercore.domain.exceptions import DomainException, NotFoundError, ValidationError
from ordercore.domain.model.order import Order, OrderStatus
from ordercore.domain.model.payment import DECLINED, TIMED_OUT, PaymentOutcome
from ordercore.domain.model.value_objects import Money, Quantity
from ordercore.domain.payment.base import PaymentDetails, PaymentMethod
from ordercore.domain.repository.order_repository import OrderRepository
from ordercore.domain.repository.product_repository import ProductCatalog
from ordercore.domain.service.stock_reservation_service import (
    StockReservationService,
)
from ordercore.logging import get_logger


def _new_order_id() -> str:
    return uuid4().hex


class OrderCoordinator:

    def __init__(
        self,
        order_repo: OrderRepository,
        catalog: ProductCatalog,
        settings: Settings,
        logger=None,
        id_factory: Callable[[], str] = _new_order_id,
    ) -> None:
        self._order_repo = order_repo
        self._catalog = catalog
        self._settings = settings
        self._log = logger or get_logger(__name__)
        self._id_factory = id_factory

        self._reservations = StockReservationService(catalog)
        self._order_locks = KeyedLocks("orders")
        self._product_locks = KeyedLocks("products")

    # --- Commands -------------------------------------------------------------

    def create_order(self, customer_id: str, customer_name: str) -> OrderDTO:
        """Create an empty PENDING order for a customer."""
        with self._logged_failure("create_order_failed", customer_id=customer_id):
            order = Order.create(
                order_id=self._id_factory(),
                customer_id=customer_id,
                customer_name=customer_name,
                currency=self._settings.currency,
            )
            self._order_repo.insert(order)

        self._log.info(
            "order_created",
            order_id=order.id,
            customer_id=order.customer_id,
            customer_name=order.customer_name,
        )
        return OrderDTO.from_order(order)

    def add_item(self, order_id: str, product_id: str, quantity: int) -> None:
        """Attach ``quantity`` units of a product, reserving the stock.

        Steps:
        1. Load the order (must exist and be PENDING).
        2. Under the product lock: check stock and decrement it.
        3. Update the order's lines (snapshotting name and price) and
           write the order back.
        4. If step 3 fails, put the stock back and re-raise.
        """
        log = self._log.bind(order_id=order_id, product_id=product_id, quantity=quantity)

        with self._logged_failure("add_item_failed", log=log):
            qty = Quantity(quantity)

            with self._order_locks.hold(order_id):
                order = self._load(order_id)
                order.check_can_add(product_id, self._settings.max_line_items)

                with self._product_locks.hold(product_id):
                    product = self._reservations.reserve(product_id, qty)
                    try:
                        order.add_item(
                            product_id=product.id,
                            product_name=product.name,
                            unit_price=product.price,
                            quantity=qty,
                            max_line_items=self._settings.max_line_items,
                        )
                        self._order_repo.replace(order)
                    except Exception as exc:
                        self._reservations.release(product_id, qty)
                        log.warning("stock_rollback", error=str(exc))
                        raise

        log.info(
            "item_added",
            product_name=product.name,
            unit_price=str(product.price),
            order_total=str(order.total),
        )

    def commit_payment(
        self,
        order_id: str,
        method: PaymentMethod,
        details: PaymentDetails,
        timeout: float | None = None,
    ) -> PaymentOutcome:
        """Charge the order total through ``method``.

        Returns a failed outcome (order left PENDING) when the charge is
        declined or does not finish within ``timeout`` seconds.  Raises
        for a missing order, an order that is not payable, or details that
        ``method`` rejects; in those cases nothing is charged.
        """
        method_name = method.display_name()
        log = self._log.bind(order_id=order_id, method=method_name)
        timeout = self._settings.payment_timeout_seconds if timeout is None else timeout

        with self._logged_failure("commit_payment_failed", log=log):
            with self._order_locks.hold(order_id):
                order = self._load(order_id)
                order.ensure_payable()

                if not method.validate_details(details):
                    raise ValidationError(f"Invalid payment details for {method_name}")

                amount = order.total
                approved = self._charge(order.id, method, amount, details, timeout)
                if approved is None:
                    log.warning("payment_timed_out", amount=str(amount), timeout=timeout)
                    return PaymentOutcome.failed(order.id, method_name, amount, TIMED_OUT)

                if not approved:
                    log.warning("payment_declined", amount=str(amount))
                    return PaymentOutcome.failed(order.id, method_name, amount, DECLINED)

                order.mark_paid(method_name)
                try:
                    self._order_repo.replace(order)
                except Exception as exc:
                    # The charge went through but the order still reads PENDING.
                    log.error("payment_not_recorded", amount=str(amount), error=str(exc))
                    raise

        log.info("payment_succeeded", amount=str(amount))
        return PaymentOutcome.approved(order.id, method_name, amount)

    def update_status(self, order_id: str, new_status: OrderStatus | str) -> None:
        """Move an order along its lifecycle (used by fulfilment)."""
        log = self._log.bind(order_id=order_id)

        with self._logged_failure("update_status_failed", log=log):
            status = self._coerce_status(new_status)
            with self._order_locks.hold(order_id):
                order = self._load(order_id)
                previous = order.status
                order.transition_to(status)
                self._order_repo.replace(order)

        log.info("status_updated", previous=previous.value, status=status.value)

    # --- Queries --------------------------------------------------------------

    def get_order(self, order_id: str) -> OrderDTO:
        return OrderDTO.from_order(self._load(order_id))

    def list_orders(self) -> list[OrderDTO]:
        return self._to_dtos(self._order_repo.list_all())

    def list_orders_by_customer(self, customer_id: str) -> list[OrderDTO]:
        return self._to_dtos(self._order_repo.list_by_customer(customer_id))

    def list_orders_by_status(self, status: OrderStatus | str) -> list[OrderDTO]:
        return self._to_dtos(self._order_repo.list_by_status(self._coerce_status(status)))

    def list_orders_by_date_range(self, start: datetime, end: datetime) -> list[OrderDTO]:
        """Orders created between ``start`` and ``end`` inclusive.

        Naive datetimes are taken to be UTC.
        """
        start, end = self._as_utc(start), self._as_utc(end)
        if start > end:
            raise ValidationError("Start of date range must not be after its end")
        return self._to_dtos(self._order_repo.list_by_date_range(start, end))

    # --- Internal helpers -----------------------------------------------------

    def _load(self, order_id: str) -> Order:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise NotFoundError("Order", order_id)
        return order

    @staticmethod
    def _charge(
        order_id: str,
        method: PaymentMethod,
        amount: Money,
        details: PaymentDetails,
        timeout: float,
    ) -> bool | None:
        """Run ``method.charge`` on its own daemon thread.

        Returns None when the charge has not finished after ``timeout``
        seconds.  The thread is then abandoned; it ties up no shared worker,
        so a hung gateway on one order never delays another order's charge.
        """
        result: dict = {}

        def run() -> None:
            try:
                result["approved"] = method.charge(amount, dict(details))
            except Exception as exc:
                result["error"] = exc

        worker = threading.Thread(
            target=run, name=f"ordercore-charge-{order_id}", daemon=True
        )
        worker.start()
        worker.join(timeout)

        if worker.is_alive():
            return None
        if "error" in result:
            raise result["error"]
        return result["approved"]

    @contextmanager
    def _logged_failure(self, event: str, log=None, **fields) -> Iterator[None]:
        try:
            yield
        except DomainException as exc:
            (log or self._log).warning(
                event, error=str(exc), error_type=type(exc).__name__, **fields
            )
            raise

    @staticmethod
    def _to_dtos(orders: list[Order]) -> list[OrderDTO]:
        return [OrderDTO.from_order(o) for o in sorted(orders, key=lambda o: o.created_at)]

    @staticmethod
    def _coerce_status(status: OrderStatus | str) -> OrderStatus:
        if isinstance(status, OrderStatus):
            return status
        try:
            return OrderStatus(str(status).upper())
        except ValueError:
            raise ValidationError(f"Unknown order status '{status}'") from None

    @staticmethod
    def _as_utc(moment: datetime) -> datetime:
        if moment.tzinfo is None:
            return moment.replace(tzinfo=timezone.utc)
        return moment
