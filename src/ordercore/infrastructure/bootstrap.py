"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions and receives its
collaborators (stores, settings, logger) as constructor arguments.
"""

from __future__ import annotations

from ordercore.application.order_coordinator import OrderCoordinator
from ordercore.config import Settings, get_settings
from ordercore.domain.payment.base import PaymentGateway
from ordercore.infrastructure.payment.gateways import ApprovingGateway, SimulatedGateway
from ordercore.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from ordercore.infrastructure.persistence.json_product_catalog import (
    JsonProductCatalog,
)


def product_catalog(settings: Settings | None = None) -> JsonProductCatalog:
    settings = settings or get_settings()
    return JsonProductCatalog(settings.data_dir / "products.json")


def order_repository(settings: Settings | None = None) -> JsonOrderRepository:
    settings = settings or get_settings()
    return JsonOrderRepository(settings.data_dir / "orders.json")


def payment_gateway(settings: Settings | None = None) -> PaymentGateway:
    settings = settings or get_settings()
    if settings.simulate_payments:
        return SimulatedGateway(settings.success_rates)
    return ApprovingGateway()


def order_coordinator(settings: Settings | None = None) -> OrderCoordinator:
    settings = settings or get_settings()
    return OrderCoordinator(
        order_repo=order_repository(settings),
        catalog=product_catalog(settings),
        settings=settings,
    )
