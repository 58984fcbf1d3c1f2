"""
Order Ledger Factory

Provides a single entry point for obtaining the order ledger.
The storage backend is chosen by STORAGE_BACKEND, the transition guard
by STRICT_STATUS_TRANSITIONS.

Usage:
    from comanda.services.ledger import get_order_ledger

    ledger = get_order_ledger()
    order = await ledger.create("Mesa 4", cart.lines)
"""

import logging
from functools import lru_cache

from comanda.core.config import get_settings
from comanda.services.ledger.base import BaseOrderRepository
from comanda.services.ledger.memory import InMemoryOrderRepository
from comanda.services.ledger.service import OrderLedger, parse_status

logger = logging.getLogger(__name__)


def build_order_repository() -> BaseOrderRepository:
    """Repository for the configured backend."""
    settings = get_settings()

    if settings.uses_database:
        from comanda.database import get_session_maker
        from comanda.services.ledger.sql import SqlOrderRepository

        logger.info("Order Ledger: Using SqlOrderRepository")
        return SqlOrderRepository(get_session_maker())

    logger.info("Order Ledger: Using InMemoryOrderRepository")
    return InMemoryOrderRepository()


@lru_cache()
def get_order_ledger() -> OrderLedger:
    """
    Get the process-wide order ledger.

    The instance is cached so every request shares one store.
    """
    settings = get_settings()
    return OrderLedger(
        build_order_repository(),
        strict_transitions=settings.strict_status_transitions,
    )


def reset_order_ledger() -> None:
    """
    Clear the cached ledger instance.

    Useful for testing or when configuration changes at runtime.
    """
    get_order_ledger.cache_clear()
    logger.debug("Order ledger cache cleared")


__all__ = [
    "get_order_ledger",
    "reset_order_ledger",
    "build_order_repository",
    "BaseOrderRepository",
    "InMemoryOrderRepository",
    "OrderLedger",
    "parse_status",
]
