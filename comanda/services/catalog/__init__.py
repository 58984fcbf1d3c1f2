"""
Menu Catalog Factory

Provides a single entry point for obtaining the menu catalog.
The storage backend is chosen by STORAGE_BACKEND:
    - memory → InMemoryMenuRepository
    - database → SqlMenuRepository

Usage:
    from comanda.services.catalog import get_menu_catalog

    catalog = get_menu_catalog()
    items = await catalog.list()
"""

import logging
from functools import lru_cache

from comanda.core.config import get_settings
from comanda.services.catalog.base import BaseMenuRepository
from comanda.services.catalog.memory import InMemoryMenuRepository
from comanda.services.catalog.service import MenuCatalog

logger = logging.getLogger(__name__)


def build_menu_repository() -> BaseMenuRepository:
    """Repository for the configured backend."""
    settings = get_settings()

    if settings.uses_database:
        from comanda.database import get_session_maker
        from comanda.services.catalog.sql import SqlMenuRepository

        logger.info("Menu Catalog: Using SqlMenuRepository")
        return SqlMenuRepository(get_session_maker())

    logger.info("Menu Catalog: Using InMemoryMenuRepository")
    return InMemoryMenuRepository()


@lru_cache()
def get_menu_catalog() -> MenuCatalog:
    """
    Get the process-wide menu catalog.

    The instance is cached so every request shares one store.
    """
    return MenuCatalog(build_menu_repository())


def reset_menu_catalog() -> None:
    """
    Clear the cached catalog instance.

    Useful for testing or when configuration changes at runtime.
    """
    get_menu_catalog.cache_clear()
    logger.debug("Menu catalog cache cleared")


__all__ = [
    "get_menu_catalog",
    "reset_menu_catalog",
    "build_menu_repository",
    "BaseMenuRepository",
    "InMemoryMenuRepository",
    "MenuCatalog",
]
