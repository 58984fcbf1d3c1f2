"""
Default Menu Seed

Dishes, porções and drinks the restaurant opens with.
Loaded into an empty catalog at startup when SEED_DEFAULT_MENU is true.

Run from project root to seed the configured database:
    python -m comanda.seed [--reset]
"""

import argparse
import asyncio
import logging

from comanda.entities import Extra, MenuCategory, MenuItem
from comanda.services.catalog.service import MenuCatalog

logger = logging.getLogger(__name__)

DEFAULT_SIDES = ["Arroz", "Feijão", "Macarrão", "Salada", "Farofa"]
DEFAULT_EXTRAS = [
    ("Batata Frita", 12.0),
    ("Ovo Frito", 3.0),
    ("Vinagrete", 4.0),
    ("Torresmo", 8.0),
]

DEFAULT_MENU = [
    ("Filé de Tilápia", MenuCategory.PRATOS, 26.0, DEFAULT_SIDES),
    ("Contra-Filé", MenuCategory.PRATOS, 26.0, DEFAULT_SIDES),
    ("PF Frango Grelhado", MenuCategory.PRATOS, 16.0, DEFAULT_SIDES),
    ("PF Calabresa", MenuCategory.PRATOS, 16.0, DEFAULT_SIDES),
    ("PF Bisteca", MenuCategory.PRATOS, 16.0, DEFAULT_SIDES),
    ("PF Omelete", MenuCategory.PRATOS, 16.0, ["Arroz", "Feijão", "Salada"]),
    ("Porção de Fritas", MenuCategory.PORCOES, 12.0, None),
    ("Salada Extra", MenuCategory.PORCOES, 8.0, None),
    ("Ovo Frito (Un)", MenuCategory.PORCOES, 3.0, None),
    ("Coca-Cola (Lata)", MenuCategory.BEBIDAS, 6.0, None),
    ("Guaraná (Lata)", MenuCategory.BEBIDAS, 6.0, None),
    ("Suco de Laranja", MenuCategory.BEBIDAS, 9.0, None),
    ("Suco de Limão", MenuCategory.BEBIDAS, 8.0, None),
    ("Água Mineral", MenuCategory.BEBIDAS, 4.0, None),
    ("Cerveja (Lata)", MenuCategory.BEBIDAS, 7.0, None),
]


def default_menu() -> list[MenuItem]:
    """Fresh MenuItem objects for the default menu."""
    items = []
    for name, category, price, sides in DEFAULT_MENU:
        is_dish = sides is not None
        items.append(
            MenuItem(
                name=name,
                category=category,
                price=price,
                sides=list(sides) if is_dish else [],
                extras=[Extra(n, p) for n, p in DEFAULT_EXTRAS] if is_dish else [],
            )
        )
    return items


async def seed_menu(catalog: MenuCatalog, reset: bool = False) -> int:
    """
    Load the default menu into the catalog.

    Args:
        catalog: Target catalog
        reset: Delete every existing item first

    Returns:
        int: Number of items created (0 when the catalog was not empty)
    """
    existing = await catalog.list(include_inactive=True)
    if existing and not reset:
        logger.info(f"Catalog already has {len(existing)} items, seed skipped")
        return 0

    for item in existing:
        await catalog.delete(item.id)

    for item in default_menu():
        await catalog.repository.add(item)

    logger.info(f"✅ Created {len(DEFAULT_MENU)} menu items")
    return len(DEFAULT_MENU)


async def _main(reset: bool) -> None:
    from comanda.database import dispose_db, get_session_maker, init_db
    from comanda.services.catalog.sql import SqlMenuRepository

    await init_db()
    try:
        await seed_menu(MenuCatalog(SqlMenuRepository(get_session_maker())), reset=reset)
    finally:
        await dispose_db()


if __name__ == "__main__":
    from comanda.core.config import setup_logging

    parser = argparse.ArgumentParser(description="Seed the default menu")
    parser.add_argument("--reset", action="store_true", help="Delete the current menu first")
    args = parser.parse_args()

    setup_logging()
    asyncio.run(_main(args.reset))
