import unittest

from comanda.core.exceptions import NotFoundError, ValidationError
from comanda.entities import Extra, MenuCategory, MenuItemUpdate
from comanda.seed import DEFAULT_MENU, seed_menu
from comanda.services.catalog import InMemoryMenuRepository, MenuCatalog


class TestMenuCatalog(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.catalog = MenuCatalog(InMemoryMenuRepository())

    async def test_create_defaults_to_active(self):
        item = await self.catalog.create(name="PF Bisteca", category="pratos", price=16)

        self.assertTrue(item.active)
        self.assertEqual(item.category, MenuCategory.PRATOS)
        self.assertEqual(item.sides, [])
        self.assertEqual(await self.catalog.get(item.id), item)

    async def test_create_only_inactive_when_false(self):
        item = await self.catalog.create(name="Pudim", category="sobremesas", price=7, active=False)
        self.assertFalse(item.active)

    async def test_create_missing_fields_fails(self):
        """
        Cenário: Falta nome, categoria ou preço. Nada é gravado.
        """
        with self.assertRaises(ValidationError):
            await self.catalog.create(name="Sem preço", category="bebidas")
        with self.assertRaises(ValidationError):
            await self.catalog.create(category="bebidas", price=5)
        with self.assertRaises(ValidationError):
            await self.catalog.create(name="Sem categoria", price=5)

        self.assertEqual(await self.catalog.list(include_inactive=True), [])

    async def test_create_zero_price_is_allowed(self):
        item = await self.catalog.create(name="Água da casa", category="bebidas", price=0)
        self.assertEqual(item.price, 0.0)

    async def test_create_invalid_category_or_price_fails(self):
        with self.assertRaises(ValidationError):
            await self.catalog.create(name="X", category="lanches", price=5)
        with self.assertRaises(ValidationError):
            await self.catalog.create(name="X", category="bebidas", price=-1)

    async def test_non_finite_price_fails(self):
        """
        Cenário: Preço NaN ou infinito não entra no cardápio.
        """
        for price in (float("nan"), float("inf"), "nan"):
            with self.subTest(price=price):
                with self.assertRaises(ValidationError):
                    await self.catalog.create(name="X", category="bebidas", price=price)
        with self.assertRaises(ValidationError):
            await self.catalog.create(
                name="PF", category="pratos", price=16, extras=[{"name": "Ovo", "price": float("nan")}]
            )

        item = await self.catalog.create(name="Suco", category="bebidas", price=8)
        with self.assertRaises(ValidationError):
            await self.catalog.update(item.id, MenuItemUpdate(price=float("nan")))

        self.assertEqual(await self.catalog.list(include_inactive=True), [item])

    async def test_list_hides_inactive_and_sorts_by_name(self):
        await self.catalog.create(name="Suco de Limão", category="bebidas", price=8)
        await self.catalog.create(name="Guaraná (Lata)", category="bebidas", price=6)
        await self.catalog.create(name="Cerveja (Lata)", category="bebidas", price=7, active=False)

        names = [item.name for item in await self.catalog.list()]
        self.assertEqual(names, ["Guaraná (Lata)", "Suco de Limão"])

        every = await self.catalog.list(include_inactive=True)
        self.assertEqual(len(every), 3)

    async def test_update_changes_only_given_fields(self):
        item = await self.catalog.create(
            name="PF Calabresa",
            category="pratos",
            price=16,
            sides=["Arroz", "Feijão"],
            extras=[{"name": "Ovo Frito", "price": 3}],
        )

        await self.catalog.update(item.id, MenuItemUpdate(price=18))

        updated = await self.catalog.get(item.id)
        self.assertEqual(updated.price, 18.0)
        self.assertEqual(updated.name, "PF Calabresa")
        self.assertEqual(updated.sides, ["Arroz", "Feijão"])
        self.assertEqual(updated.extras, [Extra("Ovo Frito", 3.0)])

    async def test_update_leaves_callers_mask_untouched(self):
        item = await self.catalog.create(name="PF", category="pratos", price=16)
        changes = MenuItemUpdate(category="porcoes", price="18.499")

        await self.catalog.update(item.id, changes)

        self.assertEqual(changes.category, "porcoes")
        self.assertEqual(changes.price, "18.499")
        updated = await self.catalog.get(item.id)
        self.assertEqual(updated.category, MenuCategory.PORCOES)
        self.assertEqual(updated.price, 18.5)

    async def test_update_can_clear_sides(self):
        item = await self.catalog.create(name="PF", category="pratos", price=16, sides=["Arroz"])
        await self.catalog.update(item.id, MenuItemUpdate(sides=[]))
        self.assertEqual((await self.catalog.get(item.id)).sides, [])

    async def test_update_unknown_id_is_noop(self):
        item = await self.catalog.create(name="Suco", category="bebidas", price=8)

        await self.catalog.update("missing", MenuItemUpdate(price=1))

        self.assertEqual(await self.catalog.list(), [item])

    async def test_delete(self):
        item = await self.catalog.create(name="Suco", category="bebidas", price=8)

        await self.catalog.delete(item.id)
        await self.catalog.delete(item.id)

        with self.assertRaises(NotFoundError):
            await self.catalog.get(item.id)

    async def test_duplicate_appends_copy_suffix(self):
        item = await self.catalog.create(
            name="Contra-Filé", category="pratos", price=26, sides=["Arroz"]
        )

        copy = await self.catalog.duplicate(item)

        self.assertNotEqual(copy.id, item.id)
        self.assertEqual(copy.name, "Contra-Filé (cópia)")
        self.assertEqual(copy.price, 26.0)
        self.assertEqual(copy.sides, ["Arroz"])

    async def test_toggle_and_set_active(self):
        item = await self.catalog.create(name="Suco", category="bebidas", price=8)

        toggled = await self.catalog.toggle_active(item.id)
        self.assertFalse(toggled.active)
        self.assertEqual(await self.catalog.list(), [])

        await self.catalog.set_active(item.id, True)
        self.assertTrue((await self.catalog.get(item.id)).active)

        self.assertIsNone(await self.catalog.toggle_active("missing"))

    async def test_returned_items_are_copies(self):
        item = await self.catalog.create(name="PF", category="pratos", price=16, sides=["Arroz"])
        fetched = await self.catalog.get(item.id)
        fetched.sides.append("Farofa")

        self.assertEqual((await self.catalog.get(item.id)).sides, ["Arroz"])


class TestSeedMenu(unittest.IsolatedAsyncioTestCase):

    async def test_seed_fills_empty_catalog_once(self):
        catalog = MenuCatalog(InMemoryMenuRepository())

        self.assertEqual(await seed_menu(catalog), len(DEFAULT_MENU))
        self.assertEqual(await seed_menu(catalog), 0)
        self.assertEqual(len(await catalog.list()), len(DEFAULT_MENU))

    async def test_seed_reset_replaces_items(self):
        catalog = MenuCatalog(InMemoryMenuRepository())
        await catalog.create(name="Prato antigo", category="pratos", price=10)

        await seed_menu(catalog, reset=True)

        names = [item.name for item in await catalog.list()]
        self.assertNotIn("Prato antigo", names)
        self.assertIn("PF Omelete", names)


if __name__ == "__main__":
    unittest.main()
