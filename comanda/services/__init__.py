"""
                        Services Module

Business logic behind the HTTP layer.

Services:
    - catalog: menu items (memory or SQL storage)
    - ledger: orders and their status (memory or SQL storage)
    - pricing: customization resolver and cart
    - reporting: daily statistics
    - boards: kitchen board, cashier board, split bill
    - excel_manager: file-locked sales sheet export
"""

from comanda.services.catalog import get_menu_catalog, MenuCatalog
from comanda.services.ledger import get_order_ledger, OrderLedger

__all__ = ["get_menu_catalog", "MenuCatalog", "get_order_ledger", "OrderLedger"]
