"""
                Comanda - Restaurant Order Management

Menu catalog, order ledger and kitchen/cashier views for a small
restaurant, served over FastAPI with in-memory or SQL storage.

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
