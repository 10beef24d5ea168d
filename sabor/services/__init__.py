"""
                        Services Module

Business logic, independent of the HTTP layer. Services receive a store
(see ``storage``) instead of reaching for module-level state.

Services:
    - pricing: order totals from the size table and drink catalog
    - orders: order ledger and status machine
    - expenses: expenses split into monthly installments
    - analytics: finance dashboard totals and charts
    - catalog: ingredients, house specials and drinks
    - auth: admin login
    - excel_manager: ledger spreadsheet export
    - storage: MemoryStore / SqlStore repositories
"""

from sabor.services.catalog import CatalogService
from sabor.services.excel_manager import ExcelManager
from sabor.services.expenses import ExpenseService
from sabor.services.orders import OrderService

__all__ = ["CatalogService", "ExcelManager", "ExpenseService", "OrderService"]
