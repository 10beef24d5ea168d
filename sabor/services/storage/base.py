"""
Store Abstract Base Class

Defines the repository contract used by every service. MemoryStore and
SqlStore both implement these methods, so the services stay agnostic of
where catalog entries, orders and ledger records live.

Design Pattern: Repository
    - Services receive a store instead of touching module-level lists
    - Tests use a fresh MemoryStore per case
    - The SQL backend can be swapped in through STORAGE_BACKEND
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Optional

from sabor.schemas import (
    AvailableDrink,
    Expense,
    FinancialRecord,
    HouseSpecial,
    Ingredient,
    Order,
)


class BaseStore(ABC):
    """
    Abstract base class for stores.

    ``lock`` serializes mutating service operations: handlers run on one
    event loop, but a SQL store awaits I/O in the middle of a mutation.

    ``get_*`` methods return None for unknown ids; raising the matching
    NotFoundError is the services' job.
    """

    def __init__(self) -> None:
        self.lock = asyncio.Lock()

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the name of the backend (e.g. "memory", "sql")."""
        pass

    async def init(self) -> None:
        """Prepare the backend and load seed data. Default: nothing to do."""

    async def close(self) -> None:
        """Release backend resources. Default: nothing to do."""

    @abstractmethod
    async def health_check(self) -> bool:
        """Verify the backend is reachable."""
        pass

    # =========================================================================
    # CATALOG
    # =========================================================================

    @abstractmethod
    async def list_ingredients(self) -> list[Ingredient]:
        pass

    @abstractmethod
    async def get_ingredient(self, ingredient_id: str) -> Optional[Ingredient]:
        pass

    @abstractmethod
    async def save_ingredient(self, ingredient: Ingredient) -> Ingredient:
        """Insert or replace by id."""
        pass

    @abstractmethod
    async def list_house_specials(self) -> list[HouseSpecial]:
        pass

    @abstractmethod
    async def get_house_special(self, house_special_id: str) -> Optional[HouseSpecial]:
        pass

    @abstractmethod
    async def save_house_special(self, house_special: HouseSpecial) -> HouseSpecial:
        pass

    @abstractmethod
    async def list_drinks(self) -> list[AvailableDrink]:
        pass

    @abstractmethod
    async def get_drink(self, drink_id: str) -> Optional[AvailableDrink]:
        pass

    @abstractmethod
    async def save_drink(self, drink: AvailableDrink) -> AvailableDrink:
        pass

    # =========================================================================
    # ORDERS
    # =========================================================================

    @abstractmethod
    async def list_orders(self) -> list[Order]:
        pass

    @abstractmethod
    async def get_order(self, order_id: str) -> Optional[Order]:
        pass

    @abstractmethod
    async def save_order(self, order: Order) -> Order:
        pass

    @abstractmethod
    async def create_order(self, order: Order, records: list[FinancialRecord]) -> Order:
        """Store a new order and its ledger records, all or nothing."""
        pass

    # =========================================================================
    # LEDGER
    # =========================================================================

    @abstractmethod
    async def list_financial_records(self) -> list[FinancialRecord]:
        pass

    @abstractmethod
    async def append_financial_records(self, records: list[FinancialRecord]) -> None:
        """Append-only: records are never updated or removed."""
        pass

    @abstractmethod
    async def list_expenses(self) -> list[Expense]:
        pass

    @abstractmethod
    async def append_expense(self, expense: Expense) -> None:
        pass
