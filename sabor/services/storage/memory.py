"""
In-Memory Store

Keeps every collection in process-local lists. Default backend for
development and the substitute used by the test-suite. Nothing survives a
restart.

Entities are copied on the way in and out, so callers only change stored
state through the ``save_*``/``append_*`` methods, as with the SQL store.
"""

import logging
from typing import Optional, TypeVar

from pydantic import BaseModel

from sabor.schemas import (
    AvailableDrink,
    Expense,
    FinancialRecord,
    HouseSpecial,
    Ingredient,
    Order,
)
from sabor.services.storage.base import BaseStore
from sabor.services.storage.seed import seed_catalog

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


def _copy(item: T) -> T:
    return item.model_copy(deep=True)


def _find(items: list[T], item_id: str) -> Optional[T]:
    for item in items:
        if item.id == item_id:
            return _copy(item)
    return None


def _upsert(items: list[T], item: T) -> T:
    for index, existing in enumerate(items):
        if existing.id == item.id:
            items[index] = _copy(item)
            return _copy(item)
    items.append(_copy(item))
    return _copy(item)


class MemoryStore(BaseStore):
    """
    Process-local store.

    Args:
        seed: Load the default catalog (ingredients, house specials, drinks)
    """

    def __init__(self, seed: bool = True) -> None:
        super().__init__()
        self._ingredients: list[Ingredient] = []
        self._house_specials: list[HouseSpecial] = []
        self._drinks: list[AvailableDrink] = []
        self._orders: list[Order] = []
        self._financial_records: list[FinancialRecord] = []
        self._expenses: list[Expense] = []

        if seed:
            self._ingredients, self._house_specials, self._drinks = seed_catalog()
            logger.debug(
                f"MemoryStore seeded: {len(self._ingredients)} ingredients, "
                f"{len(self._house_specials)} house specials, {len(self._drinks)} drinks"
            )

    @property
    def provider_name(self) -> str:
        return "memory"

    async def health_check(self) -> bool:
        return True

    # Catalog

    async def list_ingredients(self) -> list[Ingredient]:
        return [_copy(i) for i in self._ingredients]

    async def get_ingredient(self, ingredient_id: str) -> Optional[Ingredient]:
        return _find(self._ingredients, ingredient_id)

    async def save_ingredient(self, ingredient: Ingredient) -> Ingredient:
        return _upsert(self._ingredients, ingredient)

    async def list_house_specials(self) -> list[HouseSpecial]:
        return [_copy(h) for h in self._house_specials]

    async def get_house_special(self, house_special_id: str) -> Optional[HouseSpecial]:
        return _find(self._house_specials, house_special_id)

    async def save_house_special(self, house_special: HouseSpecial) -> HouseSpecial:
        return _upsert(self._house_specials, house_special)

    async def list_drinks(self) -> list[AvailableDrink]:
        return [_copy(d) for d in self._drinks]

    async def get_drink(self, drink_id: str) -> Optional[AvailableDrink]:
        return _find(self._drinks, drink_id)

    async def save_drink(self, drink: AvailableDrink) -> AvailableDrink:
        return _upsert(self._drinks, drink)

    # Orders

    async def list_orders(self) -> list[Order]:
        return [_copy(o) for o in self._orders]

    async def get_order(self, order_id: str) -> Optional[Order]:
        return _find(self._orders, order_id)

    async def save_order(self, order: Order) -> Order:
        return _upsert(self._orders, order)

    async def create_order(self, order: Order, records: list[FinancialRecord]) -> Order:
        # every copy is made before either list changes
        stored_order = _copy(order)
        stored_records = [_copy(r) for r in records]
        self._orders.append(stored_order)
        self._financial_records.extend(stored_records)
        return _copy(stored_order)

    # Ledger

    async def list_financial_records(self) -> list[FinancialRecord]:
        return [_copy(r) for r in self._financial_records]

    async def append_financial_records(self, records: list[FinancialRecord]) -> None:
        self._financial_records.extend(_copy(r) for r in records)

    async def list_expenses(self) -> list[Expense]:
        return [_copy(e) for e in self._expenses]

    async def append_expense(self, expense: Expense) -> None:
        self._expenses.append(_copy(expense))
