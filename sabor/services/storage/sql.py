"""
SQL Store

Async SQLAlchemy implementation of BaseStore. Works with PostgreSQL
(psycopg) in deployment and SQLite (aiosqlite) locally and in tests.

Each call opens its own short-lived session; ``BaseStore.lock`` keeps
mutations from interleaving.
"""

import json
import logging
from typing import Optional

from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import AsyncEngine

from sabor import models
from sabor.core.config import get_settings
from sabor.database import create_engine_from_url, create_session_maker, init_db
from sabor.schemas import (
    Address,
    AvailableDrink,
    Expense,
    FinancialRecord,
    HouseSpecial,
    Ingredient,
    Order,
    OrderItem,
)
from sabor.services.storage.base import BaseStore
from sabor.services.storage.seed import seed_catalog

logger = logging.getLogger(__name__)


# =============================================================================
# ROW <-> SCHEMA MAPPING
# =============================================================================

def _ingredient_row(ingredient: Ingredient) -> models.Ingredient:
    return models.Ingredient(**ingredient.model_dump())


def _ingredient(row: models.Ingredient) -> Ingredient:
    return Ingredient(
        id=row.id,
        name=row.name,
        available=row.available,
        created_at=row.created_at,
    )


def _house_special_row(house_special: HouseSpecial) -> models.HouseSpecial:
    data = house_special.model_dump()
    data["ingredients"] = json.dumps(house_special.ingredients)
    return models.HouseSpecial(**data)


def _house_special(row: models.HouseSpecial) -> HouseSpecial:
    return HouseSpecial(
        id=row.id,
        name=row.name,
        description=row.description,
        ingredients=json.loads(row.ingredients),
        available=row.available,
        created_at=row.created_at,
    )


def _drink_row(drink: AvailableDrink) -> models.Drink:
    return models.Drink(**drink.model_dump())


def _drink(row: models.Drink) -> AvailableDrink:
    return AvailableDrink(
        id=row.id,
        type=row.type,
        name=row.name,
        price=row.price,
        available=row.available,
        created_at=row.created_at,
    )


def _order_row(order: Order) -> models.Order:
    return models.Order(
        id=order.id,
        item=order.item.model_dump_json(by_alias=True),
        address=order.address.model_dump_json(by_alias=True),
        customer_name=order.customer_name,
        customer_phone=order.customer_phone,
        total=order.total,
        payment_method=order.payment_method,
        status=order.status,
        delivered=order.delivered,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


def _order(row: models.Order) -> Order:
    return Order(
        id=row.id,
        item=OrderItem.model_validate_json(row.item),
        address=Address.model_validate_json(row.address),
        customer_name=row.customer_name,
        customer_phone=row.customer_phone,
        total=row.total,
        payment_method=row.payment_method,
        status=row.status,
        delivered=row.delivered,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _record_row(record: FinancialRecord) -> models.FinancialRecord:
    return models.FinancialRecord(**record.model_dump())


def _record(row: models.FinancialRecord) -> FinancialRecord:
    return FinancialRecord(
        id=row.id,
        order_id=row.order_id,
        amount=row.amount,
        type=row.type,
        description=row.description,
        date=row.date,
    )


def _expense_row(expense: Expense) -> models.Expense:
    return models.Expense(**expense.model_dump())


def _expense(row: models.Expense) -> Expense:
    return Expense(
        id=row.id,
        description=row.description,
        amount=row.amount,
        installments=row.installments,
        monthly_amount=row.monthly_amount,
        start_date=row.start_date,
        created_at=row.created_at,
    )


# =============================================================================
# STORE
# =============================================================================

class SqlStore(BaseStore):
    """
    Store backed by SQLAlchemy tables.

    Args:
        database_url: Async connection URL (defaults to DATABASE_URL)
        engine: Pre-built engine, overrides database_url
    """

    def __init__(
        self,
        database_url: Optional[str] = None,
        engine: Optional[AsyncEngine] = None,
    ) -> None:
        super().__init__()
        settings = get_settings()
        self.engine = engine or create_engine_from_url(
            database_url or settings.database_url,
            echo=settings.debug,
        )
        self.session_maker = create_session_maker(self.engine)

    @property
    def provider_name(self) -> str:
        return "sql"

    async def init(self) -> None:
        """Create tables and seed the catalog when it is empty."""
        await init_db(self.engine)

        async with self.session_maker() as session:
            count = await session.scalar(select(func.count(models.Ingredient.id)))
            if not count:
                ingredients, house_specials, drinks = seed_catalog()
                session.add_all([_ingredient_row(i) for i in ingredients])
                session.add_all([_house_special_row(h) for h in house_specials])
                session.add_all([_drink_row(d) for d in drinks])
                await session.commit()
                logger.info("✅ Catalog seeded")

    async def close(self) -> None:
        await self.engine.dispose()

    async def health_check(self) -> bool:
        try:
            async with self.session_maker() as session:
                await session.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return False

    async def _list(self, model, mapper, order_column) -> list:
        async with self.session_maker() as session:
            result = await session.execute(select(model).order_by(order_column))
            return [mapper(row) for row in result.scalars().all()]

    async def _get(self, model, mapper, item_id: str):
        async with self.session_maker() as session:
            row = await session.get(model, item_id)
            return mapper(row) if row is not None else None

    async def _merge(self, row) -> None:
        async with self.session_maker() as session:
            await session.merge(row)
            await session.commit()

    # Catalog

    async def list_ingredients(self) -> list[Ingredient]:
        return await self._list(models.Ingredient, _ingredient, models.Ingredient.created_at)

    async def get_ingredient(self, ingredient_id: str) -> Optional[Ingredient]:
        return await self._get(models.Ingredient, _ingredient, ingredient_id)

    async def save_ingredient(self, ingredient: Ingredient) -> Ingredient:
        await self._merge(_ingredient_row(ingredient))
        return ingredient

    async def list_house_specials(self) -> list[HouseSpecial]:
        return await self._list(models.HouseSpecial, _house_special, models.HouseSpecial.created_at)

    async def get_house_special(self, house_special_id: str) -> Optional[HouseSpecial]:
        return await self._get(models.HouseSpecial, _house_special, house_special_id)

    async def save_house_special(self, house_special: HouseSpecial) -> HouseSpecial:
        await self._merge(_house_special_row(house_special))
        return house_special

    async def list_drinks(self) -> list[AvailableDrink]:
        return await self._list(models.Drink, _drink, models.Drink.created_at)

    async def get_drink(self, drink_id: str) -> Optional[AvailableDrink]:
        return await self._get(models.Drink, _drink, drink_id)

    async def save_drink(self, drink: AvailableDrink) -> AvailableDrink:
        await self._merge(_drink_row(drink))
        return drink

    # Orders

    async def list_orders(self) -> list[Order]:
        return await self._list(models.Order, _order, models.Order.created_at)

    async def get_order(self, order_id: str) -> Optional[Order]:
        return await self._get(models.Order, _order, order_id)

    async def save_order(self, order: Order) -> Order:
        await self._merge(_order_row(order))
        return order

    async def create_order(self, order: Order, records: list[FinancialRecord]) -> Order:
        """Order row and ledger rows share one commit."""
        async with self.session_maker() as session:
            session.add(_order_row(order))
            session.add_all([_record_row(r) for r in records])
            await session.commit()
        return order

    # Ledger

    async def list_financial_records(self) -> list[FinancialRecord]:
        return await self._list(models.FinancialRecord, _record, models.FinancialRecord.date)

    async def append_financial_records(self, records: list[FinancialRecord]) -> None:
        async with self.session_maker() as session:
            session.add_all([_record_row(r) for r in records])
            await session.commit()

    async def list_expenses(self) -> list[Expense]:
        return await self._list(models.Expense, _expense, models.Expense.created_at)

    async def append_expense(self, expense: Expense) -> None:
        async with self.session_maker() as session:
            session.add(_expense_row(expense))
            await session.commit()
