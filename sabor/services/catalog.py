"""
Catalog Management

Admin operations on the menu: ingredients, house specials ("moda da
casa") and drinks. Entries are never deleted; they are switched on and
off through their ``available`` flag.
"""

import logging
import math
from datetime import datetime
from typing import Optional

from sabor.core.exceptions import (
    DrinkNotFoundError,
    HouseSpecialNotFoundError,
    IngredientNotFoundError,
    InvalidReferenceError,
    MissingFieldsError,
    ValidationError,
)
from sabor.schemas import AvailableDrink, DrinkType, HouseSpecial, Ingredient
from sabor.services.ids import new_id
from sabor.services.storage.base import BaseStore

logger = logging.getLogger(__name__)


def _newest_first(items: list) -> list:
    return sorted(items, key=lambda item: item.created_at, reverse=True)


def _next_availability(current: bool, available: Optional[bool]) -> bool:
    """Explicit value wins; otherwise flip."""
    return (not current) if available is None else available


class CatalogService:
    """Create, list and toggle catalog entries."""

    def __init__(self, store: BaseStore):
        self.store = store

    # =========================================================================
    # INGREDIENTS
    # =========================================================================

    async def list_ingredients(self) -> list[Ingredient]:
        return _newest_first(await self.store.list_ingredients())

    async def create_ingredient(self, name: str) -> Ingredient:
        """
        Add an ingredient, available by default.

        Raises:
            ValidationError: Empty name or a case-insensitive duplicate
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Nome do ingrediente é obrigatório.")

        async with self.store.lock:
            existing = await self.store.list_ingredients()
            if any(i.name.lower() == name.lower() for i in existing):
                raise ValidationError("Ingrediente já existe.")

            ingredient = Ingredient(
                id=new_id("ing"),
                name=name,
                available=True,
                created_at=datetime.now(),
            )
            await self.store.save_ingredient(ingredient)

        logger.info(f"Ingredient {ingredient.id} created: {ingredient.name}")
        return ingredient

    async def toggle_ingredient(self, ingredient_id: str, available: Optional[bool] = None) -> Ingredient:
        async with self.store.lock:
            ingredient = await self.store.get_ingredient(ingredient_id)
            if ingredient is None:
                raise IngredientNotFoundError()
            ingredient.available = _next_availability(ingredient.available, available)
            await self.store.save_ingredient(ingredient)

        logger.info(f"Ingredient {ingredient.id} available={ingredient.available}")
        return ingredient

    # =========================================================================
    # HOUSE SPECIALS
    # =========================================================================

    async def list_house_specials(self) -> list[HouseSpecial]:
        return _newest_first(await self.store.list_house_specials())

    async def create_house_special(
        self,
        name: str,
        description: str,
        ingredients: list[str],
    ) -> HouseSpecial:
        """
        Add a preset combination of existing ingredients.

        Raises:
            MissingFieldsError: Empty name, description or ingredient list
            InvalidReferenceError: An ingredient id does not exist
        """
        name = (name or "").strip()
        description = (description or "").strip()
        if not name or not description or not ingredients:
            raise MissingFieldsError()

        async with self.store.lock:
            known = {i.id for i in await self.store.list_ingredients()}
            missing = [ingredient_id for ingredient_id in ingredients if ingredient_id not in known]
            if missing:
                logger.warning(f"House special {name!r} references unknown ingredients: {missing}")
                raise InvalidReferenceError()

            house_special = HouseSpecial(
                id=new_id("house"),
                name=name,
                description=description,
                ingredients=list(ingredients),
                available=True,
                created_at=datetime.now(),
            )
            await self.store.save_house_special(house_special)

        logger.info(f"House special {house_special.id} created: {house_special.name}")
        return house_special

    async def toggle_house_special(
        self,
        house_special_id: str,
        available: Optional[bool] = None,
    ) -> HouseSpecial:
        async with self.store.lock:
            house_special = await self.store.get_house_special(house_special_id)
            if house_special is None:
                raise HouseSpecialNotFoundError()
            house_special.available = _next_availability(house_special.available, available)
            await self.store.save_house_special(house_special)

        logger.info(f"House special {house_special.id} available={house_special.available}")
        return house_special

    # =========================================================================
    # DRINKS
    # =========================================================================

    async def list_drinks(self) -> list[AvailableDrink]:
        return _newest_first(await self.store.list_drinks())

    async def create_drink(
        self,
        type: Optional[DrinkType],
        name: str,
        price: float,
    ) -> AvailableDrink:
        """
        Add a drink to the catalog.

        Raises:
            ValidationError: Missing type/name or a price that is not a positive finite number
        """
        name = (name or "").strip()
        if type is None or not name or price is None or not (math.isfinite(price) and price > 0):
            raise ValidationError("Todos os campos são obrigatórios e preço deve ser positivo.")

        drink = AvailableDrink(
            id=new_id("drink"),
            type=DrinkType(type),
            name=name,
            price=price,
            available=True,
            created_at=datetime.now(),
        )
        async with self.store.lock:
            await self.store.save_drink(drink)

        logger.info(f"Drink {drink.id} created: {drink.name} at R$ {drink.price:.2f}")
        return drink

    async def toggle_drink(self, drink_id: str, available: Optional[bool] = None) -> AvailableDrink:
        async with self.store.lock:
            drink = await self.store.get_drink(drink_id)
            if drink is None:
                raise DrinkNotFoundError()
            drink.available = _next_availability(drink.available, available)
            await self.store.save_drink(drink)

        logger.info(f"Drink {drink.id} available={drink.available}")
        return drink
