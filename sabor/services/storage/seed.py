"""
Seed catalog loaded into an empty store.
"""

from datetime import datetime
from typing import Optional

from sabor.schemas import AvailableDrink, DrinkType, HouseSpecial, Ingredient

SEED_INGREDIENTS = [
    ("ing_1", "Arroz Branco"),
    ("ing_2", "Feijão Carioca"),
    ("ing_3", "Carne Bovina"),
    ("ing_4", "Frango Grelhado"),
    ("ing_5", "Salada Verde"),
]

SEED_HOUSE_SPECIALS = [
    (
        "house_1",
        "Marmita Tradicional",
        "A clássica combinação que todo mundo ama",
        ["ing_1", "ing_2", "ing_3", "ing_5"],
    ),
    (
        "house_2",
        "Marmita Light",
        "Opção mais leve com frango e salada",
        ["ing_1", "ing_2", "ing_4", "ing_5"],
    ),
]

SEED_DRINKS = [
    ("drink_1", DrinkType.COCA_LATA, "Coca-Cola Lata 350ml", 4.0),
    ("drink_2", DrinkType.GUARANA_LATA, "Guaraná Antarctica Lata 350ml", 4.0),
    ("drink_3", DrinkType.SPRITE_LATA, "Sprite Lata 350ml", 4.0),
]


def seed_catalog(
    now: Optional[datetime] = None,
) -> tuple[list[Ingredient], list[HouseSpecial], list[AvailableDrink]]:
    now = now or datetime.now()
    ingredients = [
        Ingredient(id=id_, name=name, available=True, created_at=now)
        for id_, name in SEED_INGREDIENTS
    ]
    house_specials = [
        HouseSpecial(
            id=id_,
            name=name,
            description=description,
            ingredients=list(ingredient_ids),
            available=True,
            created_at=now,
        )
        for id_, name, description, ingredient_ids in SEED_HOUSE_SPECIALS
    ]
    drinks = [
        AvailableDrink(id=id_, type=type_, name=name, price=price, available=True, created_at=now)
        for id_, type_, name, price in SEED_DRINKS
    ]
    return ingredients, house_specials, drinks
