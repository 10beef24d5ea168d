"""
Order Pricing

Pure calculation of a marmita order's unit price, drinks subtotal and
grand total. No side effects: callers pass the drink catalog as it is at
order-creation time and store the returned figures on the order.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from sabor.core.exceptions import InvalidSizeError
from sabor.schemas import AvailableDrink, DrinkOption

logger = logging.getLogger(__name__)

MARMITA_PRICES: dict[str, float] = {
    "pequena": 12.0,
    "media": 15.0,
    "grande": 18.0,
}


@dataclass
class PriceBreakdown:
    """
    Result of pricing an order item.

    Attributes:
        unit_price: Price of one marmita of the chosen size
        drinks_total: Sum of drink price * quantity
        total_price: unit_price * quantidade + drinks_total
    """
    unit_price: float
    drinks_total: float
    total_price: float


def unit_price_for(size: str) -> float:
    """Look up the fixed size table."""
    key = size.value if hasattr(size, "value") else size
    try:
        return MARMITA_PRICES[key]
    except (KeyError, TypeError):
        raise InvalidSizeError(
            f"Tamanho inválido: {size!r}. Opções: {list(MARMITA_PRICES)}"
        )


def resolve_drink_price(reference: str, available_drinks: Iterable[AvailableDrink]) -> float:
    """
    Price of the catalog drink matching ``reference``.

    An id match wins over a type match. Unknown references price at zero.
    """
    drinks = list(available_drinks)
    for drink in drinks:
        if drink.id == reference:
            return drink.price
    for drink in drinks:
        if drink.type.value == reference:
            return drink.price

    logger.warning(f"Drink reference {reference!r} not in catalog, pricing at 0")
    return 0.0


def compute_order_total(
    size: str,
    quantidade: int,
    drinks: Sequence[DrinkOption],
    available_drinks: Sequence[AvailableDrink],
) -> PriceBreakdown:
    """
    Compute the totals of an order item.

    Args:
        size: pequena, media or grande
        quantidade: Number of marmitas (validated by the caller)
        drinks: Drink lines of the order
        available_drinks: Current drink catalog

    Returns:
        PriceBreakdown with unit price, drinks subtotal and total

    Raises:
        InvalidSizeError: If size is not in the price table
    """
    unit_price = unit_price_for(size)

    drinks_total = 0.0
    for line in drinks:
        drinks_total += resolve_drink_price(line.type, available_drinks) * line.quantity

    total_price = unit_price * quantidade + drinks_total

    return PriceBreakdown(
        unit_price=unit_price,
        drinks_total=drinks_total,
        total_price=total_price,
    )
