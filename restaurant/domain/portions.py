"""
How many portions of a menu item current stock can produce.

The scarcest ingredient bounds the result: for every recipe line the
available stock is divided by the per-portion quantity and the smallest
ratio, floored, is the number of whole portions. Division goes through
``Decimal`` built from the values' string form so that amounts such as
0.3 / 0.1 give exactly 3 rather than 2.999...
"""

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Mapping, Optional, Sequence


class RecipeDataError(ValueError):
    """Recipe or stock data that makes the calculation meaningless."""


@dataclass(frozen=True)
class RecipeLine:
    ingredient_id: str
    quantity: float


def _as_decimal(value: float) -> Decimal:
    return Decimal(str(value))


def portions_for(available: float, per_portion: float) -> Decimal:
    """Real-valued number of portions one ingredient allows."""
    if not (math.isfinite(available) and math.isfinite(per_portion)):
        raise RecipeDataError(f"amounts must be finite, got stock {available} and quantity {per_portion}")
    if per_portion <= 0:
        raise RecipeDataError(f"quantity per portion must be greater than 0, got {per_portion}")
    if available < 0:
        raise RecipeDataError(f"stock cannot be negative, got {available}")
    return _as_decimal(available) / _as_decimal(per_portion)


def calculate_portions(lines: Sequence[RecipeLine], stock: Mapping[str, float]) -> int:
    """
    Whole portions realizable from ``stock`` for the recipe ``lines``.

    Ingredients missing from ``stock`` count as zero on hand. An empty
    recipe yields 0. Any line with a non-positive or non-finite quantity,
    or a negative or non-finite stock, raises ``RecipeDataError`` before a
    result is produced.
    """
    smallest: Optional[Decimal] = None
    for line in lines:
        ratio = portions_for(stock.get(line.ingredient_id, 0), line.quantity)
        if smallest is None or ratio < smallest:
            smallest = ratio
    if smallest is None:
        return 0
    return math.floor(smallest)
