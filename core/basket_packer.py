"""
core/basket_packer.py
────────────────────────────────────────────────────────────────────────
Randomised bounded search for a basket of ready-to-eat products whose
per-serving kcal add up to within ±20 % of a slot target.

Shape of the search
-------------------
* pool = preferred categories first, then everything else
* up to `MAX_ATTEMPTS` uniform shuffles of that pool
* each shuffle is walked greedily: a product is taken unless it would push
  the running total past the upper bound (it is skipped, not dropped), and
  the walk stops once the lower bound is reached
* best in-band attempt wins; an attempt within 5 % of target ends the search
* nothing in band → single-item fallback (first preferred, else first pool)

Results differ between calls on purpose (variety on every regeneration).
Pass a seeded or stubbed `random.Random` to make a run reproducible.
"""

from __future__ import annotations

import logging
import math
import random
from typing import Iterable, List, Sequence, Tuple

from pydantic import BaseModel

from core.models.plan import IngredientLine
from core.models.product import Category, Product, Unit
from core.models.recipe import DayPart
from core.nutrition_math import Nutrition, serving_grams, serving_nutrition

_LOG = logging.getLogger(__name__)

TOLERANCE = 0.20
MAX_ATTEMPTS = 200
CLOSE_ENOUGH = 0.05   # fraction of target that ends the search early

BASKET_NAME = "Product set"
EMPTY_NAME = "No products"
EMPTY_ERROR = "No ready-to-eat products available"

SLOT_CATEGORIES: dict[DayPart, tuple[Category, ...]] = {
    DayPart.breakfast: (Category.dairy, Category.grain, Category.fruit),
    DayPart.lunch:     (Category.meat, Category.grain, Category.vegetable, Category.legume),
    DayPart.dinner:    (Category.meat, Category.vegetable, Category.dairy),
    DayPart.snack:     (Category.fruit, Category.nut, Category.dairy, Category.snack),
}

_Item = Tuple[Product, Nutrition]


class Basket(BaseModel):
    name: str
    description: str | None = None
    total_calories: int = 0
    total_protein: float = 0.0
    total_carbs: float = 0.0
    total_fat: float = 0.0
    ingredients: List[IngredientLine] = []
    products: List[Product] = []
    in_band: bool = False          # False for the empty and fallback results
    error: str | None = None


# ──────────────────────────────── search ──────────────────────────────
def _greedy_fill(items: Sequence[_Item], lower: float, upper: float) -> tuple[list[_Item], float]:
    selected: list[_Item] = []
    total = 0.0
    for item in items:
        kcal = item[1].kcal
        if total + kcal > upper:
            continue
        selected.append(item)
        total += kcal
        if total >= lower:
            break
    return selected, total


def pack_basket(
    pool: Iterable[Product],
    target: float,
    day_part: DayPart | str,
    rng: random.Random | None = None,
) -> Basket:
    rng = rng or random.Random()
    dp = DayPart(day_part)
    preferred_cats = SLOT_CATEGORIES.get(dp, ())

    items = [(p, serving_nutrition(p)) for p in pool]
    preferred = [it for it in items if it[0].category in preferred_cats]
    other = [it for it in items if it[0].category not in preferred_cats]
    ordered = preferred + other
    if not ordered:
        _LOG.warning("empty product pool for %s", dp.value)
        return Basket(name=EMPTY_NAME, error=EMPTY_ERROR)

    lower = target * (1 - TOLERANCE)
    upper = target * (1 + TOLERANCE)

    best: list[_Item] | None = None
    best_diff = math.inf
    attempt = 0
    for attempt in range(1, MAX_ATTEMPTS + 1):
        shuffled = list(ordered)
        rng.shuffle(shuffled)
        selected, total = _greedy_fill(shuffled, lower, upper)
        if not selected:
            continue

        diff = abs(total - target)
        if lower <= total <= upper and diff < best_diff:
            best, best_diff = selected, diff
            if diff < target * CLOSE_ENOUGH:
                break

    if best is None:
        fallback = (preferred or ordered)[0]
        _LOG.debug(
            "no basket within ±%d%% of %.0f kcal after %d attempts – fallback to %s",
            TOLERANCE * 100, target, attempt, fallback[0].name,
        )
        return _basket([fallback], in_band=False)

    _LOG.debug("basket found after %d attempts (|Δ|=%.1f kcal)", attempt, best_diff)
    return _basket(best, in_band=True)


# ──────────────────────────────── output ──────────────────────────────
def serving_line(product: Product, n: Nutrition) -> IngredientLine:
    grams = serving_grams(product)
    per_piece = product.serving_unit == Unit.piece
    return IngredientLine(
        product_name=product.name,
        quantity=1 if per_piece else grams,
        unit=Unit.piece if per_piece else Unit.g,
        serving_weight_g=grams,
        calories=int(round(n.kcal)),
    )


def _basket(selected: Sequence[_Item], in_band: bool) -> Basket:
    lines = [serving_line(p, n) for p, n in selected]
    totals = Nutrition.total(n for _, n in selected).rounded()
    return Basket(
        name=BASKET_NAME,
        description=", ".join(line.product_name for line in lines),
        ingredients=lines,
        products=[p for p, _ in selected],
        in_band=in_band,
        **totals,
    )
