"""
core/day_part_planner.py
────────────────────────────────────────────────────────────────────────
One slot per day-part, each degrading on its own.

recipe mode
    closest recipe by |kcal − share|; if it falls short by more than 10 %
    a ready-to-eat "topping" is appended to close the gap.

products mode
    a basket from `core.basket_packer`; the snack slot first flips a 70/30
    coin in favour of a ready-to-eat recipe ("snack meal") when one exists.

`plan_day()` runs all four slots against a `CatalogSnapshot`.
"""

from __future__ import annotations

import logging
import random
from typing import Mapping, Sequence

import numpy as np

from core.basket_packer import pack_basket, serving_line
from core.models.catalog import CatalogSnapshot
from core.models.plan import PlanMode, SlotResult, SlotSource
from core.models.product import Product
from core.models.recipe import DayPart
from core.nutrition_math import serving_nutrition
from core.recipe_evaluator import EvaluatedRecipe, evaluate_recipes, recipes_for

_LOG = logging.getLogger(__name__)

DAY_PARTS: tuple[DayPart, ...] = (
    DayPart.breakfast, DayPart.lunch, DayPart.dinner, DayPart.snack,
)
SHARES: dict[DayPart, float] = {
    DayPart.breakfast: 0.25,
    DayPart.lunch:     0.35,
    DayPart.dinner:    0.30,
    DayPart.snack:     0.10,
}
LABELS: dict[DayPart, str] = {
    DayPart.breakfast: "Breakfast",
    DayPart.lunch:     "Lunch",
    DayPart.dinner:    "Dinner",
    DayPart.snack:     "Snack",
}

TOPPING_GAP_RATIO = 0.10     # shortfall (fraction of share) that triggers a topping
TOPPING_CAP = 1.5            # candidate toppings stay ≤ gap × this
SNACK_MEAL_PROBABILITY = 0.70
TOPPING_SUFFIX = " (addition)"
NO_RECIPES_ERROR = "No recipes available for this day-part"


def calorie_split(target_calories: float) -> dict[DayPart, int]:
    return {dp: int(round(target_calories * SHARES[dp])) for dp in DAY_PARTS}


def resolve_modes(modes: Mapping[str, PlanMode | str] | None) -> dict[DayPart, PlanMode]:
    """Unspecified day-parts default to products mode."""
    modes = modes or {}
    out: dict[DayPart, PlanMode] = {}
    for dp in DAY_PARTS:
        out[dp] = PlanMode(modes.get(dp.value) or PlanMode.products)
    return out


# ──────────────────────────────── selection ────────────────────────────
def pick_closest(candidates: Sequence[EvaluatedRecipe], target: float) -> EvaluatedRecipe | None:
    """Recipe with the smallest |kcal − target|; the first one wins ties."""
    if not candidates:
        return None
    kcal = np.array([c.total_calories for c in candidates], dtype=float)
    return candidates[int(np.argmin(np.abs(kcal - target)))]


def pick_topping(pool: Sequence[Product], gap: float) -> Product | None:
    if not pool:
        return None
    scored = [(p, serving_nutrition(p).kcal) for p in pool]
    capped = [(p, k) for p, k in scored if k <= gap * TOPPING_CAP]
    if capped:
        return min(capped, key=lambda pk: abs(pk[1] - gap))[0]
    return min(scored, key=lambda pk: pk[1])[0]


# ──────────────────────────────── slot builders ────────────────────────
def _from_recipe(
    recipe: EvaluatedRecipe, slot: DayPart, mode: PlanMode, source: SlotSource
) -> SlotResult:
    return SlotResult(
        slot=slot,
        type_label=LABELS[slot],
        mode=mode,
        name=recipe.name,
        description=recipe.recipe.description,
        recipe_id=recipe.id,
        total_calories=recipe.total_calories,
        total_protein=recipe.total_protein,
        total_carbs=recipe.total_carbs,
        total_fat=recipe.total_fat,
        ingredients=list(recipe.ingredients),
        source=source,
    )


def _with_topping(result: SlotResult, topping: Product) -> SlotResult:
    n = serving_nutrition(topping)
    line = serving_line(topping, n).model_copy(
        update={"product_name": topping.name + TOPPING_SUFFIX}
    )
    return result.model_copy(update={
        "total_calories": result.total_calories + int(round(n.kcal)),
        "total_protein":  round(result.total_protein + n.protein_g, 1),
        "total_carbs":    round(result.total_carbs + n.carbs_g, 1),
        "total_fat":      round(result.total_fat + n.fat_g, 1),
        "ingredients":    [*result.ingredients, line],
        "topping_added":  True,
    })


def _error_slot(slot: DayPart, mode: PlanMode, error: str) -> SlotResult:
    return SlotResult(slot=slot, type_label=LABELS[slot], mode=mode, error=error)


def recipe_slot(
    slot: DayPart,
    target: int,
    recipes: Sequence[EvaluatedRecipe],
    ready_pool: Sequence[Product],
) -> SlotResult:
    chosen = pick_closest(recipes_for(recipes, slot), target)
    if chosen is None:
        _LOG.warning("%s: no available recipes", slot.value)
        return _error_slot(slot, PlanMode.recipe, NO_RECIPES_ERROR)

    result = _from_recipe(chosen, slot, PlanMode.recipe, SlotSource.recipe)
    gap = target - chosen.total_calories
    if target > 0 and gap / target > TOPPING_GAP_RATIO:
        topping = pick_topping(ready_pool, gap)
        if topping is not None:
            _LOG.debug("%s: %s short by %d kcal → topping %s",
                       slot.value, chosen.name, gap, topping.name)
            result = _with_topping(result, topping)
    return result


def products_slot(
    slot: DayPart,
    target: int,
    recipes: Sequence[EvaluatedRecipe],
    ready_pool: Sequence[Product],
    rng: random.Random,
) -> SlotResult:
    if slot == DayPart.snack:
        snack_meals = [r for r in recipes_for(recipes, slot) if r.is_ready_to_eat_set]
        if snack_meals and rng.random() < SNACK_MEAL_PROBABILITY:
            chosen = pick_closest(snack_meals, target)
            return _from_recipe(chosen, slot, PlanMode.products, SlotSource.snack_meal)

    basket = pack_basket(ready_pool, target, slot, rng)
    return SlotResult(
        slot=slot,
        type_label=LABELS[slot],
        mode=PlanMode.products,
        name=basket.name,
        description=basket.description,
        total_calories=basket.total_calories,
        total_protein=basket.total_protein,
        total_carbs=basket.total_carbs,
        total_fat=basket.total_fat,
        ingredients=basket.ingredients,
        error=basket.error,
        source=None if basket.error else SlotSource.products,
    )


# ──────────────────────────────── whole day ────────────────────────────
def plan_day(
    snapshot: CatalogSnapshot,
    target_calories: float,
    modes: Mapping[str, PlanMode | str] | None = None,
    rng: random.Random | None = None,
) -> list[SlotResult]:
    rng = rng or random.Random()
    split = calorie_split(target_calories)
    slot_modes = resolve_modes(modes)

    recipes = evaluate_recipes(snapshot.recipes, snapshot.available_ids)
    ready_pool = snapshot.ready_to_eat

    results: list[SlotResult] = []
    for dp in DAY_PARTS:
        if slot_modes[dp] == PlanMode.recipe:
            results.append(recipe_slot(dp, split[dp], recipes, ready_pool))
        else:
            results.append(products_slot(dp, split[dp], recipes, ready_pool, rng))
    return results
