"""
core/recipe_evaluator.py
────────────────────────────────────────────────────────────────────────
Recipe availability + derived totals.

Responsibilities
----------------
1.   `evaluate_recipes()` – join every recipe with its ingredients, drop the
     ones that reference a product outside the catalog scope, and attach
     kcal / macro totals plus the ready-to-eat-set flag.
2.   `recipes_for()` – narrow an evaluated list down to one day-part.

Totals are never stored; they are recomputed from the ingredients on every
call.  A recipe without ingredients never survives evaluation.
"""

from __future__ import annotations

import logging
from typing import Iterable, List

import pandas as pd
from pydantic import BaseModel, ConfigDict

from core.models.plan import IngredientLine
from core.models.recipe import DayPart, Recipe
from core.nutrition_math import Nutrition, ingredient_nutrition

_LOG = logging.getLogger(__name__)

_MACROS = ["kcal", "protein_g", "carbs_g", "fat_g"]
_COLUMNS = ["recipe_id", "product_id", "ready", *_MACROS]


class EvaluatedRecipe(BaseModel):
    recipe: Recipe
    total_calories: int
    total_protein: float
    total_carbs: float
    total_fat: float
    ingredients: List[IngredientLine]
    is_ready_to_eat_set: bool

    model_config = ConfigDict(frozen=True)

    @property
    def id(self) -> int:
        return self.recipe.id

    @property
    def name(self) -> str:
        return self.recipe.name

    @property
    def day_part(self) -> DayPart | None:
        return self.recipe.day_part


# ─────────────────────────────── frame ────────────────────────────── #
def _ingredient_frame(recipes: Iterable[Recipe]) -> pd.DataFrame:
    rows = []
    for r in recipes:
        for ing in r.ingredients:
            n = ingredient_nutrition(ing)
            rows.append({
                "recipe_id":  r.id,
                "product_id": ing.product.id,
                "ready":      ing.product.is_ready_to_eat,
                "kcal":       n.kcal,
                "protein_g":  n.protein_g,
                "carbs_g":    n.carbs_g,
                "fat_g":      n.fat_g,
            })
    return pd.DataFrame(rows, columns=_COLUMNS)


def recipe_lines(recipe: Recipe) -> list[IngredientLine]:
    return [
        IngredientLine(
            product_name=ing.product.name,
            quantity=ing.quantity,
            unit=ing.unit,
            calories=int(round(ingredient_nutrition(ing).kcal)),
        )
        for ing in recipe.ingredients
    ]


# ──────────────────────────── evaluate ────────────────────────────── #
def evaluate_recipes(
    recipes: Iterable[Recipe],
    available_ids: Iterable[int],
) -> list[EvaluatedRecipe]:
    recipes = list(recipes)
    df = _ingredient_frame(recipes)
    if df.empty:
        _LOG.debug("no ingredient rows – nothing to evaluate")
        return []

    df["available"] = df["product_id"].isin(set(available_ids))
    per_recipe = df.groupby("recipe_id", sort=False).agg(
        available=("available", "all"),
        ready=("ready", "all"),
        **{m: (m, "sum") for m in _MACROS},
    )
    usable = per_recipe[per_recipe["available"]]

    out: list[EvaluatedRecipe] = []
    for r in recipes:  # keep caller order – it is the tie-break order
        if r.id not in usable.index:
            continue
        row = usable.loc[r.id]
        totals = Nutrition(*(float(row[m]) for m in _MACROS)).rounded()
        out.append(
            EvaluatedRecipe(
                recipe=r,
                ingredients=recipe_lines(r),
                is_ready_to_eat_set=bool(row["ready"]),
                **totals,
            )
        )

    _LOG.debug("recipes evaluated: %d in, %d available", len(recipes), len(out))
    return out


def recipes_for(
    evaluated: Iterable[EvaluatedRecipe], day_part: DayPart | str
) -> list[EvaluatedRecipe]:
    dp = DayPart(day_part)
    return [e for e in evaluated if e.day_part == dp]
