"""
core/nutrition_math.py
────────────────────────────────────────────────────────────────────────
Quantity → grams → kcal / macros.

1. `weight_in_grams()`  – fixed household-unit conversions
2. `calories_for()` / `nutrient_for()` – per-100 g scaling
3. `serving_grams()` – what "one serving" of a product weighs
4. `Nutrition` – tiny summable record used by the evaluator and packer

Everything here is pure; a missing per-100 g value counts as zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from core.models.product import Product, Unit
from core.models.recipe import Ingredient

DEFAULT_SERVING_G = 100.0

# household measures, grams per unit
_FIXED_GRAMS: dict[str, float] = {
    Unit.tbsp.value: 14.0,
    Unit.tsp.value: 5.0,
    Unit.cup.value: 240.0,
}


def _unit_key(unit: Unit | str) -> str:
    return unit.value if isinstance(unit, Unit) else str(unit)


# ──────────────────────────────────────────────────────────────────────
#  Conversions
# ──────────────────────────────────────────────────────────────────────
def weight_in_grams(
    quantity: float,
    unit: Unit | str,
    reference_serving_g: float | None = None,
) -> float:
    key = _unit_key(unit)
    if key == Unit.piece.value:
        return quantity * (reference_serving_g or DEFAULT_SERVING_G)
    if key in _FIXED_GRAMS:
        return quantity * _FIXED_GRAMS[key]
    return quantity  # g / ml


def calories_for(grams: float, calories_per_100g: float | None) -> float:
    return grams / 100 * (calories_per_100g or 0)


def nutrient_for(grams: float, per_100g: float | None) -> float:
    return grams / 100 * (per_100g or 0)


def serving_grams(product: Product) -> float:
    key = _unit_key(product.serving_unit)
    if key == Unit.piece.value:
        return product.serving_weight_g or DEFAULT_SERVING_G
    if key in _FIXED_GRAMS:
        return _FIXED_GRAMS[key]
    return product.serving_weight_g or DEFAULT_SERVING_G


# ──────────────────────────────────────────────────────────────────────
#  Nutrition record
# ──────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class Nutrition:
    kcal: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0

    def __add__(self, other: "Nutrition") -> "Nutrition":
        return Nutrition(
            kcal=self.kcal + other.kcal,
            protein_g=self.protein_g + other.protein_g,
            carbs_g=self.carbs_g + other.carbs_g,
            fat_g=self.fat_g + other.fat_g,
        )

    @classmethod
    def total(cls, items: Iterable["Nutrition"]) -> "Nutrition":
        out = cls()
        for n in items:
            out = out + n
        return out

    def rounded(self) -> dict[str, float | int]:
        """kcal → int, macros → 1 decimal (the shape every slot reports)."""
        return {
            "total_calories": int(round(self.kcal)),
            "total_protein": round(self.protein_g, 1),
            "total_carbs": round(self.carbs_g, 1),
            "total_fat": round(self.fat_g, 1),
        }


def _scaled(grams: float, product: Product) -> Nutrition:
    return Nutrition(
        kcal=calories_for(grams, product.calories_per_100g),
        protein_g=nutrient_for(grams, product.protein_per_100g),
        carbs_g=nutrient_for(grams, product.carbs_per_100g),
        fat_g=nutrient_for(grams, product.fat_per_100g),
    )


def ingredient_nutrition(ingredient: Ingredient) -> Nutrition:
    grams = weight_in_grams(
        ingredient.quantity, ingredient.unit, ingredient.product.serving_weight_g
    )
    return _scaled(grams, ingredient.product)


def serving_nutrition(product: Product) -> Nutrition:
    return _scaled(serving_grams(product), product)
