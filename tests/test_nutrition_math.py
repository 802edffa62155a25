# tests/test_nutrition_math.py
from __future__ import annotations

import math

from core.models.product import Category, Product, Unit
from core.nutrition_math import (
    Nutrition,
    calories_for,
    nutrient_for,
    serving_grams,
    serving_nutrition,
    weight_in_grams,
)

OATS = Product(
    id=1,
    name="Oats",
    calories_per_100g=400,
    protein_per_100g=10,
    carbs_per_100g=60,
    fat_per_100g=8,
    category="grain",
    serving_unit="g",
    serving_weight_g=50,
)


# ── unit conversions ────────────────────────────────────────────────
def test_weight_household_units():
    assert weight_in_grams(1, "tbsp") == 14
    assert weight_in_grams(2, "tsp") == 10
    assert weight_in_grams(0.5, "cup") == 120
    assert weight_in_grams(1, Unit.cup) == 240


def test_weight_piece_uses_reference_serving():
    assert weight_in_grams(2, "piece", 50) == 100
    assert weight_in_grams(2, Unit.piece, None) == 200     # default 100 g


def test_weight_grams_and_ml_pass_through():
    assert weight_in_grams(150, "g") == 150
    assert weight_in_grams(200, "ml") == 200
    assert weight_in_grams(42, "whatever") == 42


def test_scaling_treats_missing_values_as_zero():
    assert calories_for(150, 200) == 300
    assert calories_for(100, None) == 0
    assert nutrient_for(50, None) == 0
    assert math.isclose(nutrient_for(250, 3.2), 8.0)


def test_conversion_is_pure():
    first = calories_for(weight_in_grams(3, "tbsp"), 884)
    second = calories_for(weight_in_grams(3, "tbsp"), 884)
    assert first == second


# ── servings ────────────────────────────────────────────────────────
def test_serving_grams_per_unit():
    piece = OATS.model_copy(update={"serving_unit": Unit.piece, "serving_weight_g": 120})
    bare_piece = OATS.model_copy(update={"serving_unit": Unit.piece, "serving_weight_g": None})
    spoon = OATS.model_copy(update={"serving_unit": Unit.tbsp})
    bare_g = OATS.model_copy(update={"serving_weight_g": None})

    assert serving_grams(piece) == 120
    assert serving_grams(bare_piece) == 100
    assert serving_grams(spoon) == 14          # fixed, ignores serving_weight_g
    assert serving_grams(OATS) == 50
    assert serving_grams(bare_g) == 100


def test_serving_nutrition_scales_every_macro():
    n = serving_nutrition(OATS)
    assert n == Nutrition(kcal=200, protein_g=5, carbs_g=30, fat_g=4)


def test_nutrition_sum_and_rounding():
    total = Nutrition.total([Nutrition(100.4, 1.26, 2.24, 3.36), Nutrition(50, 1, 1, 1)])
    assert total.rounded() == {
        "total_calories": 150,
        "total_protein": 2.3,
        "total_carbs": 3.2,
        "total_fat": 4.4,
    }
    assert Nutrition.total([]) == Nutrition()


# ── boundary parsing ────────────────────────────────────────────────
def test_product_parsing_nulls_bad_fields():
    p = Product(
        id=9,
        name="Odd row",
        calories_per_100g="abc",
        protein_per_100g=-3,
        carbs_per_100g="12.5",
        fat_per_100g=None,
        category="  DAIRY ",
        serving_unit="kg",
        is_ready_to_eat=1,
    )
    assert p.calories_per_100g is None
    assert p.protein_per_100g is None
    assert p.carbs_per_100g == 12.5
    assert p.category is Category.dairy
    assert p.serving_unit is Unit.g
    assert p.is_ready_to_eat is True
    assert not p.is_selectable                  # calories unknown


def test_product_unknown_category_is_other():
    assert Product(id=1, name="x", category="nabiał").category is Category.other
    assert Product(id=1, name="x", category=None).category is Category.other
    assert Product(id=1, name="x", is_ready_to_eat=None).is_ready_to_eat is False


def test_inactive_product_is_not_selectable():
    p = OATS.model_copy(update={"status": "inactive_incomplete"})
    assert not p.is_active
    assert not p.is_selectable
    assert OATS.is_selectable
