"""
Recipe availability + derived totals (no DB).
"""
from core.models.product import Product, Unit
from core.models.recipe import DayPart, Ingredient, Recipe
from core.recipe_evaluator import evaluate_recipes, recipes_for

OATS = Product(id=1, name="Oats", calories_per_100g=400, protein_per_100g=10,
               carbs_per_100g=60, fat_per_100g=7, category="grain")
MILK = Product(id=2, name="Milk", calories_per_100g=50, protein_per_100g=3,
               carbs_per_100g=5, fat_per_100g=1.5, category="dairy",
               serving_unit="ml", is_ready_to_eat=True)
BANANA = Product(id=3, name="Banana", calories_per_100g=90, category="fruit",
                 serving_unit="piece", serving_weight_g=120, is_ready_to_eat=True)
CAVIAR = Product(id=99, name="Caviar", calories_per_100g=264, category="other")

PORRIDGE = Recipe(id=1, name="Porridge", day_part="breakfast", ingredients=[
    Ingredient(product=OATS, quantity=50, unit="g"),
    Ingredient(product=MILK, quantity=1, unit="cup"),
])
BANANA_MILK = Recipe(id=2, name="Banana & milk", day_part="snack", ingredients=[
    Ingredient(product=BANANA, quantity=1, unit="piece"),
    Ingredient(product=MILK, quantity=100, unit="ml"),
])
FANCY_LUNCH = Recipe(id=3, name="Fancy lunch", day_part="lunch", ingredients=[
    Ingredient(product=OATS, quantity=100, unit="g"),
    Ingredient(product=CAVIAR, quantity=30, unit="g"),
])
NOTHING = Recipe(id=4, name="Air", day_part="lunch", ingredients=[])

ALL = [PORRIDGE, BANANA_MILK, FANCY_LUNCH, NOTHING]
AVAILABLE = {1, 2, 3}


def test_only_fully_available_recipes_survive():
    ev = evaluate_recipes(ALL, AVAILABLE)
    assert [e.name for e in ev] == ["Porridge", "Banana & milk"]


def test_totals_are_derived_from_ingredients():
    porridge = evaluate_recipes([PORRIDGE], AVAILABLE)[0]
    # oats 50 g → 200 kcal ; milk 1 cup = 240 ml → 120 kcal
    assert porridge.total_calories == 320
    assert porridge.total_protein == 12.2
    assert porridge.total_carbs == 42.0
    assert porridge.total_fat == 7.1
    assert [i.calories for i in porridge.ingredients] == [200, 120]
    assert [i.unit for i in porridge.ingredients] == [Unit.g, Unit.cup]


def test_piece_ingredient_uses_product_serving_weight():
    snack = evaluate_recipes([BANANA_MILK], AVAILABLE)[0]
    assert snack.total_calories == 108 + 50


def test_ready_to_eat_set_flag():
    ev = {e.name: e for e in evaluate_recipes(ALL, AVAILABLE)}
    assert ev["Banana & milk"].is_ready_to_eat_set
    assert not ev["Porridge"].is_ready_to_eat_set


def test_unavailable_recipe_missing_from_every_day_part():
    ev = evaluate_recipes(ALL, AVAILABLE)
    for dp in DayPart:
        assert "Fancy lunch" not in [e.name for e in recipes_for(ev, dp)]
    assert recipes_for(ev, "lunch") == []


def test_recipe_without_ingredients_is_never_available():
    assert evaluate_recipes([NOTHING], AVAILABLE) == []
    assert evaluate_recipes([], AVAILABLE) == []


def test_one_missing_product_drops_the_recipe():
    assert evaluate_recipes([PORRIDGE, BANANA_MILK], {1, 3}) == []


def test_filter_by_day_part():
    ev = evaluate_recipes(ALL, AVAILABLE)
    assert [e.name for e in recipes_for(ev, DayPart.snack)] == ["Banana & milk"]
    assert [e.name for e in recipes_for(ev, "breakfast")] == ["Porridge"]
