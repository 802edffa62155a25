"""
Validation, totals and single-slot regeneration in core/plan_generator.py
(catalog is an in-memory fake, no DB).
"""
from __future__ import annotations

import asyncio
import random

import pytest

from core.models.catalog import CatalogSnapshot
from core.models.plan import PlanMode
from core.models.product import Product
from core.models.recipe import DayPart, Ingredient, Recipe
from core.plan_generator import PlanRequestError, generate_plan, regenerate_slot
from services.catalog import CatalogError


def _product(pid: int, kcal: float, category: str = "other", ready: bool = True) -> Product:
    return Product(id=pid, name=f"P{pid}", calories_per_100g=kcal, protein_per_100g=5,
                   carbs_per_100g=10, fat_per_100g=2, category=category,
                   serving_unit="g", serving_weight_g=100, is_ready_to_eat=ready)


def _recipe(rid: int, name: str, day_part: str, base: Product) -> Recipe:
    return Recipe(id=rid, name=name, day_part=day_part,
                  ingredients=[Ingredient(product=base, quantity=100, unit="g")])


BASES = {kcal: _product(100 + kcal, kcal, ready=False) for kcal in (300, 450, 520)}
SNACKS = [_product(i, 70, cat) for i, cat in enumerate(
    ["dairy", "grain", "fruit", "meat", "vegetable", "legume", "nut", "snack"] * 2, start=1
)]
SNAPSHOT = CatalogSnapshot(
    products=[*SNACKS, *BASES.values()],
    recipes=[
        _recipe(1, "Toast", "breakfast", BASES[300]),
        _recipe(2, "Omelette", "breakfast", BASES[450]),
        _recipe(3, "Pancakes", "breakfast", BASES[520]),
    ],
)


class FakeCatalog:
    def __init__(self, snapshot: CatalogSnapshot = SNAPSHOT, fail: bool = False) -> None:
        self.snapshot = snapshot
        self.fail = fail
        self.calls: list[list[int]] = []

    async def load(self, store_ids):
        self.calls.append(list(store_ids))
        if self.fail:
            raise CatalogError("catalog unavailable")
        return self.snapshot


def run(coro):
    return asyncio.run(coro)


# ── request validation ──────────────────────────────────────────────
@pytest.mark.parametrize("stores, target", [
    ([], 2000),
    (None, 2000),
    ([1], 0),
    ([1], -5),
    ([1], None),
    ([1], float("inf")),
    ([1], float("nan")),
])
def test_bad_request_is_rejected_before_catalog_access(stores, target):
    catalog = FakeCatalog()
    with pytest.raises(PlanRequestError):
        run(generate_plan(catalog, stores, target))
    assert catalog.calls == []


def test_request_error_is_a_value_error():
    assert issubclass(PlanRequestError, ValueError)


# ── full plan ───────────────────────────────────────────────────────
def test_plan_has_four_slots_in_order_and_echoes_target():
    catalog = FakeCatalog()
    plan = run(generate_plan(catalog, [1, 2], 2000, rng=random.Random(1)))

    assert catalog.calls == [[1, 2]]
    assert plan.target_calories == 2000
    assert isinstance(plan.target_calories, int)
    assert [m.slot for m in plan.meals] == list(DayPart)
    assert [m.type_label for m in plan.meals] == ["Breakfast", "Lunch", "Dinner", "Snack"]


def test_default_mode_is_products():
    plan = run(generate_plan(FakeCatalog(), [1], 2000, rng=random.Random(2)))
    assert all(m.mode is PlanMode.products for m in plan.meals)


def test_grand_totals_are_slot_sums():
    plan = run(generate_plan(FakeCatalog(), [1], 2000, {"breakfast": "meal"},
                             rng=random.Random(3)))
    assert plan.meals[0].name == "Pancakes"
    assert plan.total_calories == sum(m.total_calories for m in plan.meals)
    assert plan.total_protein == round(sum(m.total_protein for m in plan.meals), 1)
    assert plan.total_fat == round(sum(m.total_fat for m in plan.meals), 1)


def test_empty_catalog_gives_zero_plan_not_an_exception():
    plan = run(generate_plan(FakeCatalog(CatalogSnapshot()), [1], 2000,
                             {"lunch": "recipe"}))
    assert plan.total_calories == 0
    lunch = plan.meals[1]
    assert lunch.total_calories == 0 and lunch.ingredients == [] and lunch.error


def test_catalog_failure_propagates():
    with pytest.raises(CatalogError):
        run(generate_plan(FakeCatalog(fail=True), [1], 2000))


# ── single slot ─────────────────────────────────────────────────────
def test_regenerate_breakfast_in_recipe_mode():
    catalog = FakeCatalog()
    slot = run(regenerate_slot(catalog, [1], "breakfast", 500, mode="recipe"))
    assert slot.slot is DayPart.breakfast
    assert slot.mode is PlanMode.recipe
    assert slot.name == "Pancakes"
    assert len(catalog.calls) == 1


def test_regenerate_products_slot_stays_near_its_share():
    slot = run(regenerate_slot(FakeCatalog(), [1], DayPart.dinner, 600,
                               rng=random.Random(4)))
    assert slot.mode is PlanMode.products
    assert 480 <= slot.total_calories <= 720


@pytest.mark.parametrize("kcal", [0, -100, None, float("inf"), float("nan")])
def test_regenerate_rejects_unusable_calories(kcal):
    catalog = FakeCatalog()
    with pytest.raises(PlanRequestError):
        run(regenerate_slot(catalog, [1], "lunch", kcal))
    assert catalog.calls == []


def test_regenerate_rejects_unknown_slot():
    with pytest.raises(ValueError):
        run(regenerate_slot(FakeCatalog(), [1], "brunch", 300))
