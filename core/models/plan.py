from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from core.models.product import Unit
from core.models.recipe import DayPart


class PlanMode(str, Enum):
    recipe = "recipe"
    products = "products"

    @classmethod
    def _missing_(cls, value: object) -> "PlanMode | None":
        # older clients send "meal" for recipe mode
        if isinstance(value, str) and value.strip().lower() == "meal":
            return cls.recipe
        return None


class SlotSource(str, Enum):
    recipe = "recipe"
    products = "products"
    snack_meal = "snack_meal"


class IngredientLine(BaseModel):
    product_name: str
    quantity: float
    unit: Unit
    calories: int
    serving_weight_g: float | None = None


class SlotResult(BaseModel):
    slot: DayPart
    type_label: str
    mode: PlanMode
    name: str | None = None
    description: str | None = None
    recipe_id: int | None = None
    total_calories: int = 0
    total_protein: float = 0.0
    total_carbs: float = 0.0
    total_fat: float = 0.0
    ingredients: list[IngredientLine] = []
    error: str | None = None
    source: SlotSource | None = None
    topping_added: bool = False


class Plan(BaseModel):
    total_calories: int
    total_protein: float
    total_carbs: float
    total_fat: float
    target_calories: int | float
    meals: list[SlotResult]
