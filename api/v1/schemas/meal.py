from __future__ import annotations
from pydantic import BaseModel, ConfigDict

from core.models.plan import IngredientLine


class StoreOut(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class MealOut(BaseModel):
    id: int
    name: str
    meal_type: str | None
    description: str | None = None
    total_calories: int
    total_protein: float
    total_carbs: float
    total_fat: float
    ready_to_eat: bool          # every ingredient is a ready-to-eat product
    ingredients: list[IngredientLine]
