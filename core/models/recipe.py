from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from core.models.product import Product, Unit


class DayPart(str, Enum):
    breakfast = "breakfast"
    lunch = "lunch"
    dinner = "dinner"
    snack = "snack"


class Ingredient(BaseModel):
    product: Product
    quantity: float
    unit: Unit = Unit.g

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @field_validator("unit", mode="before")
    @classmethod
    def _coerce_unit(cls, v: Any) -> Unit:
        try:
            return Unit(str(getattr(v, "value", v)).strip().lower())
        except ValueError:
            return Unit.g


class Recipe(BaseModel):
    id: int
    name: str
    description: str | None = None
    day_part: DayPart | None = None   # unknown meal_type → never matches a slot
    ingredients: list[Ingredient] = []

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @field_validator("day_part", mode="before")
    @classmethod
    def _known_day_part(cls, v: Any) -> DayPart | None:
        if v is None:
            return None
        try:
            return DayPart(str(getattr(v, "value", v)).strip().lower())
        except ValueError:
            return None

    @property
    def is_ready_to_eat_set(self) -> bool:
        return bool(self.ingredients) and all(
            i.product.is_ready_to_eat for i in self.ingredients
        )
