from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class Category(str, Enum):
    dairy = "dairy"
    grain = "grain"
    fruit = "fruit"
    meat = "meat"
    vegetable = "vegetable"
    legume = "legume"
    nut = "nut"
    snack = "snack"
    beverage = "beverage"
    sweets = "sweets"
    sauce = "sauce"
    spice = "spice"
    frozen = "frozen"
    canned = "canned"
    other = "other"


class Unit(str, Enum):
    g = "g"
    ml = "ml"
    piece = "piece"
    tbsp = "tbsp"
    tsp = "tsp"
    cup = "cup"


class Product(BaseModel):
    id: int
    name: str
    calories_per_100g: float | None = None
    protein_per_100g: float | None = None
    carbs_per_100g: float | None = None
    fat_per_100g: float | None = None
    category: Category = Category.other
    serving_unit: Unit = Unit.g
    serving_weight_g: float | None = None   # only meaningful for "piece"
    is_ready_to_eat: bool = False
    status: str = "active"
    generic_product_id: int | None = None

    model_config = ConfigDict(from_attributes=True, frozen=True)

    # ---------------------------------------------------------- parsing
    @field_validator("category", mode="before")
    @classmethod
    def _coerce_category(cls, v: Any) -> Category:
        try:
            return Category(str(getattr(v, "value", v)).strip().lower())
        except ValueError:
            return Category.other

    @field_validator("serving_unit", mode="before")
    @classmethod
    def _coerce_unit(cls, v: Any) -> Unit:
        try:
            return Unit(str(getattr(v, "value", v)).strip().lower())
        except ValueError:
            return Unit.g

    @field_validator(
        "calories_per_100g",
        "protein_per_100g",
        "carbs_per_100g",
        "fat_per_100g",
        "serving_weight_g",
        mode="before",
    )
    @classmethod
    def _non_negative_or_null(cls, v: Any) -> float | None:
        if v is None or isinstance(v, bool):
            return None
        try:
            val = float(v)
        except (TypeError, ValueError):
            return None
        return val if val >= 0 else None

    @field_validator("is_ready_to_eat", mode="before")
    @classmethod
    def _truthy(cls, v: Any) -> bool:
        return bool(v)

    # ---------------------------------------------------------- flags
    @property
    def is_active(self) -> bool:
        return self.status == "active"

    @property
    def is_selectable(self) -> bool:
        """Active and calorie-known – the only products generation may use."""
        return self.is_active and self.calories_per_100g is not None
