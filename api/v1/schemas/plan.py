# api/v1/schemas/plan.py
from __future__ import annotations
from typing import Annotated, Any, Dict, List, Union

from pydantic import BaseModel, Field, PositiveInt, field_validator

from core.models.plan import PlanMode
from core.models.recipe import DayPart


# ints stay ints so the plan echoes the target as sent; inf / nan are rejected
Kcal = Union[PositiveInt, Annotated[float, Field(gt=0, allow_inf_nan=False)]]


def _mode(v: Any) -> Any:
    # PlanMode() also understands the legacy "meal" spelling
    return PlanMode(v) if isinstance(v, str) else v


class GenerateRequest(BaseModel):
    store_ids: List[int] = Field(..., min_length=1, examples=[[1, 3]])
    target_calories: Kcal = Field(..., examples=[2000])
    # unspecified day-parts fall back to "products"
    modes: Dict[DayPart, PlanMode] = Field(
        default_factory=dict, examples=[{"breakfast": "recipe", "snack": "products"}]
    )

    @field_validator("modes", mode="before")
    @classmethod
    def _normalise_modes(cls, v: Any) -> Any:
        if not isinstance(v, dict):
            return v
        return {k: _mode(m) for k, m in v.items() if m is not None}


class SlotRequest(BaseModel):
    store_ids: List[int] = Field(..., min_length=1)
    slot: DayPart
    slot_calories: Kcal = Field(..., examples=[500])
    mode: PlanMode = PlanMode.products

    @field_validator("mode", mode="before")
    @classmethod
    def _normalise_mode(cls, v: Any) -> Any:
        return _mode(v)
