from __future__ import annotations

from typing import Sequence

from core.models.plan import Plan, SlotResult


def assemble_plan(slots: Sequence[SlotResult], target_calories: int | float) -> Plan:
    """Grand totals: integer kcal sum, macros summed then rounded to 0.1."""
    return Plan(
        total_calories=sum(s.total_calories for s in slots),
        total_protein=round(sum(s.total_protein for s in slots), 1),
        total_carbs=round(sum(s.total_carbs for s in slots), 1),
        total_fat=round(sum(s.total_fat for s in slots), 1),
        target_calories=target_calories,
        meals=list(slots),
    )
