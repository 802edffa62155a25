"""
core/plan_generator.py
────────────────────────────────────────────────────────────────────────
Public entry point of the generator.

    plan = await generate_plan(catalog, store_ids=[1, 3], target_calories=2000)

1. validate the request (nothing is fetched for a bad one)
2. await the catalog snapshot for the selected stores
3. run the day-part planner and assemble the totals

`regenerate_slot()` rerolls one day-part by scaling its calories back up to
a synthetic whole-day target and running the full generator again.
"""

from __future__ import annotations

import logging
import math
import random
from typing import Mapping, Protocol, Sequence

from core.day_part_planner import SHARES, plan_day
from core.models.catalog import CatalogSnapshot
from core.models.plan import Plan, PlanMode, SlotResult
from core.models.recipe import DayPart
from core.plan_assembly import assemble_plan

_LOG = logging.getLogger(__name__)


class PlanRequestError(ValueError):
    """Caller input rejected before any catalog access."""


class CatalogProvider(Protocol):
    async def load(self, store_ids: Sequence[int]) -> CatalogSnapshot: ...


def _positive_finite(value: float | None) -> bool:
    return value is not None and math.isfinite(value) and value > 0


def _validate(store_ids: Sequence[int] | None, target_calories: float | None) -> None:
    if not store_ids:
        raise PlanRequestError("store_ids must list at least one store")
    if not _positive_finite(target_calories):
        raise PlanRequestError("target_calories must be a positive number")


async def generate_plan(
    catalog: CatalogProvider,
    store_ids: Sequence[int],
    target_calories: float,
    modes: Mapping[str, PlanMode | str] | None = None,
    rng: random.Random | None = None,
) -> Plan:
    _validate(store_ids, target_calories)

    snapshot = await catalog.load(list(store_ids))
    _LOG.info(
        "generating plan: stores=%s target=%s products=%d recipes=%d",
        list(store_ids), target_calories, len(snapshot.products), len(snapshot.recipes),
    )
    slots = plan_day(snapshot, target_calories, modes, rng)
    return assemble_plan(slots, target_calories)


async def regenerate_slot(
    catalog: CatalogProvider,
    store_ids: Sequence[int],
    slot: DayPart | str,
    slot_calories: float,
    mode: PlanMode | str = PlanMode.products,
    rng: random.Random | None = None,
) -> SlotResult:
    dp = DayPart(slot)
    if not _positive_finite(slot_calories):
        raise PlanRequestError("slot_calories must be a positive number")

    day_target = round(slot_calories / SHARES[dp])
    plan = await generate_plan(
        catalog, store_ids, day_target, {dp.value: PlanMode(mode)}, rng
    )
    return next(m for m in plan.meals if m.slot == dp)
