# api/v1/generate.py
from __future__ import annotations
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from core.models.plan import Plan, SlotResult
from core.plan_generator import CatalogProvider, PlanRequestError, generate_plan, regenerate_slot
from services.catalog import CatalogError
from api.v1.deps import get_catalog
from api.v1.schemas import GenerateRequest, SlotRequest

router = APIRouter()
_LOG = logging.getLogger(__name__)


@router.post("", response_model=Plan, status_code=status.HTTP_200_OK)
async def generate(
    body: GenerateRequest,
    catalog: CatalogProvider = Depends(get_catalog),
) -> Plan:
    """
    Build a one-day plan for the selected stores.

    Every day-part degrades on its own – an empty store or a slot with no
    matching recipe still yields a 200 with an `error` on that slot.
    """
    modes = {dp.value: mode for dp, mode in body.modes.items()}
    try:
        return await generate_plan(catalog, body.store_ids, body.target_calories, modes)
    except PlanRequestError as exc:
        raise HTTPException(422, str(exc)) from exc
    except CatalogError as exc:
        raise HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, "Catalog unavailable") from exc


@router.post("/slot", response_model=SlotResult, status_code=status.HTTP_200_OK)
async def reroll_slot(
    body: SlotRequest,
    catalog: CatalogProvider = Depends(get_catalog),
) -> SlotResult:
    """Regenerate a single day-part, keeping its calorie share."""
    try:
        return await regenerate_slot(
            catalog, body.store_ids, body.slot, body.slot_calories, body.mode
        )
    except PlanRequestError as exc:
        raise HTTPException(422, str(exc)) from exc
    except CatalogError as exc:
        raise HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, "Catalog unavailable") from exc
