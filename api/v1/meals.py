# api/v1/meals.py
from __future__ import annotations
from fastapi import APIRouter, Depends, HTTPException, status

from core.nutrition_math import Nutrition, ingredient_nutrition
from core.recipe_evaluator import recipe_lines
from services.catalog import CatalogError, SqlCatalog
from api.v1.deps import get_catalog
from api.v1.schemas import MealOut

router = APIRouter()


@router.get(
    "",
    response_model=list[MealOut],
    status_code=status.HTTP_200_OK,
    summary="List every recipe with its derived totals",
)
async def list_meals(catalog: SqlCatalog = Depends(get_catalog)) -> list[MealOut]:
    """
    Totals are recomputed from the ingredients on every call; store scope
    and availability are ignored here.
    """
    try:
        recipes = await catalog.recipes()
    except CatalogError as exc:
        raise HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, "Catalog unavailable") from exc

    out: list[MealOut] = []
    for r in recipes:
        totals = Nutrition.total(ingredient_nutrition(i) for i in r.ingredients).rounded()
        out.append(
            MealOut(
                id=r.id,
                name=r.name,
                meal_type=r.day_part.value if r.day_part else None,
                description=r.description,
                ready_to_eat=r.is_ready_to_eat_set,
                ingredients=recipe_lines(r),
                **totals,
            )
        )
    return out
