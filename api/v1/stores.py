# api/v1/stores.py
from __future__ import annotations
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from services.catalog import CatalogError, list_stores
from services.db import get_session
from api.v1.schemas import StoreOut

router = APIRouter()


@router.get(
    "",
    response_model=list[StoreOut],
    status_code=status.HTTP_200_OK,
    summary="List stores, ordered by name",
)
async def stores(db: AsyncSession = Depends(get_session)) -> list[StoreOut]:
    try:
        rows = await list_stores(db)
    except CatalogError as exc:
        raise HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, "Catalog unavailable") from exc
    return [StoreOut.model_validate(s) for s in rows]
