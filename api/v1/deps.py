# api/v1/deps.py
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from services.catalog import SqlCatalog
from services.db import get_session


async def get_catalog(db: AsyncSession = Depends(get_session)) -> SqlCatalog:
    return SqlCatalog(db)
