"""
services/catalog.py
────────────────────────────────────────────────────────────────────────
SQL-backed catalog provider.

`SqlCatalog.load(store_ids)` answers the generator's two questions:

* which active, calorie-known products can be bought in these stores
  (concrete products superseded by a generic one are dropped when the
  `exclude_superseded_products` policy is on)
* what the recipe graph looks like, restricted to recipes whose every
  ingredient references an active product

Rows are parsed into the typed records in `core.models` here, so nothing
past this boundary ever sees an ORM object.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from core.models.catalog import CatalogSnapshot
from core.models.product import Product
from core.models.recipe import Ingredient, Recipe
from services.db import MealIngredient, MealRow, ProductRow, ProductStore, Store

_LOG = logging.getLogger(__name__)


class CatalogError(RuntimeError):
    """The catalog could not be read (DB down, bad schema …)."""


class SqlCatalog:
    def __init__(
        self,
        db: AsyncSession,
        exclude_superseded: bool | None = None,
    ) -> None:
        self._db = db
        self._exclude_superseded = (
            settings.exclude_superseded_products
            if exclude_superseded is None
            else exclude_superseded
        )

    async def load(self, store_ids: Sequence[int]) -> CatalogSnapshot:
        try:
            products = await self._scoped_products(store_ids)
            recipes = await self._recipes(active_only=True)
        except SQLAlchemyError as exc:
            _LOG.exception("catalog load failed for stores %s", list(store_ids))
            raise CatalogError("catalog unavailable") from exc
        _LOG.debug(
            "catalog for stores %s: %d products, %d recipes",
            list(store_ids), len(products), len(recipes),
        )
        return CatalogSnapshot(products=products, recipes=recipes)

    # ───────────────────────────── products ───────────────────────────
    async def _scoped_products(self, store_ids: Sequence[int]) -> list[Product]:
        stmt = (
            select(ProductRow)
            .join(ProductStore, ProductStore.product_id == ProductRow.id)
            .where(
                ProductStore.store_id.in_(list(store_ids)),
                ProductRow.status == "active",
                ProductRow.calories_per_100g.is_not(None),
            )
            .distinct()
            .order_by(ProductRow.id)
        )
        if self._exclude_superseded:
            stmt = stmt.where(ProductRow.generic_product_id.is_(None))

        rows = (await self._db.execute(stmt)).scalars().all()
        # a stored value that fails parsing (negative, non-numeric) reads as unknown kcal
        return [p for p in (Product.model_validate(r) for r in rows) if p.is_selectable]

    # ───────────────────────────── recipes ────────────────────────────
    async def recipes(self) -> list[Recipe]:
        """Every recipe, inactive ingredients included (catalog listing)."""
        try:
            return await self._recipes(active_only=False)
        except SQLAlchemyError as exc:
            _LOG.exception("recipe listing failed")
            raise CatalogError("catalog unavailable") from exc

    async def _recipes(self, active_only: bool) -> list[Recipe]:
        """All recipes with their ingredients, in id order.

        With `active_only`, a recipe that references any inactive product is
        left out entirely rather than silently losing that ingredient.
        """
        meals = (
            await self._db.execute(select(MealRow).order_by(MealRow.id))
        ).scalars().all()
        pairs = (
            await self._db.execute(
                select(MealIngredient, ProductRow)
                .join(ProductRow, MealIngredient.product_id == ProductRow.id)
                .order_by(MealIngredient.meal_id, MealIngredient.id)
            )
        ).all()

        by_meal: dict[int, list[Ingredient]] = defaultdict(list)
        tainted: set[int] = set()
        for mi, prod in pairs:
            product = Product.model_validate(prod)
            if active_only and not product.is_active:
                tainted.add(mi.meal_id)
            by_meal[mi.meal_id].append(
                Ingredient(product=product, quantity=mi.quantity, unit=mi.unit)
            )

        return [
            Recipe(
                id=m.id,
                name=m.name,
                description=m.description,
                day_part=m.meal_type,
                ingredients=by_meal.get(m.id, []),
            )
            for m in meals
            if m.id not in tainted
        ]


async def list_stores(db: AsyncSession) -> list[Store]:
    try:
        return list((await db.execute(select(Store).order_by(Store.name))).scalars().all())
    except SQLAlchemyError as exc:
        _LOG.exception("store listing failed")
        raise CatalogError("catalog unavailable") from exc
