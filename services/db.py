"""
services/db.py
────────────────────────────────────────────────────────────────────────
* Async SQLAlchemy v2 setup
* Models that map to the five catalog tables
  (stores, products, product_stores, meals, meal_ingredients)
* Session helpers used by routers / scripts
"""
from __future__ import annotations

from typing import AsyncGenerator

from sqlalchemy import Boolean, Float, ForeignKey, String, Text
from sqlalchemy.ext.asyncio import (
    AsyncAttrs,
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

from config import settings

# ───────── connection helper ────────────────────────────────────────
_ENGINE: AsyncEngine | None = None


async def engine() -> AsyncEngine:
    global _ENGINE
    if _ENGINE is None:
        _ENGINE = create_async_engine(settings.database_url, pool_pre_ping=True)
    return _ENGINE


# ───────── declarative base ──────────────────────────────────────────
Base = declarative_base(cls=AsyncAttrs)

# ───────── models reflect existing table layout ─────────────────────


class Store(Base):
    __tablename__ = "stores"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255))


class ProductRow(Base):
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255))
    barcode: Mapped[str | None] = mapped_column(String(64), index=True)
    category: Mapped[str | None] = mapped_column(String(64))
    calories_per_100g: Mapped[float | None] = mapped_column(Float)
    protein_per_100g: Mapped[float | None] = mapped_column(Float)
    carbs_per_100g: Mapped[float | None] = mapped_column(Float)
    fat_per_100g: Mapped[float | None] = mapped_column(Float)
    serving_unit: Mapped[str | None] = mapped_column(String(16), default="g")
    serving_weight_g: Mapped[float | None] = mapped_column(Float)
    is_ready_to_eat: Mapped[bool | None] = mapped_column(Boolean)
    status: Mapped[str] = mapped_column(String(32), default="active")
    # concrete (branded) product → its generic equivalent
    generic_product_id: Mapped[int | None] = mapped_column(
        ForeignKey("products.id"), nullable=True
    )


class ProductStore(Base):
    __tablename__ = "product_stores"

    product_id: Mapped[int] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"), primary_key=True
    )
    store_id: Mapped[int] = mapped_column(
        ForeignKey("stores.id", ondelete="CASCADE"), primary_key=True
    )


class MealRow(Base):
    __tablename__ = "meals"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255))
    meal_type: Mapped[str] = mapped_column(String(16))   # breakfast / lunch / dinner / snack
    description: Mapped[str | None] = mapped_column(Text)


class MealIngredient(Base):
    __tablename__ = "meal_ingredients"

    id: Mapped[int] = mapped_column(primary_key=True)
    meal_id: Mapped[int] = mapped_column(
        ForeignKey("meals.id", ondelete="CASCADE"), index=True
    )
    product_id: Mapped[int] = mapped_column(ForeignKey("products.id"))
    quantity: Mapped[float] = mapped_column(Float)
    unit: Mapped[str] = mapped_column(String(16), default="g")


# ───────── session helpers ───────────────────────────────────────────

async def session_factory() -> async_sessionmaker[AsyncSession]:
    eng = await engine()
    return async_sessionmaker(eng, expire_on_commit=False)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async_session = await session_factory()
    async with async_session() as session:
        yield session


async def create_tables() -> None:
    eng = await engine()
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
