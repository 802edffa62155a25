from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from core.models.product import Product
from core.models.recipe import Recipe


class CatalogSnapshot(BaseModel):
    """Immutable view of everything reachable from the selected stores.

    ``products`` holds the scoped, active, calorie-known products;
    ``recipes`` is the full recipe graph restricted to active products
    (availability against ``products`` is decided later).
    """

    products: list[Product] = []
    recipes: list[Recipe] = []

    model_config = ConfigDict(frozen=True)

    @property
    def available_ids(self) -> set[int]:
        return {p.id for p in self.products}

    @property
    def ready_to_eat(self) -> list[Product]:
        return [p for p in self.products if p.is_ready_to_eat]
