"""
Seed a small demo catalog (stores, products, recipes).

Usage
-----

    # built-in demo data, creating the tables first
    python -m scripts.seed_catalog --create-tables

    # custom catalog (same shape as _DEFAULT_CATALOG) in a JSON file
    python -m scripts.seed_catalog --file path/to/catalog.json
"""
from __future__ import annotations

import argparse
import asyncio
import json
from pathlib import Path
from typing import Any

from services.db import (
    MealIngredient,
    MealRow,
    ProductRow,
    ProductStore,
    Store,
    create_tables,
    session_factory,
)

# ────────────────────────────────────────────────────────────────────
_DEFAULT_CATALOG: dict[str, list[dict[str, Any]]] = {
    "stores": [
        {"id": 1, "name": "Corner Grocery"},
        {"id": 2, "name": "Hypermarket"},
    ],
    "products": [
        {"id": 1, "name": "Natural yoghurt", "category": "dairy", "calories_per_100g": 61,
         "protein_per_100g": 3.5, "carbs_per_100g": 4.7, "fat_per_100g": 3.3,
         "serving_unit": "g", "serving_weight_g": 150, "is_ready_to_eat": True, "store_ids": [1, 2]},
        {"id": 2, "name": "Oat flakes", "category": "grain", "calories_per_100g": 372,
         "protein_per_100g": 13.5, "carbs_per_100g": 58.7, "fat_per_100g": 7.0,
         "serving_unit": "g", "serving_weight_g": 50, "is_ready_to_eat": False, "store_ids": [1, 2]},
        {"id": 3, "name": "Banana", "category": "fruit", "calories_per_100g": 89,
         "protein_per_100g": 1.1, "carbs_per_100g": 22.8, "fat_per_100g": 0.3,
         "serving_unit": "piece", "serving_weight_g": 120, "is_ready_to_eat": True, "store_ids": [1, 2]},
        {"id": 4, "name": "Wholegrain bread", "category": "grain", "calories_per_100g": 247,
         "protein_per_100g": 13.0, "carbs_per_100g": 41.0, "fat_per_100g": 3.4,
         "serving_unit": "piece", "serving_weight_g": 40, "is_ready_to_eat": True, "store_ids": [1, 2]},
        {"id": 5, "name": "Cottage cheese", "category": "dairy", "calories_per_100g": 98,
         "protein_per_100g": 11.1, "carbs_per_100g": 3.4, "fat_per_100g": 4.3,
         "serving_unit": "g", "serving_weight_g": 200, "is_ready_to_eat": True, "store_ids": [1]},
        {"id": 6, "name": "Chicken breast", "category": "meat", "calories_per_100g": 165,
         "protein_per_100g": 31.0, "carbs_per_100g": 0.0, "fat_per_100g": 3.6,
         "serving_unit": "g", "serving_weight_g": 150, "is_ready_to_eat": False, "store_ids": [2]},
        {"id": 7, "name": "White rice", "category": "grain", "calories_per_100g": 360,
         "protein_per_100g": 6.7, "carbs_per_100g": 79.0, "fat_per_100g": 0.6,
         "serving_unit": "g", "serving_weight_g": 75, "is_ready_to_eat": False, "store_ids": [2]},
        {"id": 8, "name": "Roast turkey slices", "category": "meat", "calories_per_100g": 110,
         "protein_per_100g": 22.0, "carbs_per_100g": 1.5, "fat_per_100g": 1.8,
         "serving_unit": "g", "serving_weight_g": 100, "is_ready_to_eat": True, "store_ids": [1, 2]},
        {"id": 9, "name": "Cherry tomatoes", "category": "vegetable", "calories_per_100g": 18,
         "protein_per_100g": 0.9, "carbs_per_100g": 3.9, "fat_per_100g": 0.2,
         "serving_unit": "g", "serving_weight_g": 150, "is_ready_to_eat": True, "store_ids": [1, 2]},
        {"id": 10, "name": "Olive oil", "category": "sauce", "calories_per_100g": 884,
         "protein_per_100g": 0.0, "carbs_per_100g": 0.0, "fat_per_100g": 100.0,
         "serving_unit": "tbsp", "is_ready_to_eat": False, "store_ids": [1, 2]},
        {"id": 11, "name": "Walnuts", "category": "nut", "calories_per_100g": 654,
         "protein_per_100g": 15.2, "carbs_per_100g": 13.7, "fat_per_100g": 65.2,
         "serving_unit": "g", "serving_weight_g": 30, "is_ready_to_eat": True, "store_ids": [1, 2]},
        {"id": 12, "name": "Hummus", "category": "legume", "calories_per_100g": 166,
         "protein_per_100g": 7.9, "carbs_per_100g": 14.3, "fat_per_100g": 9.6,
         "serving_unit": "g", "serving_weight_g": 100, "is_ready_to_eat": True, "store_ids": [2]},
        {"id": 13, "name": "Apple", "category": "fruit", "calories_per_100g": 52,
         "protein_per_100g": 0.3, "carbs_per_100g": 13.8, "fat_per_100g": 0.2,
         "serving_unit": "piece", "serving_weight_g": 180, "is_ready_to_eat": True, "store_ids": [1, 2]},
        {"id": 14, "name": "Brand X apple", "category": "fruit", "calories_per_100g": 52,
         "protein_per_100g": 0.3, "carbs_per_100g": 13.8, "fat_per_100g": 0.2,
         "serving_unit": "piece", "serving_weight_g": 180, "is_ready_to_eat": True,
         "generic_product_id": 13, "store_ids": [1]},
    ],
    "meals": [
        {"id": 1, "name": "Porridge with banana", "meal_type": "breakfast",
         "ingredients": [{"product_id": 2, "quantity": 60, "unit": "g"},
                         {"product_id": 3, "quantity": 1, "unit": "piece"},
                         {"product_id": 1, "quantity": 100, "unit": "g"}]},
        {"id": 2, "name": "Turkey sandwich", "meal_type": "breakfast",
         "ingredients": [{"product_id": 4, "quantity": 2, "unit": "piece"},
                         {"product_id": 8, "quantity": 60, "unit": "g"},
                         {"product_id": 9, "quantity": 50, "unit": "g"}]},
        {"id": 3, "name": "Chicken with rice", "meal_type": "lunch",
         "ingredients": [{"product_id": 6, "quantity": 200, "unit": "g"},
                         {"product_id": 7, "quantity": 100, "unit": "g"},
                         {"product_id": 10, "quantity": 1, "unit": "tbsp"},
                         {"product_id": 9, "quantity": 100, "unit": "g"}]},
        {"id": 4, "name": "Cottage cheese plate", "meal_type": "dinner",
         "ingredients": [{"product_id": 5, "quantity": 200, "unit": "g"},
                         {"product_id": 4, "quantity": 2, "unit": "piece"},
                         {"product_id": 9, "quantity": 100, "unit": "g"}]},
        {"id": 5, "name": "Yoghurt with walnuts", "meal_type": "snack",
         "ingredients": [{"product_id": 1, "quantity": 150, "unit": "g"},
                         {"product_id": 11, "quantity": 15, "unit": "g"}]},
    ],
}


async def _seed(catalog: dict[str, list[dict[str, Any]]], create: bool) -> None:
    if create:
        await create_tables()

    async_session = await session_factory()
    async with async_session() as db:
        for s in catalog.get("stores", []):
            db.add(Store(**s))
        await db.flush()

        for p in catalog.get("products", []):
            p = dict(p)
            store_ids = p.pop("store_ids", [])
            row = ProductRow(status=p.pop("status", "active"), **p)
            db.add(row)
            await db.flush()
            for sid in store_ids:
                db.add(ProductStore(product_id=row.id, store_id=sid))

        for m in catalog.get("meals", []):
            m = dict(m)
            ingredients = m.pop("ingredients", [])
            meal = MealRow(**m)
            db.add(meal)
            await db.flush()
            for ing in ingredients:
                db.add(MealIngredient(meal_id=meal.id, **ing))

        await db.commit()

    print(
        f"✓ inserted {len(catalog.get('stores', []))} stores, "
        f"{len(catalog.get('products', []))} products, "
        f"{len(catalog.get('meals', []))} meals"
    )


def _load_json(path: Path) -> dict[str, list[dict[str, Any]]]:
    data = json.loads(path.read_text())
    if not isinstance(data, dict):
        raise ValueError("JSON file must contain an object with stores/products/meals lists")
    return data


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--file",
        type=Path,
        help="optional JSON file with the catalog to seed (overrides defaults)",
    )
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="create the catalog tables before inserting",
    )
    args = parser.parse_args()

    catalog = _load_json(args.file) if args.file else _DEFAULT_CATALOG
    asyncio.run(_seed(catalog, args.create_tables))


if __name__ == "__main__":
    main()
