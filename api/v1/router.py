# api/v1/router.py
from fastapi import APIRouter

from . import generate, meals, stores

api_router = APIRouter()

api_router.include_router(stores.router, prefix="/stores", tags=["Stores"])
api_router.include_router(meals.router, prefix="/meals", tags=["Meals"])
api_router.include_router(generate.router, prefix="/generate", tags=["Generate"])
