"""
Centralised settings loader.

Every field maps onto the upper-cased env var of the same name
(``DATABASE_URL``, ``LOG_LEVEL`` …) and may also come from ``.env``.
"""

from __future__ import annotations
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


# ------------------------------------------------------------------ #
#  Master settings model
# ------------------------------------------------------------------ #
class _Settings(BaseSettings):
    # ─── runtime / DB ───────────────────────────────────────────────
    env_name: str = Field("local", description="ENV_NAME")
    database_url: str = Field(
        "sqlite+aiosqlite:///./nutricart.db", description="DATABASE_URL"
    )
    log_level: str = Field("INFO", description="LOG_LEVEL")

    # ─── catalog policy ─────────────────────────────────────────────
    # drop concrete products that have a generic counterpart linked
    exclude_superseded_products: bool = Field(
        True, description="EXCLUDE_SUPERSEDED_PRODUCTS"
    )

    # ─── HTTP ───────────────────────────────────────────────────────
    cors_origins: list[str] = Field(["*"], description="CORS_ORIGINS (JSON list)")

    # allow other teammates’ env-vars without crashing
    model_config = {"extra": "ignore", "env_file": ".env", "env_file_encoding": "utf-8"}


# ------------------------------------------------------------------ #
#  Cached singleton accessor
# ------------------------------------------------------------------ #
@lru_cache
def _cached() -> _Settings:  # pragma: no cover
    return _Settings()  # type: ignore[call-arg]


settings: _Settings = _cached()
