"""
Centralised settings loader (pydantic-settings).

Everything here can be overridden through env-vars or a local `.env`.
"""

from __future__ import annotations
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# ------------------------------------------------------------------ #
#  Master settings model
# ------------------------------------------------------------------ #
class _Settings(BaseSettings):
    # ─── runtime ─────────────────────────────────────────────────────
    env_name: str = Field("local", validation_alias="ENV_NAME")
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")

    # ─── generation defaults ─────────────────────────────────────────
    # fixed seed → reproducible plans (tests, demos); None → OS entropy
    generation_seed: int | None = Field(None, validation_alias="MEAL_SEED")
    default_meal_count: int = Field(3, ge=1, validation_alias="DEFAULT_MEAL_COUNT")

    # ─── data files used by scripts/ ─────────────────────────────────
    catalog_path: str | None = Field(None, validation_alias="FOOD_CATALOG")

    # allow other teammates’ env-vars without crashing
    model_config = SettingsConfigDict(
        extra="ignore", env_file=".env", env_file_encoding="utf-8"
    )


# ------------------------------------------------------------------ #
#  Cached singleton accessor
# ------------------------------------------------------------------ #
@lru_cache
def _cached() -> _Settings:  # pragma: no cover
    return _Settings()  # type: ignore[call-arg]


settings: _Settings = _cached()
