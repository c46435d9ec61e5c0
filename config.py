"""
Centralised settings loader.

Every value can be overridden with an environment variable of the same
name (case-insensitive) or through a local `.env` file.
"""

from __future__ import annotations
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# ------------------------------------------------------------------ #
#  Master settings model
# ------------------------------------------------------------------ #
class _Settings(BaseSettings):
    # ─── runtime / DB ────────────────────────────────────────────────
    env_name: str = "local"
    database_url: str = "sqlite+aiosqlite:///./dietitian.db"
    log_level: str = "INFO"
    front_origins: str = "*"

    # ─── auth ────────────────────────────────────────────────────────
    jwt_secret: str = "changeme"
    jwt_ttl_days: int = 30

    # ─── Gemini ──────────────────────────────────────────────────────
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-2.5-flash"

    # ─── USDA FoodData Central ───────────────────────────────────────
    usda_api_key: str | None = None
    usda_base_url: str = "https://api.nal.usda.gov/fdc/v1"

    http_timeout: float = Field(15.0, gt=0)

    # allow other teammates’ env-vars without crashing
    model_config = SettingsConfigDict(
        extra="ignore", env_file=".env", env_file_encoding="utf-8"
    )

    @property
    def cors_origins(self) -> list[str]:
        if not self.front_origins or self.front_origins.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.front_origins.split(",") if o.strip()]


# ------------------------------------------------------------------ #
#  Cached singleton accessor
# ------------------------------------------------------------------ #
@lru_cache
def _cached() -> _Settings:  # pragma: no cover
    return _Settings()


settings: _Settings = _cached()
