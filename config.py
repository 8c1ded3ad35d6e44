"""
Centralised settings loader.

Every field can be overridden by an env-var of the same name (case-insensitive)
or by a `.env` file next to the process working directory.
"""

from __future__ import annotations
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# ------------------------------------------------------------------ #
#  Master settings model
# ------------------------------------------------------------------ #
class _Settings(BaseSettings):
    # ─── runtime / DB ───────────────────────────────────────────────
    env_name: str = Field("local")
    database_url: str = Field("sqlite+aiosqlite:///./nutriplan.db")
    log_level: str = Field("INFO")
    cors_origins: str = Field("*")    # comma separated

    # ─── auth ───────────────────────────────────────────────────────
    jwt_secret: str = Field("changeme")
    jwt_ttl_minutes: int = Field(60 * 24 * 7)
    admin_email: str | None = Field(None)
    check_email_domain: bool = Field(True)   # MX lookup on signup

    # allow other teammates’ env-vars without crashing
    model_config = SettingsConfigDict(
        extra="ignore", env_file=".env", env_file_encoding="utf-8"
    )

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


# ------------------------------------------------------------------ #
#  Cached singleton accessor
# ------------------------------------------------------------------ #
@lru_cache
def _cached() -> _Settings:  # pragma: no cover
    return _Settings()  # type: ignore[call-arg]


settings: _Settings = _cached()
