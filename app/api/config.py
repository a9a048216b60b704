"""
Configuration module.
Owns: Environment variables, settings validation.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Project root
BASE_DIR = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    # ======================
    # Record store
    # ======================
    db_uri: str = Field(..., alias="DB_URI", min_length=1)
    db_key: str = Field(
        default="",
        alias="DB_KEY",
        description="Supabase API key. Required when STORE_BACKEND=supabase.",
    )
    store_backend: str = Field(
        default="supabase",
        alias="STORE_BACKEND",
        pattern=r"^(supabase|local)$",
        description="Record store backend: 'local' (in-process) or 'supabase' (real)",
    )

    # ======================
    # Auth
    # ======================
    secret_key: str = Field(..., alias="SECRET_KEY", min_length=1)
    token_ttl_seconds: int = Field(default=86400, alias="TOKEN_TTL_SECONDS", gt=0)
    bcrypt_rounds: int = Field(default=10, alias="BCRYPT_ROUNDS", ge=4, le=31)

    # ======================
    # Rate limiting
    # ======================
    rate_limit_max_requests: int = Field(default=100, alias="RATE_LIMIT_MAX_REQUESTS", gt=0)
    rate_limit_window_seconds: int = Field(default=900, alias="RATE_LIMIT_WINDOW_SECONDS", gt=0)

    # ======================
    # Service
    # ======================
    service_env: str = Field(default="dev", alias="SERVICE_ENV")
    api_port: int = Field(default=3000, alias="PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    cors_allow_origins: list[str] = Field(default=["*"], alias="CORS_ALLOW_ORIGINS")

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
