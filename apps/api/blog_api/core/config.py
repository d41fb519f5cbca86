"""Application configuration."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    jwt_secret: str
    jwt_algorithm: str = "HS256"
    token_ttl_minutes: int | None = None
    storage_backend: Literal["memory", "sqlite"] = "memory"
    sqlite_path: str = "blog.sqlite3"
    host: str = "0.0.0.0"
    port: int = 8080

    model_config = SettingsConfigDict(env_prefix="BLOG_", extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
