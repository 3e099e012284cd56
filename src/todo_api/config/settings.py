"""Application settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[3]


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables."""

    app_name: str = "todo-api"
    app_env: str = "dev"
    storage_backend: Literal["postgres", "memory"] = "postgres"
    database_url: str = ""
    rpc_prefix: str = "/rpc"

    model_config = SettingsConfigDict(
        env_prefix="TODO_API_",
        extra="ignore",
        env_file=(PROJECT_ROOT / ".env", PROJECT_ROOT / ".env.local"),
        env_file_encoding="utf-8",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
