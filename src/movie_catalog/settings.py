from pathlib import Path
from typing import Literal, Optional, List

from pydantic import AnyHttpUrl, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class OMDbSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="OMDB_", extra="ignore")
    api_key: SecretStr
    api_base_url: AnyHttpUrl = "http://www.omdbapi.com/"
    timeout_seconds: float = 10.0
    max_retries: int = 0  # retry policy belongs to the caller


class Settings(BaseSettings):

    # ---- Data roots ----
    data_root: Path = Path("data")
    favorites_path: Path = data_root / "favorites.json"

    # ---- app/runtime ----
    env: Literal["dev", "staging", "prod"] = "dev"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    verify_ssl: bool = True

    # ---- pagination ----
    default_page_size: int = Field(10, ge=1, le=100)
    max_page_size: int = Field(100, ge=1, le=100)

    # ---- API server configuration ----
    api_host: str = "127.0.0.1"  # localhost for dev, 0.0.0.0 for docker/prod
    api_port: int = 3001
    api_reload: bool = True  # Auto-reload on code changes (dev only)
    api_workers: int = 1  # favorites file assumes a single writer process
    cors_origins: List[str] = ["http://localhost:3000"]

    model_config = SettingsConfigDict(
        env_file = ".env",
        env_prefix="APP_",      # APP_ENV, APP_LOG_LEVEL, etc.
        env_nested_delimiter='__',
        extra = "ignore"
    )

    # ---- integrations ----
    omdb: Optional[OMDbSettings] = None  # <-- DO NOT instantiate here


def get_settings() -> Settings:
    """Singleton accessor to avoid reparsing .env on every import."""
    return Settings()
