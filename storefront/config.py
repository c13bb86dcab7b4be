from functools import lru_cache
from pathlib import Path
from typing import List, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Storefront settings, read from ``STOREFRONT_*`` variables or ``.env``."""

    app_name: str = "storefront"
    storage: Literal["file", "memory"] = Field(
        default="file", description="Where inventory and brand snapshots live"
    )
    data_dir: Path = Field(default=Path("./data"), description="Snapshot directory for file storage")
    id_strategy: Literal["uuid", "counter"] = "uuid"
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8085
    api_url: str = Field(default="http://127.0.0.1:8085", description="Base URL the CLI talks to")
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="STOREFRONT_",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def upper_level(cls, value: str) -> str:
        return value.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings()
