"""
Configuration and settings for the chatdrive service.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings for the FastAPI service."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # HTTP server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5000)
    log_level: str = Field(default="INFO")
    cors_origins: str = Field(default="*")

    # Document store (MongoDB)
    mongo_uri: Optional[str] = Field(default=None)
    # Overrides the database named in the URI when set.
    mongo_db_name: Optional[str] = Field(default=None)

    # Development toggles
    use_in_memory_store: bool = Field(
        default=False, validation_alias="CHATDRIVE_USE_IN_MEMORY_STORE"
    )

    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
