"""Taskboard Configuration Settings."""

from functools import lru_cache
from typing import List, Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    # Application
    APP_NAME: str = "Taskboard"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    API_PREFIX: str = "/api"
    CORS_ORIGINS: str = "http://localhost:3000"
    LOG_LEVEL: str = "INFO"

    # Storage
    STORAGE_BACKEND: Literal["sql", "file", "s3", "memory"] = "sql"
    COLUMN_DELETE_POLICY: Literal["cascade", "block"] = "cascade"

    # Relational backend
    DATABASE_URL: Optional[str] = None
    DB_ECHO: bool = False

    # File backend
    DATA_DIR: str = "data"

    # Object-store backend
    S3_BUCKET_NAME: str = "kanban-app-data"
    S3_PREFIX: str = "kanban-data"
    AWS_REGION: str = "ap-northeast-1"
    S3_ENDPOINT_URL: Optional[str] = None

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _normalise_log_level(cls, value: object) -> str:
        if not isinstance(value, str) or not value.strip():
            return "INFO"
        return value.strip().upper()

    @property
    def cors_origins_list(self) -> List[str]:
        """Return the configured CORS origins as a sanitized list."""

        if not self.CORS_ORIGINS:
            return []

        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def api_prefix(self) -> str:
        """Return ``API_PREFIX`` with a leading slash and no trailing slash."""
        prefix = self.API_PREFIX.strip()
        if prefix and not prefix.startswith("/"):
            prefix = f"/{prefix}"
        prefix = prefix.rstrip("/")
        return prefix

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Return a cached ``Settings`` instance."""
    return Settings()
