"""Configuration management for College Events API using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root (one level up from college_events/config.py)
_PROJECT_ROOT = Path(__file__).parent.parent
_ROOT_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(_ROOT_ENV_FILE) if _ROOT_ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database Configuration
    database_url: str = "sqlite:///./college_events.db"

    # JWT Configuration
    jwt_secret: str | None = None
    jwt_algorithm: str = "HS256"
    token_expire_hours: int = 24

    # Upload Configuration
    upload_dir: str = "uploads"
    allowed_file_types: str = "image/jpeg,image/png,image/gif"
    max_file_size: int = Field(default=5 * 1024 * 1024, gt=0)

    # Application Configuration
    app_name: str = "College Events API"
    port: int = 3001
    cors_origins: str = "http://localhost:3000"
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] | None = None

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: str | None) -> str | None:
        if isinstance(value, str):
            return value.strip().upper() or None
        return value

    @property
    def allowed_mime_types(self) -> list[str]:
        """Split the comma-separated MIME allow-list."""
        return [t.strip() for t in self.allowed_file_types.split(",") if t.strip()]

    @property
    def cors_origin_list(self) -> list[str]:
        """Split the comma-separated CORS origins."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def upload_path(self) -> Path:
        """Resolved upload directory."""
        return Path(self.upload_dir).resolve()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
