"""
Application configuration using Pydantic Settings.

Settings are read from environment variables and an optional .env file.
"""

from functools import lru_cache
from typing import Dict, List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===========================================
    # Environment
    # ===========================================
    # Only the local SQLite document store ships with this backend
    ENVIRONMENT: Literal["local"] = "local"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # ===========================================
    # Database
    # ===========================================
    DATABASE_URL: str = "sqlite+aiosqlite:///./kidsteps.db"

    # Composite indexes provisioned on the document store, per collection.
    # Queries that touch more than one field need a matching entry here.
    COMPOSITE_INDEXES: Dict[str, List[List[str]]] = Field(
        default={
            "milestoneTemplates": [["minAgeMonths", "description"]],
            "behaviors": [["childId", "parentId", "timestamp"]],
        }
    )

    # ===========================================
    # Auth
    # ===========================================
    # Authentication is handled by an external provider; locally the mock
    # provider treats the bearer token as the user id.
    AUTH_ENABLED: bool = False

    # ===========================================
    # Server
    # ===========================================
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:9002"]
    )

    # Seconds between keep-alive comments on the milestone stream
    STREAM_KEEPALIVE_SECONDS: float = 15.0

    @property
    def is_local(self) -> bool:
        """Check if running in local environment."""
        return self.ENVIRONMENT == "local"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded only once.
    """
    return Settings()
